"""Four-season inference from undertone, depth and clarity.

The decision table is materialised once as a dict keyed by every
``(Undertone, Depth, Clarity)`` combination, so lookups are total and the
table can be inspected or dumped directly.
"""

from itertools import product
from typing import Dict, Tuple

from ..models.types import (
    Clarity,
    ClarityResult,
    Depth,
    DepthResult,
    Season,
    SeasonResult,
    Undertone,
    UndertoneResult,
)

SeasonKey = Tuple[Undertone, Depth, Clarity]

STRONG_MATCH = 0.80
WEAK_MATCH = 0.65

BRIGHT = (Clarity.CLEAR, Clarity.VIVID)


def _rule(undertone: Undertone, depth: Depth, clarity: Clarity) -> SeasonResult:
    if undertone is Undertone.WARM:
        if depth is Depth.LIGHT and clarity in BRIGHT:
            return SeasonResult(Season.SPRING, STRONG_MATCH)
        if depth in (Depth.MEDIUM, Depth.DEEP) and clarity is Clarity.MUTED:
            return SeasonResult(Season.AUTUMN, STRONG_MATCH)
        season = Season.SPRING if depth is Depth.LIGHT else Season.AUTUMN
        return SeasonResult(season, WEAK_MATCH)

    if undertone is Undertone.COOL:
        if depth is Depth.LIGHT and clarity is Clarity.MUTED:
            return SeasonResult(Season.SUMMER, STRONG_MATCH)
        if depth is Depth.DEEP and clarity in BRIGHT:
            return SeasonResult(Season.WINTER, STRONG_MATCH)
        season = Season.SUMMER if depth is Depth.LIGHT else Season.WINTER
        return SeasonResult(season, WEAK_MATCH)

    # neutral: depth alone decides
    if depth is Depth.LIGHT:
        return SeasonResult(Season.SUMMER, 0.60)
    if depth is Depth.DEEP:
        return SeasonResult(Season.WINTER, 0.60)
    return SeasonResult(Season.AUTUMN, 0.55)


SEASON_TABLE: Dict[SeasonKey, SeasonResult] = {
    key: _rule(*key) for key in product(Undertone, Depth, Clarity)
}


def infer_season(undertone: UndertoneResult, depth: DepthResult, clarity: ClarityResult) -> SeasonResult:
    """Look up the season for a set of attribute classifications."""
    return SEASON_TABLE[(undertone.label, depth.label, clarity.label)]


def overall_confidence(undertone: UndertoneResult, depth: DepthResult, season: SeasonResult) -> float:
    """Mean of undertone, depth and season confidences; clarity is excluded."""
    return (undertone.confidence + depth.confidence + season.confidence) / 3
