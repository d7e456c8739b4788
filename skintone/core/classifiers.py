"""Rule based skin attribute classifiers operating on a single Lab color."""

from ..models.types import (
    Clarity,
    ClarityResult,
    Depth,
    DepthResult,
    LabColor,
    Undertone,
    UndertoneResult,
)
from .color_space import chroma

# a/b offset beyond which the hue direction counts as warm or cool
UNDERTONE_B_THRESHOLD = 5.0

# Lightness bands
LIGHT_ABOVE = 70.0
DEEP_AT_OR_BELOW = 40.0

# Chroma bands
CLEAR_FROM = 10.0
VIVID_FROM = 20.0


def classify_undertone(lab: LabColor) -> UndertoneResult:
    """Classify hue direction in the a/b plane as warm, cool or neutral.

    Warm requires a yellow (b) and red (a) lean; cool is a blue lean, or a
    green-blue quadrant. Confidence grows with chroma for warm/cool and
    shrinks with chroma for neutral.
    """
    d = chroma(lab)

    if lab.b > UNDERTONE_B_THRESHOLD and lab.a > 0:
        return UndertoneResult(Undertone.WARM, min(0.95, 0.7 + d / 50))
    if lab.b < -UNDERTONE_B_THRESHOLD or (lab.a < 0 and lab.b < 0):
        return UndertoneResult(Undertone.COOL, min(0.95, 0.7 + abs(d) / 50))
    return UndertoneResult(Undertone.NEUTRAL, max(0.5, 0.8 - d / 30))


def classify_depth(lab: LabColor) -> DepthResult:
    """Classify lightness into light (L > 70), medium or deep (L <= 40)."""
    lightness = lab.l

    if lightness > LIGHT_ABOVE:
        confidence = min(0.95, 0.7 + (lightness - LIGHT_ABOVE) / 30 * 0.25)
        return DepthResult(Depth.LIGHT, confidence)
    if lightness > DEEP_AT_OR_BELOW:
        # highest in the middle of the band, lowest at either edge
        distance = min(lightness - DEEP_AT_OR_BELOW, LIGHT_ABOVE - lightness)
        return DepthResult(Depth.MEDIUM, min(0.9, 0.7 + distance / 30 * 0.2))
    confidence = min(0.95, 0.7 + (DEEP_AT_OR_BELOW - lightness) / 40 * 0.25)
    return DepthResult(Depth.DEEP, confidence)


def classify_clarity(lab: LabColor) -> ClarityResult:
    d = chroma(lab)
    if d < CLEAR_FROM:
        return ClarityResult(Clarity.MUTED)
    if d < VIVID_FROM:
        return ClarityResult(Clarity.CLEAR)
    return ClarityResult(Clarity.VIVID)
