"""Data models and type definitions"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
from typing_extensions import TypedDict


class Undertone(str, Enum):
    WARM = "warm"
    COOL = "cool"
    NEUTRAL = "neutral"


class Depth(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    DEEP = "deep"


class Clarity(str, Enum):
    MUTED = "muted"
    CLEAR = "clear"
    VIVID = "vivid"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class FaceBoxMethod(str, Enum):
    PROVIDED = "provided"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class FaceBox:
    """Axis-aligned face rectangle in image pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    def is_valid(self) -> bool:
        """True if no field is negative."""
        return min(self.x, self.y, self.width, self.height) >= 0

    def clamp(self, image_width: int, image_height: int) -> "FaceBox":
        """Clamp the box so it lies inside an image of the given size.

        The result may have zero area when the box starts outside the image.
        """
        x = min(max(0, self.x), image_width)
        y = min(max(0, self.y), image_height)
        return FaceBox(
            x=x,
            y=y,
            width=max(0, min(self.width, image_width - x)),
            height=max(0, min(self.height, image_height - y)),
        )

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_dict(self) -> "Box":
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class ColorSample:
    r: int
    g: int
    b: int

    @property
    def brightness(self) -> float:
        return (self.r + self.g + self.b) / 3


@dataclass(frozen=True)
class LabColor:
    l: float
    a: float
    b: float


@dataclass(frozen=True)
class UndertoneResult:
    label: Undertone
    confidence: float


@dataclass(frozen=True)
class DepthResult:
    label: Depth
    confidence: float


@dataclass(frozen=True)
class ClarityResult:
    """Clarity is categorical only; it carries no surfaced confidence."""

    label: Clarity


@dataclass(frozen=True)
class SeasonResult:
    season: Season
    confidence: float


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable outcome of one skin tone analysis.

    Attributes:
        rgb: Representative skin color.
        hex: ``rgb`` as a ``#rrggbb`` string.
        lab: ``rgb`` converted to CIE Lab (D65).
        undertone: Warm/cool/neutral classification.
        depth: Light/medium/deep classification.
        clarity: Muted/clear/vivid classification.
        season: Four-season classification.
        confidence: Mean of undertone, depth and season confidences.
        face_box: Face rectangle actually sampled.
        method: Whether ``face_box`` came from the caller or the heuristic.
        sample_count: Number of patches that contributed.
        quality_issues: Reasons the result should be confirmed by the user.
    """

    rgb: ColorSample
    hex: str
    lab: LabColor
    undertone: UndertoneResult
    depth: DepthResult
    clarity: ClarityResult
    season: SeasonResult
    confidence: float
    face_box: FaceBox
    method: FaceBoxMethod
    sample_count: int = 0
    quality_issues: Tuple[str, ...] = ()

    @property
    def needs_confirmation(self) -> bool:
        return bool(self.quality_issues)

    def to_response(self) -> "AnalysisResponse":
        """Render the wire shape returned by the HTTP API."""
        return {
            'rgb': {'r': self.rgb.r, 'g': self.rgb.g, 'b': self.rgb.b},
            'hex': self.hex,
            'lab': {
                'l': round(self.lab.l, 1),
                'a': round(self.lab.a, 1),
                'b': round(self.lab.b, 1),
            },
            'undertone': self.undertone.label.value,
            'depth': self.depth.label.value,
            'clarity': self.clarity.label.value,
            'season': self.season.season.value,
            'seasonConfidence': round(self.season.confidence, 2),
            'confidence': round(self.confidence, 2),
            'needsConfirmation': self.needs_confirmation,
            'qualityIssues': list(self.quality_issues),
            'diagnostics': {
                'method': self.method.value,
                'faceBox': self.face_box.as_dict(),
                'sampleCount': self.sample_count,
            },
        }


# Wire types

class Box(TypedDict):
    x: int
    y: int
    width: int
    height: int


class FaceBoxPayload(TypedDict):
    """Face box as sent by clients; detectors often emit fractional pixels."""

    x: float
    y: float
    width: float
    height: float


class RGBPayload(TypedDict):
    r: int
    g: int
    b: int


class LabPayload(TypedDict):
    l: float
    a: float
    b: float


class Diagnostics(TypedDict):
    method: str
    faceBox: Box
    sampleCount: int


class AnalysisResponse(TypedDict):
    rgb: RGBPayload
    hex: str
    lab: LabPayload
    undertone: str
    depth: str
    clarity: str
    season: str
    seasonConfidence: float
    confidence: float
    needsConfirmation: bool
    qualityIssues: List[str]
    diagnostics: Diagnostics


class SkinToneRequest(TypedDict, total=False):
    imageBase64: Optional[str]
    imageUrl: Optional[str]
    croppedFaceBase64: Optional[str]
    faceBox: Optional[FaceBoxPayload]


class FallbackResponse(TypedDict):
    error: str
    undertone: str
    depth: str
    clarity: str
    season: str
    seasonConfidence: float
    needsConfirmation: bool
    confidence: float


class ErrorResponse(TypedDict):
    error: str
    message: str
