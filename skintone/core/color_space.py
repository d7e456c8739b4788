"""sRGB to CIE Lab conversion under the D65 illuminant."""

import math

from ..models.types import ColorSample, LabColor

# D65 reference white
XN = 0.95047
YN = 1.0
ZN = 1.08883

# CIE f(t) breakpoint and linear segment
EPSILON = 0.008856
KAPPA_SLOPE = 7.787


def _srgb_to_linear(channel: int) -> float:
    c = channel / 255
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def _lab_f(t: float) -> float:
    if t > EPSILON:
        return t ** (1 / 3)
    return KAPPA_SLOPE * t + 16 / 116


def rgb_to_lab(r: int, g: int, b: int) -> LabColor:
    """Convert an 8-bit sRGB triple to CIE Lab.

    Args:
        r, g, b: Channel values in [0, 255].

    Returns:
        LabColor with L nominally in [0, 100].
    """
    rl = _srgb_to_linear(r)
    gl = _srgb_to_linear(g)
    bl = _srgb_to_linear(b)

    x = (rl * 0.4124564 + gl * 0.3575761 + bl * 0.1804375) / XN
    y = (rl * 0.2126729 + gl * 0.7151522 + bl * 0.0721750) / YN
    z = (rl * 0.0193339 + gl * 0.1191920 + bl * 0.9503041) / ZN

    fx = _lab_f(x)
    fy = _lab_f(y)
    fz = _lab_f(z)

    return LabColor(
        l=116 * fy - 16,
        a=500 * (fx - fy),
        b=200 * (fy - fz),
    )


def sample_to_lab(sample: ColorSample) -> LabColor:
    return rgb_to_lab(sample.r, sample.g, sample.b)


def chroma(lab: LabColor) -> float:
    """Distance from the neutral axis in the a/b plane."""
    return math.sqrt(lab.a * lab.a + lab.b * lab.b)


def rgb_to_hex(sample: ColorSample) -> str:
    return f"#{sample.r:02x}{sample.g:02x}{sample.b:02x}"
