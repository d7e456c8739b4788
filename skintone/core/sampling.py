"""Skin patch sampling and representative color selection.

Patches are small squares at fixed positions relative to the face box: both
cheeks and the forehead. Each patch is reduced to a fixed grid before
averaging so blemishes and specular highlights carry little weight and the
cost does not depend on the input resolution.
"""

import logging
from typing import List, NamedTuple, Sequence

import numpy as np

from ..models.types import ColorSample, FaceBox
from ..utils.image import extract_region, resize_to_grid
from .errors import NoSamples

logger = logging.getLogger(__name__)

# Downsampling grid; patches smaller than this are not sampled
GRID_SIZE = 10

# Upper bound on patch side in pixels
MAX_PATCH_SIDE = 30


class PatchSpec(NamedTuple):
    name: str
    rel_x: float
    rel_y: float
    rel_side: float


PATCH_LAYOUT = (
    PatchSpec('cheek_left', 0.10, 0.60, 0.15),
    PatchSpec('cheek_right', 0.75, 0.60, 0.15),
    PatchSpec('forehead', 0.35, 0.15, 0.20),
)


def patch_rect(face_box: FaceBox, patch: PatchSpec) -> FaceBox:
    """Compute the absolute square for one patch of the layout."""
    side = int(min(MAX_PATCH_SIDE, patch.rel_side * face_box.width))
    return FaceBox(
        x=face_box.x + int(patch.rel_x * face_box.width),
        y=face_box.y + int(patch.rel_y * face_box.height),
        width=side,
        height=side,
    )


def _fits(rect: FaceBox, face_box: FaceBox) -> bool:
    return (
        rect.width >= GRID_SIZE
        and rect.x >= face_box.x
        and rect.y >= face_box.y
        and rect.x + rect.width <= face_box.x + face_box.width
        and rect.y + rect.height <= face_box.y + face_box.height
    )


def patch_rects(face_box: FaceBox) -> List[FaceBox]:
    """Return the patch squares that lie fully inside the face box.

    Patches that would overflow the face region are dropped rather than
    clipped, so small or oddly shaped boxes yield fewer samples.
    """
    rects = []
    for patch in PATCH_LAYOUT:
        rect = patch_rect(face_box, patch)
        if _fits(rect, face_box):
            rects.append(rect)
        else:
            logger.debug(
                f"Dropping {patch.name} patch {rect.as_dict()}, "
                f"too small or outside face box {face_box.as_dict()}"
            )
    return rects


def mean_color(region: np.ndarray) -> ColorSample:
    """Average a BGR region after reducing it to the sampling grid."""
    grid = resize_to_grid(region, GRID_SIZE)
    blue, green, red = grid.reshape(-1, grid.shape[2]).mean(axis=0)[:3]
    return ColorSample(
        r=int(round(float(red))),
        g=int(round(float(green))),
        b=int(round(float(blue))),
    )


def extract_patches(image: np.ndarray, face_box: FaceBox) -> List[ColorSample]:
    """Sample cheek and forehead colors from a face region.

    Args:
        image: Decoded BGR(A) image.
        face_box: Face rectangle, already clamped to the image.

    Returns:
        One ColorSample per qualifying patch, in layout order.

    Raises:
        NoSamples: If no patch fits inside the face box.
    """
    samples = []
    for rect in patch_rects(face_box):
        region = extract_region(image, rect.x, rect.y, rect.width, rect.height)
        if region.size == 0:
            continue
        samples.append(mean_color(region))

    if not samples:
        raise NoSamples(f"No skin patch fits inside face box {face_box.as_dict()}")

    return samples


def select_representative(samples: Sequence[ColorSample]) -> ColorSample:
    """Pick the brightness median of the samples.

    For an even count the upper of the two middle samples (index n // 2) is
    returned; no averaging takes place.

    Raises:
        NoSamples: If ``samples`` is empty.
    """
    if not samples:
        raise NoSamples("Cannot select a representative from zero samples")

    ordered = sorted(samples, key=lambda s: s.brightness)
    return ordered[len(ordered) // 2]
