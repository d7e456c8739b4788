"""Skin tone analysis pipeline.

This module sequences the analysis as a single pass:
acquire image -> resolve face box -> extract patches -> aggregate ->
classify -> infer season. Nothing is retried; any failure raises an
:class:`~skintone.core.errors.AnalysisError` subclass.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..models.types import AnalysisResult, FaceBox, FaceBoxMethod, LabColor
from ..utils.image import (
    ImageFetchError,
    ImageProcessingError,
    decode_base64_image,
    decode_image_bytes,
    fetch_image_bytes,
    image_size,
)
from .classifiers import classify_clarity, classify_depth, classify_undertone
from .color_space import chroma, rgb_to_hex, sample_to_lab
from .errors import ImageDecodeFailed, ImageFetchFailed, InvalidRegion, MissingInput
from .sampling import PATCH_LAYOUT, extract_patches, select_representative
from .season import infer_season, overall_confidence

logger = logging.getLogger(__name__)

# Heuristic face box proportions relative to the image
HEURISTIC_WIDTH = 0.45
HEURISTIC_HEIGHT = 0.50
HEURISTIC_TOP = 0.15

# Below this chroma the photo is too gray or washed out to trust
MIN_TRUSTED_CHROMA = 4.0


def heuristic_face_box(image_width: int, image_height: int) -> FaceBox:
    """Fixed face box guess: horizontally centred, upper-middle of the frame."""
    width = int(image_width * HEURISTIC_WIDTH)
    height = int(image_height * HEURISTIC_HEIGHT)
    return FaceBox(
        x=(image_width - width) // 2,
        y=int(image_height * HEURISTIC_TOP),
        width=width,
        height=height,
    )


def resolve_face_box(
    face_box: Optional[FaceBox],
    image_width: int,
    image_height: int
) -> Tuple[FaceBox, FaceBoxMethod]:
    """Choose the face box to sample and clamp it to the image.

    A missing box, or one with any negative field, is replaced by
    :func:`heuristic_face_box`.

    Returns:
        The clamped box and whether it was provided or guessed.

    Raises:
        InvalidRegion: If the image has no area or the clamped box is empty.
    """
    if image_width <= 0 or image_height <= 0:
        raise InvalidRegion(f"Image has no area ({image_width}x{image_height})")

    if face_box is not None and face_box.is_valid():
        method = FaceBoxMethod.PROVIDED
        candidate = face_box
    else:
        if face_box is not None:
            logger.info(f"Ignoring invalid face box {face_box.as_dict()}, using heuristic")
        method = FaceBoxMethod.HEURISTIC
        candidate = heuristic_face_box(image_width, image_height)

    clamped = candidate.clamp(image_width, image_height)
    if clamped.area <= 0:
        raise InvalidRegion(
            f"Face box {candidate.as_dict()} has no area inside "
            f"{image_width}x{image_height} image"
        )
    return clamped, method


def quality_issues(sample_count: int, lab: LabColor) -> List[str]:
    """Reasons a result should be confirmed by the user; empty when trusted."""
    issues = []
    if sample_count < len(PATCH_LAYOUT):
        issues.append("Not enough stable samples")
    if chroma(lab) < MIN_TRUSTED_CHROMA:
        issues.append("Image too gray or washed out")
    return issues


def acquire_image(
    image_bytes: Optional[bytes] = None,
    image_base64: Optional[str] = None,
    image_url: Optional[str] = None
) -> Tuple[np.ndarray, str]:
    """Decode the first image source present: raw bytes, base64, then URL.

    Returns:
        The decoded BGR image and its provenance label.

    Raises:
        MissingInput: If no source was supplied.
        ImageFetchFailed: If the URL could not be downloaded.
        ImageDecodeFailed: If the data is not a readable image.
    """
    try:
        if image_bytes:
            return decode_image_bytes(image_bytes), 'bytes'
        if image_base64:
            return decode_base64_image(image_base64), 'base64'
        if image_url:
            return decode_image_bytes(fetch_image_bytes(image_url)), 'url'
    except ImageFetchError as e:
        raise ImageFetchFailed(str(e)) from e
    except ImageProcessingError as e:
        raise ImageDecodeFailed(str(e)) from e

    raise MissingInput("Missing image data")


def analyze_image(
    image: np.ndarray,
    face_box: Optional[FaceBox] = None,
    provenance: str = 'array'
) -> AnalysisResult:
    """Run the analysis on an already decoded image.

    Args:
        image: BGR or BGRA image array.
        face_box: Optional face rectangle in pixel coordinates.
        provenance: Where the image came from, for logging.

    Returns:
        The complete analysis result.

    Raises:
        InvalidRegion: If no usable face region exists.
        NoSamples: If no skin patch fits inside the face region.
    """
    width, height = image_size(image)
    logger.debug(f"[{provenance}] Image size: {width}x{height}")

    box, method = resolve_face_box(face_box, width, height)
    logger.debug(f"[{provenance}] Face box ({method.value}): {box.as_dict()}")

    samples = extract_patches(image, box)
    rgb = select_representative(samples)
    lab = sample_to_lab(rgb)

    undertone = classify_undertone(lab)
    depth = classify_depth(lab)
    clarity = classify_clarity(lab)
    season = infer_season(undertone, depth, clarity)

    logger.info(
        f"[{provenance}] samples={len(samples)} rgb=({rgb.r},{rgb.g},{rgb.b}) "
        f"lab=({lab.l:.1f},{lab.a:.1f},{lab.b:.1f}) "
        f"{undertone.label.value}/{depth.label.value}/{clarity.label.value} "
        f"-> {season.season.value} ({season.confidence:.2f})"
    )

    issues = quality_issues(len(samples), lab)
    if issues:
        logger.info(f"[{provenance}] Needs confirmation: {', '.join(issues)}")

    return AnalysisResult(
        rgb=rgb,
        hex=rgb_to_hex(rgb),
        lab=lab,
        undertone=undertone,
        depth=depth,
        clarity=clarity,
        season=season,
        confidence=overall_confidence(undertone, depth, season),
        face_box=box,
        method=method,
        sample_count=len(samples),
        quality_issues=tuple(issues),
    )


def analyze_cropped_face(cropped_face_base64: str) -> AnalysisResult:
    """Analyze a client-side face crop; the whole image is the face box."""
    try:
        image = decode_base64_image(cropped_face_base64)
    except ImageProcessingError as e:
        raise ImageDecodeFailed(str(e)) from e

    width, height = image_size(image)
    return analyze_image(image, FaceBox(0, 0, width, height), 'cropped')


def analyze(
    image_bytes: Optional[bytes] = None,
    image_base64: Optional[str] = None,
    image_url: Optional[str] = None,
    face_box: Optional[FaceBox] = None,
    cropped_face_base64: Optional[str] = None
) -> AnalysisResult:
    """Analyze skin tone and season from an image.

    A cropped face takes precedence over every other source and ignores
    ``face_box``. Otherwise exactly one image source is used; when several
    are given the first of bytes, base64 and URL wins.

    Raises:
        AnalysisError: Any subclass, see :mod:`skintone.core.errors`.
    """
    if cropped_face_base64:
        return analyze_cropped_face(cropped_face_base64)

    image, provenance = acquire_image(image_bytes, image_base64, image_url)
    return analyze_image(image, face_box, provenance)
