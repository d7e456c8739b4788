"""Image acquisition and pixel access utilities.

This module provides the image capabilities the analysis pipeline depends on:
base64 and raw byte decoding, remote fetching, and clamped rectangular
extraction with resize to a fixed grid.
"""

import base64
import logging
from typing import Optional, Tuple

import cv2
import numpy as np
import requests

from ..config import config

logger = logging.getLogger(__name__)


class ImageProcessingError(Exception):
    """Base exception for image processing errors."""
    pass


class ImageDecodingError(ImageProcessingError):
    """Exception raised when image decoding fails."""
    pass


class ImageFormatError(ImageProcessingError):
    """Exception raised when image format is invalid."""
    pass


class ImageFetchError(ImageProcessingError):
    """Exception raised when a remote image cannot be retrieved."""
    pass


def decode_image_bytes(image_bytes: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, ...) to an OpenCV image.

    Args:
        image_bytes: Encoded image file contents.

    Returns:
        Decoded image as numpy array in BGR format.

    Raises:
        ImageFormatError: If the bytes cannot be read as an image.
    """
    if not image_bytes:
        raise ImageFormatError("Image data is empty")

    nparr = np.frombuffer(image_bytes, np.uint8)

    # IMREAD_COLOR drops alpha and honours EXIF orientation
    image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageFormatError("Failed to decode image data")

    return image


def decode_base64_payload(base64_string: str) -> bytes:
    """Decode a base64 string, optionally with data URL prefix, to raw bytes.

    Args:
        base64_string: Base64 encoded image string.
            Example formats:
            - "data:image/jpeg;base64,/9j/4AAQSkZ..."
            - "/9j/4AAQSkZ..." (without prefix)

    Returns:
        The decoded bytes.

    Raises:
        ImageDecodingError: If base64 decoding fails.
    """
    # Remove data URL prefix if present
    if ';base64,' in base64_string:
        base64_string = base64_string.split(';base64,')[1]
    elif ',' in base64_string:
        base64_string = base64_string.split(',')[1]

    try:
        return base64.b64decode(base64_string)
    except Exception as e:
        raise ImageDecodingError(f"Failed to decode base64 string: {str(e)}")


def decode_base64_image(base64_string: str) -> np.ndarray:
    """Decode base64 string to OpenCV image.

    Raises:
        ImageDecodingError: If base64 decoding fails.
        ImageFormatError: If decoded data cannot be read as an image.
    """
    return decode_image_bytes(decode_base64_payload(base64_string))


def fetch_image_bytes(url: str, timeout: Optional[float] = None) -> bytes:
    """Download image bytes from a URL.

    Args:
        url: HTTP(S) location of the image.
        timeout: Request timeout in seconds; defaults to the configured value.

    Returns:
        The response body.

    Raises:
        ImageFetchError: On transport failure, non-2xx status or empty body.
    """
    timeout = config.FETCH_TIMEOUT if timeout is None else timeout
    try:
        response = requests.get(
            url,
            timeout=timeout,
            headers={'User-Agent': config.FETCH_USER_AGENT}
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise ImageFetchError(f"Failed to fetch image: {str(e)}")

    if not response.content:
        raise ImageFetchError("Fetched image is empty")

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.content


def image_size(image: np.ndarray) -> Tuple[int, int]:
    """Return (width, height) of an image array."""
    height, width = image.shape[:2]
    return width, height


def extract_region(image: np.ndarray, x: int, y: int, width: int, height: int) -> np.ndarray:
    """Extract a rectangle, clamping coordinates to the image bounds.

    Args:
        image: Input image.
        x, y: Top-left corner.
        width, height: Rectangle size.

    Returns:
        View of the clamped region, possibly empty. Alpha is discarded.
    """
    img_width, img_height = image_size(image)
    x1 = min(max(0, x), img_width)
    y1 = min(max(0, y), img_height)
    x2 = min(max(0, x + width), img_width)
    y2 = min(max(0, y + height), img_height)

    region = image[y1:y2, x1:x2]
    if region.ndim == 3 and region.shape[2] == 4:
        region = region[:, :, :3]
    return region


def resize_to_grid(region: np.ndarray, grid_size: int) -> np.ndarray:
    """Resize a region to a square grid using area interpolation.

    Raises:
        ImageFormatError: If the region is empty.
    """
    if region.size == 0:
        raise ImageFormatError("Cannot resize an empty region")
    return cv2.resize(region, (grid_size, grid_size), interpolation=cv2.INTER_AREA)
