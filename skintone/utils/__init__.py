"""Utility functions for image acquisition and processing"""
from .image import (
    decode_image_bytes,
    decode_base64_payload,
    decode_base64_image,
    fetch_image_bytes,
    image_size,
    extract_region,
    resize_to_grid,
    ImageProcessingError,
    ImageDecodingError,
    ImageFormatError,
    ImageFetchError
)

__all__ = [
    'decode_image_bytes',
    'decode_base64_payload',
    'decode_base64_image',
    'fetch_image_bytes',
    'image_size',
    'extract_region',
    'resize_to_grid',
    'ImageProcessingError',
    'ImageDecodingError',
    'ImageFormatError',
    'ImageFetchError'
]
