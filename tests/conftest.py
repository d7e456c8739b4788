"""
Test configuration and fixtures for the skin tone analysis tests.
"""
import base64

import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from skintone.main import app


def solid_image(rgb, width=400, height=400):
    """Create a BGR image filled with a single RGB color."""
    r, g, b = rgb
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :] = (b, g, r)
    return image


def encode_png(image):
    success, buffer = cv2.imencode('.png', image)
    assert success
    return buffer.tobytes()


def encode_base64(image):
    return base64.b64encode(encode_png(image)).decode('ascii')


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def light_warm_image():
    """Light warm skin tone, classifies as spring."""
    return solid_image((230, 190, 160))


@pytest.fixture
def noisy_image():
    """Deterministic textured image for repeatability checks."""
    rng = np.random.default_rng(seed=42)
    base = solid_image((200, 150, 120), 320, 320).astype(np.int16)
    noise = rng.integers(-25, 26, size=base.shape, dtype=np.int16)
    return np.clip(base + noise, 0, 255).astype(np.uint8)
