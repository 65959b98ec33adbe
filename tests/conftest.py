"""
Test configuration and fixtures for Palette Studio tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palette_studio.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def encode_png():
    """Return a helper that encodes an RGB(A) uint8 array as PNG bytes."""
    def _encode(array: np.ndarray) -> bytes:
        buffer = io.BytesIO()
        Image.fromarray(array).save(buffer, format="PNG")
        return buffer.getvalue()
    return _encode


@pytest.fixture
def split_image():
    """100x50 RGB image: left half pure red, right half pure blue."""
    img = np.zeros((50, 100, 3), dtype=np.uint8)
    img[:, :50] = (255, 0, 0)
    img[:, 50:] = (0, 0, 255)
    return img
