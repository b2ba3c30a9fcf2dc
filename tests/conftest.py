"""Shared fixtures: synthetic rasters and encoded sources."""

import io

import numpy as np
import pytest
from PIL import Image


def solid(h: int, w: int, rgba: tuple[int, int, int, int]) -> np.ndarray:
    """A (h, w, 4) raster filled with one color."""
    raster = np.empty((h, w, 4), dtype=np.uint8)
    raster[:, :] = rgba
    return raster


def random_raster(h: int = 32, w: int = 32, seed: int = 42) -> np.ndarray:
    """A deterministic raster with varied pixel values (alpha included)."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, (h, w, 4), dtype=np.uint8)


def gradient(h: int = 48, w: int = 64) -> np.ndarray:
    """An opaque RGB gradient, not blank, compresses like a photo."""
    raster = np.zeros((h, w, 4), dtype=np.uint8)
    raster[:, :, 0] = np.linspace(0, 255, w, dtype=np.uint8)
    raster[:, :, 1] = 128
    raster[:, :, 2] = np.linspace(255, 0, h, dtype=np.uint8)[:, np.newaxis]
    raster[:, :, 3] = 255
    return raster


def png_bytes(raster: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(raster).save(buf, format="PNG")
    return buf.getvalue()


def decode(data: bytes) -> np.ndarray:
    with Image.open(io.BytesIO(data)) as img:
        return np.array(img.convert("RGBA"))


@pytest.fixture
def gradient_raster():
    return gradient()


@pytest.fixture
def gradient_png(tmp_path):
    """A gradient PNG written to disk; yields its path."""
    path = tmp_path / "gradient.png"
    path.write_bytes(png_bytes(gradient()))
    return path


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
