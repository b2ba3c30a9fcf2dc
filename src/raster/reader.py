"""Image decoding via Pillow."""

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from security import validate_raster_size, validate_source

logger = logging.getLogger(__name__)


class RasterDecodeError(ValueError):
    """Raised when a source cannot be turned into an RGBA raster."""


def raster_from_array(arr: np.ndarray) -> np.ndarray:
    """Normalize a gray, RGB or RGBA uint8 array to a fresh (H, W, 4) RGBA copy."""
    arr = np.asarray(arr)
    if arr.dtype != np.uint8:
        raise RasterDecodeError(f"Expected uint8 pixels, got {arr.dtype}")
    if arr.ndim == 2:
        arr = arr[:, :, np.newaxis].repeat(3, axis=2)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise RasterDecodeError(f"Expected (H, W), (H, W, 3) or (H, W, 4), got {arr.shape}")
    h, w = arr.shape[:2]
    out = np.empty((h, w, 4), dtype=np.uint8)
    out[:, :, :3] = arr[:, :, :3]
    out[:, :, 3] = arr[:, :, 3] if arr.shape[2] == 4 else 255
    return out


def load_raster(src) -> np.ndarray:
    """Decode a source into an RGBA uint8 array of shape (H, W, 4).

    Args:
        src: A path (str or Path), raw encoded bytes, a binary file object,
             or an already decoded pixel array.

    Raises:
        RasterDecodeError: If the source is rejected or cannot be decoded.
    """
    if isinstance(src, np.ndarray):
        raster = raster_from_array(src)
        _check_size(raster)
        return raster

    if isinstance(src, (str, Path)):
        errors = validate_source(str(src))
        if errors:
            raise RasterDecodeError("; ".join(errors))
        handle = open(src, "rb")
    elif isinstance(src, (bytes, bytearray, memoryview)):
        handle = io.BytesIO(bytes(src))
    elif hasattr(src, "read"):
        handle = src
    else:
        raise RasterDecodeError(f"Unsupported source type: {type(src).__name__}")

    try:
        with Image.open(handle) as img:
            # GIFs decode to their first frame.
            img.seek(0)
            raster = np.array(img.convert("RGBA"))
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Decode failed: %s", e)
        raise RasterDecodeError(f"Failed to decode image: {type(e).__name__}") from e
    finally:
        if handle is not src:
            handle.close()

    _check_size(raster)
    logger.debug("Decoded raster %dx%d", raster.shape[1], raster.shape[0])
    return raster


def _check_size(raster: np.ndarray):
    errors = validate_raster_size(raster.shape[1], raster.shape[0])
    if errors:
        raise RasterDecodeError("; ".join(errors))
