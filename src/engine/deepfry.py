"""Deepfry: whole-image contrast boost followed by repeated low-quality JPEG round trips."""

import logging

import numpy as np

from raster.writer import decode, encode_jpeg

logger = logging.getLogger(__name__)


def contrast_factor(val: float) -> float:
    """Contrast multiplier for a contrast value (0.5 -> 3.0, 1.0 -> 255)."""
    v = val * 255
    return 255.0 if v == 255 else (v + 255) / (255 - v)


def apply_contrast(raster: np.ndarray, val: float) -> np.ndarray:
    """Apply a contrast curve to RGB, leaving alpha untouched.

    c' = factor * (c - 128) + 128, rounded half-to-even and clamped to
    [0, 255] like a clamped byte buffer.
    """
    factor = contrast_factor(val)
    output = raster.copy()
    rgb = raster[:, :, :3].astype(np.float64)
    adjusted = np.rint(factor * (rgb - 128.0) + 128.0)
    output[:, :, :3] = np.clip(np.nan_to_num(adjusted, nan=0.0), 0, 255).astype(np.uint8)
    return output


def jpeg_damage(raster: np.ndarray, rounds: int, quality: float) -> np.ndarray:
    """Re-encode as low-quality JPEG ``rounds`` times, drawing each result back.

    JPEG has no alpha, so after the first round the canvas is opaque.
    Zero rounds returns an unchanged copy.
    """
    output = raster.copy()
    for i in range(rounds):
        data = encode_jpeg(output, quality=quality, progressive=False, chroma_subsampling=True)
        output = decode(data)
        logger.debug("Deepfry round %d/%d: %d bytes", i + 1, rounds, len(data))
    return output


def deepfry(
    raster: np.ndarray,
    contrast: float = 0.5,
    rounds: int = 10,
    quality: float = 0.25,
) -> np.ndarray:
    """Contrast boost, then ``rounds`` JPEG round trips at ``quality``."""
    logger.debug(
        "Deepfry %dx%d: contrast=%s rounds=%d quality=%s",
        raster.shape[1],
        raster.shape[0],
        contrast,
        rounds,
        quality,
    )
    return jpeg_damage(apply_contrast(raster, contrast), rounds, quality)
