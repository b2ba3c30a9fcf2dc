"""Random Color: replaces the pixel with a uniformly random color."""

import numpy as np

from operators.pixel._common import PRESERVE_ALPHA_PARAM, with_alpha

MODE = "randomColor"
OPERATOR_NAME = "Random Color"
DESCRIPTION = "Replaces the pixel with a random color."

PARAMS: dict = {"preserve_alpha": PRESERVE_ALPHA_PARAM}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    """R, G, B each uniform in [0, 255]."""
    rgb = rng.integers(0, 256, (pixels.shape[0], 3), dtype=np.uint8)
    return with_alpha(rgb, pixels, params)
