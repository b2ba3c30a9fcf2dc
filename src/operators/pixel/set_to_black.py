"""Set To Black: paints the pixel black."""

import numpy as np

from operators.pixel._common import PRESERVE_ALPHA_PARAM, with_alpha

MODE = "setToBlack"
OPERATOR_NAME = "Set To Black"
DESCRIPTION = "Replaces the pixel with black."

PARAMS: dict = {"preserve_alpha": PRESERVE_ALPHA_PARAM}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    rgb = np.zeros((pixels.shape[0], 3), dtype=np.uint8)
    return with_alpha(rgb, pixels, params)
