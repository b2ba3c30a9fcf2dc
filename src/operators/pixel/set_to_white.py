"""Set To White: paints the pixel white."""

import numpy as np

from operators.pixel._common import PRESERVE_ALPHA_PARAM, with_alpha

MODE = "setToWhite"
OPERATOR_NAME = "Set To White"
DESCRIPTION = "Replaces the pixel with white."

PARAMS: dict = {"preserve_alpha": PRESERVE_ALPHA_PARAM}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    rgb = np.full((pixels.shape[0], 3), 255, dtype=np.uint8)
    return with_alpha(rgb, pixels, params)
