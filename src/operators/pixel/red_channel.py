"""Full Brightness Red Channel: red forced to 255, other channels kept."""

import numpy as np

from operators.pixel._common import PRESERVE_ALPHA_PARAM, force_channel

MODE = "randomColorFullBrightnessRedChannel"
OPERATOR_NAME = "Full Brightness Red Channel"
DESCRIPTION = "Sets the red channel to 255."

PARAMS: dict = {"preserve_alpha": PRESERVE_ALPHA_PARAM}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    return force_channel(pixels, params, 0)
