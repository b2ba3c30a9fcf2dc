"""Full Brightness Green Channel: green forced to 255, other channels kept."""

import numpy as np

from operators.pixel._common import PRESERVE_ALPHA_PARAM, force_channel

MODE = "randomColorFullBrightnessGreenChannel"
OPERATOR_NAME = "Full Brightness Green Channel"
DESCRIPTION = "Sets the green channel to 255."

PARAMS: dict = {"preserve_alpha": PRESERVE_ALPHA_PARAM}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    return force_channel(pixels, params, 1)
