"""Full Brightness: each channel is independently lit to 255 or left at its base."""

import numpy as np

from operators.pixel._common import (
    CURRENT_AS_DEFAULT_PARAM,
    PRESERVE_ALPHA_PARAM,
    base_rgb,
    with_alpha,
)

MODE = "randomColorFullBrightness"
OPERATOR_NAME = "Full Brightness"
DESCRIPTION = (
    "Replaces the red, green, and blue channels with 0 or 255, "
    "each with a 50% chance."
)

PARAMS: dict = {
    "preserve_alpha": PRESERVE_ALPHA_PARAM,
    "use_current_color_as_default": CURRENT_AS_DEFAULT_PARAM,
}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    rgb = base_rgb(pixels, params)
    lit = rng.random(rgb.shape) >= 0.5
    rgb[lit] = 255
    return with_alpha(rgb, pixels, params)
