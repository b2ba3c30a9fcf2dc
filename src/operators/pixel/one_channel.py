"""Full Brightness One Channel: one of R, G, B chosen uniformly and set to 255."""

import numpy as np

from operators.pixel._common import (
    CURRENT_AS_DEFAULT_PARAM,
    PRESERVE_ALPHA_PARAM,
    base_rgb,
    light_one_channel,
    with_alpha,
)

MODE = "randomColorFullBrightnessOneChannel"
OPERATOR_NAME = "Full Brightness One Channel"
DESCRIPTION = "#FF0000, #00FF00 or #0000FF, or the current color with one channel maxed."

PARAMS: dict = {
    "preserve_alpha": PRESERVE_ALPHA_PARAM,
    "use_current_color_as_default": CURRENT_AS_DEFAULT_PARAM,
}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    rgb = light_one_channel(base_rgb(pixels, params), rng)
    return with_alpha(rgb, pixels, params)
