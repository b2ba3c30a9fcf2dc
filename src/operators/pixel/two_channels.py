"""Full Brightness Two Channels: one of the pairs RG, GB, RB set to 255."""

import numpy as np

from operators.pixel._common import (
    CURRENT_AS_DEFAULT_PARAM,
    PRESERVE_ALPHA_PARAM,
    base_rgb,
    light_channel_pair,
    with_alpha,
)

MODE = "randomColorFullBrightnessTwoChannels"
OPERATOR_NAME = "Full Brightness Two Channels"
DESCRIPTION = "#FFFF00, #00FFFF or #FF00FF, or the current color with two channels maxed."

PARAMS: dict = {
    "preserve_alpha": PRESERVE_ALPHA_PARAM,
    "use_current_color_as_default": CURRENT_AS_DEFAULT_PARAM,
}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    rgb = light_channel_pair(base_rgb(pixels, params), rng)
    return with_alpha(rgb, pixels, params)
