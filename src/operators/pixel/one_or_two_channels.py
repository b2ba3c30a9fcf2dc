"""Full Brightness One Or Two Channels: coin flip between a single channel and a pair."""

import numpy as np

from operators.pixel._common import (
    CURRENT_AS_DEFAULT_PARAM,
    PRESERVE_ALPHA_PARAM,
    base_rgb,
    light_channel_pair,
    light_one_channel,
    with_alpha,
)

MODE = "randomColorFullBrightnessOneOrTwoChannels"
OPERATOR_NAME = "Full Brightness One Or Two Channels"
DESCRIPTION = (
    "#FF0000, #00FF00, #0000FF, #FFFF00, #FF00FF or #00FFFF, or the current "
    "color with one or two channels maxed."
)

PARAMS: dict = {
    "preserve_alpha": PRESERVE_ALPHA_PARAM,
    "use_current_color_as_default": CURRENT_AS_DEFAULT_PARAM,
}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    rgb = base_rgb(pixels, params)
    single = rng.random(rgb.shape[0]) < 0.5
    if single.any():
        rgb[single] = light_one_channel(rgb[single], rng)
    if (~single).any():
        rgb[~single] = light_channel_pair(rgb[~single], rng)
    return with_alpha(rgb, pixels, params)
