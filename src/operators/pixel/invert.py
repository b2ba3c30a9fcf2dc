"""Invert: RGB replaced by 255 - channel."""

import numpy as np

from operators.pixel._common import PRESERVE_ALPHA_PARAM, with_alpha

MODE = "invert"
OPERATOR_NAME = "Invert"
DESCRIPTION = "Inverts the pixel."

PARAMS: dict = {"preserve_alpha": PRESERVE_ALPHA_PARAM}


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    """Invert RGB channels. Applying twice restores the original RGB."""
    return with_alpha(255 - pixels[:, :3], pixels, params)
