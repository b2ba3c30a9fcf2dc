"""Erase: clears the pixel to fully transparent."""

import numpy as np

MODE = "erase"
OPERATOR_NAME = "Erase"
DESCRIPTION = "Erases the pixel."

PARAMS: dict = {}  # preserve_alpha never applies to a cleared pixel


def apply(pixels: np.ndarray, params: dict, *, rng: np.random.Generator) -> np.ndarray:
    return np.zeros((pixels.shape[0], 4), dtype=np.uint8)
