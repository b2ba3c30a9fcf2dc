"""Shared building blocks for pixel operators.

Operators receive an (N, 4) uint8 array of original RGBA values and return
an (N, 4) uint8 array of replacements.
"""

import numpy as np

# Channel pairs an operator can light up together: RG, GB, RB.
CHANNEL_PAIRS = np.array([[0, 1], [1, 2], [0, 2]])

PRESERVE_ALPHA_PARAM: dict = {
    "type": "bool",
    "default": False,
    "label": "Preserve Alpha",
    "description": "Keep the original alpha instead of painting fully opaque",
}

CURRENT_AS_DEFAULT_PARAM: dict = {
    "type": "bool",
    "default": False,
    "label": "Current Color As Default",
    "description": "Unlit channels keep the current color instead of 0",
}


def base_rgb(pixels: np.ndarray, params: dict) -> np.ndarray:
    """Starting RGB: the current color, or black."""
    if params.get("use_current_color_as_default", False):
        return pixels[:, :3].copy()
    return np.zeros((pixels.shape[0], 3), dtype=np.uint8)


def with_alpha(rgb: np.ndarray, pixels: np.ndarray, params: dict) -> np.ndarray:
    """Attach alpha: original if preserve_alpha, else opaque."""
    out = np.empty((rgb.shape[0], 4), dtype=np.uint8)
    out[:, :3] = rgb
    if params.get("preserve_alpha", False):
        out[:, 3] = pixels[:, 3]
    else:
        out[:, 3] = 255
    return out


def light_one_channel(rgb: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Set one uniformly chosen channel per row to 255, in place."""
    n = rgb.shape[0]
    rgb[np.arange(n), rng.integers(0, 3, n)] = 255
    return rgb


def light_channel_pair(rgb: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Set one uniformly chosen channel pair per row to 255, in place."""
    n = rgb.shape[0]
    pairs = CHANNEL_PAIRS[rng.integers(0, 3, n)]
    rgb[np.arange(n)[:, np.newaxis], pairs] = 255
    return rgb


def force_channel(pixels: np.ndarray, params: dict, channel: int) -> np.ndarray:
    """Current color with one fixed channel forced to 255."""
    rgb = pixels[:, :3].copy()
    rgb[:, channel] = 255
    return with_alpha(rgb, pixels, params)
