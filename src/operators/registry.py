"""Operator registry: central lookup for all per-pixel corruption operators."""

from typing import Any, Callable

OperatorFn = Callable[..., Any]

_REGISTRY: dict[str, dict] = {}

# Red/Green/Blue channel operators are selectable directly but never drawn by "random".
_RANDOM_POOL = (
    "randomColor",
    "randomColorFullBrightness",
    "randomColorFullBrightnessOneChannel",
    "randomColorFullBrightnessOneOrTwoChannels",
    "randomColorFullBrightnessTwoChannels",
    "erase",
    "setToWhite",
    "setToBlack",
    "invert",
)


def register(mode: str, fn: OperatorFn, params: dict, name: str, description: str):
    """Register an operator under its mode name."""
    _REGISTRY[mode] = {
        "fn": fn,
        "params": params,
        "name": name,
        "description": description,
    }


def get(mode: str) -> dict | None:
    """Get operator info by mode name. None for unknown and whole-image modes."""
    return _REGISTRY.get(mode)


def list_all() -> list[dict]:
    """List all registered operators with metadata."""
    return [
        {
            "mode": mode,
            "name": info["name"],
            "description": info["description"],
            "params": info["params"],
        }
        for mode, info in _REGISTRY.items()
    ]


def random_pool() -> list[str]:
    """Modes the "random" selector draws from, in draw-index order."""
    return [mode for mode in _RANDOM_POOL if mode in _REGISTRY]


def _auto_register():
    """Import and register all built-in operators."""
    from operators.pixel import (
        blue_channel,
        erase,
        full_brightness,
        green_channel,
        invert,
        one_channel,
        one_or_two_channels,
        random_color,
        red_channel,
        set_to_black,
        set_to_white,
        two_channels,
    )

    for mod in [
        random_color,
        full_brightness,
        one_channel,
        one_or_two_channels,
        two_channels,
        red_channel,
        green_channel,
        blue_channel,
        erase,
        set_to_white,
        set_to_black,
        invert,
    ]:
        register(mod.MODE, mod.apply, mod.PARAMS, mod.OPERATOR_NAME, mod.DESCRIPTION)


_auto_register()
