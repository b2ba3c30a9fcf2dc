"""Corruption configuration, resolved once, before any pixel is touched."""

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration value is invalid. Always fatal."""


class Mode(Enum):
    RANDOM_COLOR = "randomColor"
    FULL_BRIGHTNESS = "randomColorFullBrightness"
    FULL_BRIGHTNESS_ONE_CHANNEL = "randomColorFullBrightnessOneChannel"
    FULL_BRIGHTNESS_ONE_OR_TWO_CHANNELS = "randomColorFullBrightnessOneOrTwoChannels"
    FULL_BRIGHTNESS_TWO_CHANNELS = "randomColorFullBrightnessTwoChannels"
    FULL_BRIGHTNESS_RED_CHANNEL = "randomColorFullBrightnessRedChannel"
    FULL_BRIGHTNESS_GREEN_CHANNEL = "randomColorFullBrightnessGreenChannel"
    FULL_BRIGHTNESS_BLUE_CHANNEL = "randomColorFullBrightnessBlueChannel"
    ERASE = "erase"
    SET_TO_WHITE = "setToWhite"
    SET_TO_BLACK = "setToBlack"
    INVERT = "invert"
    DEEPFRY = "deepfry"
    RANDOM = "random"


# Modes the "random" selector may pick from, plus deepfry (excluded at draw time).
NON_RANDOM_MODES: tuple[Mode, ...] = (
    Mode.RANDOM_COLOR,
    Mode.FULL_BRIGHTNESS,
    Mode.FULL_BRIGHTNESS_ONE_CHANNEL,
    Mode.FULL_BRIGHTNESS_ONE_OR_TWO_CHANNELS,
    Mode.FULL_BRIGHTNESS_TWO_CHANNELS,
    Mode.ERASE,
    Mode.SET_TO_WHITE,
    Mode.SET_TO_BLACK,
    Mode.INVERT,
    Mode.DEEPFRY,
)

FORMATS = ("png", "jpg", "jpeg", "pdf", "svg")

DEFAULT_REPLACE_CHANCE = 0.1
DEFAULT_DEEPFRY_CONTRAST = 0.5
DEFAULT_DEEPFRY_QUALITY_DAMAGE = 10
DEFAULT_DEEPFRY_DAMAGING_QUALITY = 0.25
DEFAULT_JPEG_QUALITY = 0.75


def parse_mode(value) -> Mode:
    """Resolve a mode name (or Mode) to a Mode. Raises ConfigError if unknown."""
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value))
    except ValueError:
        valid = ", ".join(m.value for m in Mode)
        raise ConfigError(f"Invalid mode: {value}. Valid modes: {valid}") from None


@dataclass(frozen=True)
class JpegOptions:
    """JPEG encoder options. Quality is a float in [0, 1]."""

    quality: float = DEFAULT_JPEG_QUALITY
    progressive: bool = False
    chroma_subsampling: bool = False

    @classmethod
    def from_options(cls, options: dict | None) -> "JpegOptions":
        options = options or {}
        unknown = set(options) - {"quality", "progressive", "chromaSubsampling"}
        if unknown:
            raise ConfigError(f"Unknown jpegOptions keys: {sorted(unknown)}")
        return cls(
            quality=float(options.get("quality", DEFAULT_JPEG_QUALITY)),
            progressive=bool(options.get("progressive", False)),
            chroma_subsampling=bool(options.get("chromaSubsampling", False)),
        )


@dataclass(frozen=True)
class CorruptionConfig:
    """Immutable set of parameters for one corruption run.

    Per-pixel fields (replace_chance, scale, preserve_alpha, the ignore flags
    and use_current_color_as_default) are not consulted in deepfry mode, and
    the deepfry_* fields are only consulted in deepfry mode.
    """

    replace_chance: float = DEFAULT_REPLACE_CHANCE
    use_current_color_as_default: bool = False
    preserve_alpha: bool = False
    ignore_empty_pixels: bool = False
    ignore_invisible_pixels: bool = False
    scale: tuple[float, float] = (1, 1)
    mode: Mode = Mode.RANDOM_COLOR
    format: str = "png"
    jpeg_options: JpegOptions = field(default_factory=JpegOptions)
    deepfry_contrast: float = DEFAULT_DEEPFRY_CONTRAST
    deepfry_quality_damage: int = DEFAULT_DEEPFRY_QUALITY_DAMAGE
    deepfry_damaging_quality: float = DEFAULT_DEEPFRY_DAMAGING_QUALITY
    seed: int | None = None

    def __post_init__(self):
        # Accept mode names for convenience; store the enum.
        object.__setattr__(self, "mode", parse_mode(self.mode))

    @property
    def scale_x(self) -> int:
        return int(self.scale[0])

    @property
    def scale_y(self) -> int:
        return int(self.scale[1])

    @property
    def output_format(self) -> str:
        return (self.format or "png").lower()

    def validate(self) -> "CorruptionConfig":
        """Check invariants. Returns self so calls can be chained.

        Raises:
            ConfigError: If either scale factor is below 1 (or not a finite
                number), or deepfry_quality_damage is negative.
        """
        sx, sy = self.scale
        for axis, value in (("X", sx), ("Y", sy)):
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid {axis} scale: {value!r}") from None
            if math.isnan(number) or number < 1:
                raise ConfigError(f"Invalid {axis} scale, must be at least 1.")
            if math.isinf(number):
                raise ConfigError(f"Invalid {axis} scale, must be finite.")
        if self.deepfry_quality_damage < 0:
            raise ConfigError(
                f"deepfryQualityDamage must be >= 0, got {self.deepfry_quality_damage}"
            )
        return self

    def with_overrides(self, **changes) -> "CorruptionConfig":
        return replace(self, **changes)

    @classmethod
    def from_options(cls, options: dict | None = None) -> "CorruptionConfig":
        """Build a config from camelCase option names.

        Missing keys take their defaults. A partial scale such as ``[2]``
        leaves the missing axis at 1.

        Raises:
            ConfigError: On unknown keys or an unknown mode.
        """
        options = dict(options or {})
        unknown = set(options) - set(_OPTION_FIELDS)
        if unknown:
            raise ConfigError(f"Unknown options: {sorted(unknown)}")

        kwargs: dict = {}
        for key, value in options.items():
            if value is None:
                continue
            name = _OPTION_FIELDS[key]
            if key == "scale":
                value = _parse_scale(value)
            elif key == "jpegOptions":
                value = JpegOptions.from_options(value)
            elif key == "mode":
                value = parse_mode(value)
            elif key == "deepfryQualityDamage":
                value = int(value)
            elif key in ("replaceChance", "deepfryContrast", "deepfryDamagingQuality"):
                value = float(value)
            elif key == "format":
                value = str(value)
            elif key == "seed":
                value = int(value)
            else:
                value = bool(value)
            kwargs[name] = value

        config = cls(**kwargs)
        logger.debug("Resolved config: %s", config)
        return config


_OPTION_FIELDS = {
    "replaceChance": "replace_chance",
    "useCurrentColorAsDefault": "use_current_color_as_default",
    "preserveAlpha": "preserve_alpha",
    "ignoreEmptyPixels": "ignore_empty_pixels",
    "ignoreInvisiblePixels": "ignore_invisible_pixels",
    "scale": "scale",
    "mode": "mode",
    "format": "format",
    "jpegOptions": "jpeg_options",
    "deepfryContrast": "deepfry_contrast",
    "deepfryQualityDamage": "deepfry_quality_damage",
    "deepfryDamagingQuality": "deepfry_damaging_quality",
    "seed": "seed",
}


def _parse_scale(value) -> tuple[float, float]:
    """[x?, y?] -> (x, y), missing or None entries default to 1."""
    if isinstance(value, (int, float)):
        return (value, value)
    items = list(value)
    if len(items) > 2:
        raise ConfigError(f"scale takes at most 2 values, got {len(items)}")
    x = items[0] if len(items) > 0 and items[0] is not None else 1
    y = items[1] if len(items) > 1 and items[1] is not None else 1
    return (x, y)
