"""Corruption engine: per-pixel gate + operator dispatch, or the whole-image deepfry path.

Two buffers per call: an immutable snapshot that every decision reads, and
an output canvas that operators paint into. Decisions never see pixels that
were already painted in the same run.
"""

import logging
from dataclasses import dataclass

import numpy as np
import sentry_sdk

from engine.config import ConfigError, CorruptionConfig, Mode
from engine.deepfry import deepfry
from engine.determinism import make_rng
from operators import registry
from raster.reader import load_raster
from raster.writer import MIME_PDF, UnsupportedFormatError, encode, resolve_mime_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorruptionResult:
    """Encoded output plus what a sink needs to store it."""

    data: bytes
    mime_type: str | None
    width: int
    height: int


def select_pixels(
    snapshot: np.ndarray, config: CorruptionConfig, rng: np.random.Generator
) -> np.ndarray:
    """Boolean (H, W) mask of pixels that pass the ignore filters and the random gate."""
    h, w = snapshot.shape[:2]
    eligible = np.ones((h, w), dtype=bool)
    if config.ignore_empty_pixels:
        eligible &= np.any(snapshot != 0, axis=2)
    if config.ignore_invisible_pixels:
        eligible &= snapshot[:, :, 3] != 0
    gate = rng.random((h, w)) < config.replace_chance
    return eligible & gate


def resolve_operators(
    mode: Mode, count: int, rng: np.random.Generator
) -> list[tuple[str, np.ndarray]]:
    """Group ``count`` selected pixels by the operator each one gets.

    "random" draws independently per pixel from the registry's random pool.
    Returns (mode name, row indices) pairs.
    """
    if mode is Mode.RANDOM:
        pool = registry.random_pool()
        picks = rng.integers(0, len(pool), count)
        return [(name, np.flatnonzero(picks == k)) for k, name in enumerate(pool)]
    return [(mode.value, np.arange(count))]


def corrupt_pixels(
    raster: np.ndarray, config: CorruptionConfig, rng: np.random.Generator
) -> np.ndarray:
    """Per-pixel path. Returns a new canvas; ``raster`` is never written."""
    snapshot = raster.view()
    snapshot.flags.writeable = False
    canvas = raster.copy()

    mask = select_pixels(snapshot, config, rng)
    # Column-major (x outer, y inner): the order overlapping patches are painted in.
    xs, ys = np.nonzero(mask.T)
    count = len(xs)
    if count == 0:
        logger.debug("No pixels selected")
        return canvas

    pixels = snapshot[ys, xs]
    params = {
        "preserve_alpha": config.preserve_alpha,
        "use_current_color_as_default": config.use_current_color_as_default,
    }
    replacements = np.empty((count, 4), dtype=np.uint8)
    for mode_name, rows in resolve_operators(config.mode, count, rng):
        if len(rows) == 0:
            continue
        info = registry.get(mode_name)
        if info is None:
            raise ConfigError(f"No per-pixel operator for mode: {mode_name}")
        replacements[rows] = info["fn"](pixels[rows], params, rng=rng)

    sx, sy = config.scale_x, config.scale_y
    if sx == 1 and sy == 1:
        canvas[ys, xs] = replacements
    else:
        for x, y, color in zip(xs, ys, replacements):
            canvas[y : y + sy, x : x + sx] = color

    logger.debug(
        "Replaced %d/%d pixels (mode=%s, scale=%dx%d)",
        count,
        mask.size,
        config.mode.value,
        sx,
        sy,
    )
    return canvas


def corrupt_raster(
    raster: np.ndarray,
    config: CorruptionConfig,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Mutate an RGBA raster according to ``config``. Returns a new array.

    Raises:
        ConfigError: If the configuration is invalid (checked before any drawing).
    """
    config.validate()
    if rng is None:
        rng = make_rng(config.seed)

    if config.mode is Mode.DEEPFRY:
        return deepfry(
            raster,
            contrast=config.deepfry_contrast,
            rounds=config.deepfry_quality_damage,
            quality=config.deepfry_damaging_quality,
        )
    return corrupt_pixels(raster, config, rng)


def corrupt(src, config: CorruptionConfig | None = None, **options) -> CorruptionResult:
    """Decode ``src``, corrupt it, and encode it in the configured format.

    Args:
        src:     Path, encoded bytes, binary file object, or RGBA array.
        config:  Resolved configuration. When omitted, ``options`` (camelCase
                 option names such as replaceChance, mode, scale) are resolved
                 into one.

    Raises:
        ConfigError: Invalid configuration.
        UnsupportedFormatError: PDF output requested.
        RasterDecodeError: Source rejected or undecodable.
    """
    if config is None:
        config = CorruptionConfig.from_options(options)
    elif options:
        raise ConfigError("Pass either a config or options, not both")
    config.validate()

    mime_type = resolve_mime_type(config.output_format)
    if mime_type == MIME_PDF:
        raise UnsupportedFormatError("PDF support has been disabled due to it causing hangs.")

    raster = load_raster(src)
    h, w = raster.shape[:2]
    sentry_sdk.add_breadcrumb(
        category="corrupt",
        message=f"Corrupting {w}x{h} with {config.mode.value}",
        data={"mode": config.mode.value, "format": config.output_format},
        level="info",
    )

    output = corrupt_raster(raster, config)
    data = encode(output, mime_type, config.jpeg_options)
    logger.debug("Encoded %dx%d as %s (%d bytes)", w, h, mime_type or "svg", len(data))
    return CorruptionResult(data=data, mime_type=mime_type, width=w, height=h)


def corrupt_image(src, config: CorruptionConfig | None = None, **options) -> bytes:
    """Corrupt an image and return the encoded bytes."""
    return corrupt(src, config, **options).data
