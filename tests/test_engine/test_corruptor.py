"""Tests for engine.corruptor: gate, ignore filters, scale patches, dispatch, encode."""

import numpy as np
import pytest

from conftest import decode, gradient, png_bytes, random_raster, solid
from engine.config import ConfigError, CorruptionConfig, Mode
from engine.corruptor import (
    corrupt,
    corrupt_image,
    corrupt_pixels,
    corrupt_raster,
    resolve_operators,
    select_pixels,
)
from raster.writer import FormatWarning, UnsupportedFormatError

pytestmark = pytest.mark.smoke


def _config(**kw):
    kw.setdefault("replace_chance", 1.0)
    return CorruptionConfig(**kw)


class TestGate:
    def test_unselected_pixels_equal_source(self):
        """Anything the gate skipped is bit-identical to the source."""
        raster = random_raster(64, 64)
        config = _config(replace_chance=0.3, mode=Mode.SET_TO_WHITE)
        mask = select_pixels(raster, config, np.random.default_rng(9))
        out = corrupt_pixels(raster, config, np.random.default_rng(9))
        np.testing.assert_array_equal(out[~mask], raster[~mask])
        np.testing.assert_array_equal(out[mask], 255)

    def test_zero_chance_changes_nothing(self):
        raster = random_raster()
        out = corrupt_raster(raster, _config(replace_chance=0.0, mode=Mode.INVERT))
        np.testing.assert_array_equal(out, raster)

    def test_chance_above_one_replaces_everything(self):
        raster = solid(8, 8, (1, 2, 3, 255))
        out = corrupt_raster(raster, _config(replace_chance=5.0, mode=Mode.SET_TO_BLACK))
        np.testing.assert_array_equal(out[:, :, :3], 0)

    def test_gate_rate_is_statistical(self):
        raster = solid(100, 100, (10, 20, 30, 255))
        out = corrupt_raster(raster, _config(replace_chance=0.1, mode=Mode.SET_TO_WHITE))
        changed = np.any(out != raster, axis=2).mean()
        assert 0.07 < changed < 0.13

    def test_source_not_modified(self):
        raster = random_raster()
        before = raster.copy()
        corrupt_raster(raster, _config(mode=Mode.RANDOM))
        np.testing.assert_array_equal(raster, before)


class TestIgnoreFilters:
    def test_ignore_empty_pixels(self):
        raster = solid(6, 6, (0, 0, 0, 0))
        raster[0, 0] = (0, 0, 0, 255)
        out = corrupt_raster(raster, _config(mode=Mode.SET_TO_WHITE, ignore_empty_pixels=True))
        np.testing.assert_array_equal(out[1:], 0)
        np.testing.assert_array_equal(out[0, 0], 255)

    def test_ignore_invisible_pixels(self):
        raster = solid(6, 6, (200, 100, 50, 0))
        raster[:, 0, 3] = 255
        out = corrupt_raster(
            raster, _config(mode=Mode.SET_TO_BLACK, ignore_invisible_pixels=True)
        )
        np.testing.assert_array_equal(out[:, 1:], raster[:, 1:])
        np.testing.assert_array_equal(out[:, 0, :3], 0)

    def test_empty_pixels_mutated_without_flag(self):
        raster = solid(4, 4, (0, 0, 0, 0))
        out = corrupt_raster(raster, _config(mode=Mode.SET_TO_WHITE))
        np.testing.assert_array_equal(out, 255)


class TestScale:
    def test_scale_2x2_set_to_black_covers_everything(self):
        raster = solid(4, 4, (255, 255, 255, 255))
        out = corrupt_raster(raster, _config(mode=Mode.SET_TO_BLACK, scale=(2, 2)))
        np.testing.assert_array_equal(out[:, :, :3], 0)
        np.testing.assert_array_equal(out[:, :, 3], 255)

    def test_patch_is_clipped_at_the_edge(self):
        raster = solid(5, 5, (0, 0, 0, 0))
        raster[4, 4] = (9, 9, 9, 255)
        # The only visible pixel sits in the corner; its 3x3 patch clips to 1x1.
        config = _config(mode=Mode.SET_TO_WHITE, scale=(3, 3), ignore_invisible_pixels=True)
        out = corrupt_raster(raster, config)
        assert out.shape == raster.shape
        np.testing.assert_array_equal(out[4, 4], 255)
        np.testing.assert_array_equal(out[:4], 0)
        np.testing.assert_array_equal(out[4, :4], 0)

    def test_single_patch_size(self):
        raster = solid(6, 6, (0, 0, 0, 0))
        raster[1, 2] = (9, 9, 9, 255)
        config = _config(mode=Mode.SET_TO_WHITE, scale=(3, 2), ignore_invisible_pixels=True)
        out = corrupt_raster(raster, config)
        painted = np.argwhere(np.all(out == 255, axis=2))
        rows = sorted({int(r) for r, _ in painted})
        cols = sorted({int(c) for _, c in painted})
        assert rows == [1, 2]
        assert cols == [2, 3, 4]

    def test_last_write_wins_in_column_major_order(self):
        """Overlapping patches resolve in x-outer, y-inner order."""
        raster = solid(2, 2, (0, 0, 0, 0))
        raster[0, 1] = (255, 0, 0, 255)  # x=1, y=0
        raster[1, 0] = (0, 255, 0, 255)  # x=0, y=1
        config = _config(mode=Mode.INVERT, scale=(2, 2), ignore_invisible_pixels=True)
        out = corrupt_raster(raster, config)
        cyan, magenta = (0, 255, 255, 255), (255, 0, 255, 255)
        # (x=0, y=1) paints first, then (x=1, y=0) overwrites the shared corner.
        np.testing.assert_array_equal(out[1, 0], magenta)
        np.testing.assert_array_equal(out[0, 1], cyan)
        np.testing.assert_array_equal(out[1, 1], cyan)
        np.testing.assert_array_equal(out[0, 0], (0, 0, 0, 0))

    def test_scale_below_one_raises_before_drawing(self):
        with pytest.raises(ConfigError):
            corrupt_raster(solid(2, 2, (1, 1, 1, 1)), _config(scale=(0, 1)))


class TestDispatch:
    def test_resolve_fixed_mode(self, rng):
        groups = resolve_operators(Mode.INVERT, 5, rng)
        assert len(groups) == 1
        assert groups[0][0] == "invert"
        np.testing.assert_array_equal(groups[0][1], np.arange(5))

    def test_resolve_random_covers_every_row_once(self, rng):
        groups = resolve_operators(Mode.RANDOM, 1000, rng)
        rows = np.concatenate([r for _, r in groups])
        assert sorted(rows.tolist()) == list(range(1000))
        assert "deepfry" not in {name for name, _ in groups}
        assert all(len(r) > 0 for _, r in groups)

    def test_random_mode_mixes_operators(self):
        raster = solid(40, 40, (100, 100, 100, 255))
        out = corrupt_raster(raster, _config(mode=Mode.RANDOM))
        colors = {tuple(p) for p in out.reshape(-1, 4).tolist()}
        assert (0, 0, 0, 0) in colors  # erase
        assert (155, 155, 155, 255) in colors  # invert
        assert (255, 255, 255, 255) in colors  # setToWhite (and lit channels)

    def test_seeded_runs_are_reproducible(self):
        raster = random_raster()
        config = _config(replace_chance=0.5, mode=Mode.RANDOM, seed=123)
        np.testing.assert_array_equal(
            corrupt_raster(raster, config), corrupt_raster(raster, config)
        )


class TestCorruptImage:
    def test_red_to_white_scenario(self):
        src = png_bytes(solid(2, 2, (255, 0, 0, 255)))
        data = corrupt_image(src, mode="setToWhite", replaceChance=1, preserveAlpha=False)
        out = decode(data)
        assert out.shape == (2, 2, 4)
        np.testing.assert_array_equal(out, 255)

    def test_preserve_alpha_scenario(self):
        src = png_bytes(solid(2, 2, (255, 0, 0, 128)))
        out = decode(corrupt_image(src, mode="setToWhite", replaceChance=1, preserveAlpha=True))
        np.testing.assert_array_equal(out[:, :, :3], 255)
        np.testing.assert_array_equal(out[:, :, 3], 128)

    def test_erase_scenario(self):
        src = png_bytes(solid(3, 3, (10, 20, 30, 255)))
        out = decode(corrupt_image(src, mode="erase", replaceChance=1, preserveAlpha=True))
        np.testing.assert_array_equal(out, 0)

    def test_result_metadata(self, gradient_png):
        result = corrupt(gradient_png, CorruptionConfig(format="jpeg"))
        assert result.mime_type == "image/jpeg"
        assert (result.width, result.height) == (64, 48)
        assert result.data[:2] == b"\xff\xd8"

    def test_png_is_default(self, gradient_png):
        result = corrupt(gradient_png, CorruptionConfig(format="bmp"))
        assert result.mime_type == "image/png"
        assert result.data[:8] == b"\x89PNG\r\n\x1a\n"

    def test_pdf_always_raises(self, gradient_png):
        with pytest.raises(UnsupportedFormatError, match="PDF"):
            corrupt_image(gradient_png, format="pdf")

    def test_pdf_raises_even_with_invalid_source(self):
        with pytest.raises(UnsupportedFormatError):
            corrupt_image(b"not an image", format="PDF")

    def test_svg_warns_and_returns_document(self, gradient_png):
        with pytest.warns(FormatWarning):
            result = corrupt(gradient_png, CorruptionConfig(format="svg", replace_chance=0))
        assert result.mime_type is None
        assert b"<svg" in result.data

    def test_config_and_options_are_exclusive(self, gradient_png):
        with pytest.raises(ConfigError):
            corrupt_image(gradient_png, CorruptionConfig(), mode="invert")

    def test_accepts_array_source(self):
        out = decode(corrupt_image(gradient(), replaceChance=0))
        np.testing.assert_array_equal(out, gradient())

    def test_scale_error_before_decode(self):
        with pytest.raises(ConfigError):
            corrupt_image(b"garbage", scale=[0, 0])
