"""Tests for the cleaning pipeline and the public API."""

from pathlib import Path

import numpy as np
import pytest

from imgclean.api import ImageCleaner
from imgclean.config import CleaningConfig
from imgclean.io.file_handler import load_image, make_file_path
from imgclean.models import ColorImage, ThresholdStrategy
from imgclean.pipeline import clean

SAMPLE_PPM = Path(__file__).parent / "data" / "3x3-test.ppm"


def _channels(image: ColorImage) -> np.ndarray:
    return image.pixels.reshape(-1, 3)


def _assert_binary_gray(image: ColorImage):
    rgb = _channels(image)
    assert np.all(rgb[:, 0] == rgb[:, 1])
    assert np.all(rgb[:, 1] == rgb[:, 2])
    assert set(np.unique(rgb)) <= {0, 255}


@pytest.fixture
def sample_from_file():
    return load_image(make_file_path(SAMPLE_PPM))


class TestConfig:
    def test_defaults(self):
        config = CleaningConfig()
        assert config.strategy == ThresholdStrategy.INTEGRAL
        assert config.half_window == 7
        assert config.window_size == 15
        assert config.factor == 0.85

    def test_strategy_string_is_coerced(self):
        assert CleaningConfig(strategy="Adaptive").strategy == ThresholdStrategy.ADAPTIVE

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            CleaningConfig(strategy="otsu")

    def test_negative_half_window(self):
        with pytest.raises(ValueError):
            CleaningConfig(half_window=-1)

    def test_non_positive_factor(self):
        with pytest.raises(ValueError):
            CleaningConfig(factor=0)


class TestCleaningPipeline:
    def test_adaptive_end_to_end(self, sample_from_file):
        result = clean(sample_from_file, strategy=ThresholdStrategy.ADAPTIVE)
        assert (result.width, result.height) == (3, 3)
        assert result.pixels.size == 27
        _assert_binary_gray(result)
        assert _channels(result)[:, 0].tolist() == [0, 255, 0, 255, 0, 0, 255, 0, 0]

    def test_integral_end_to_end(self, sample_from_file):
        config = CleaningConfig(strategy="integral", half_window=7, factor=0.85)
        result = clean(sample_from_file, config=config)
        _assert_binary_gray(result)
        gray = _channels(result)[:, 0]
        assert gray[3] == 255  # white pixel stays paper
        assert gray[5] == 0  # black pixel becomes ink
        assert gray.tolist() == [0, 255, 0, 255, 255, 0, 255, 255, 0]

    def test_strategy_overrides_config(self, sample_color):
        config = CleaningConfig(strategy=ThresholdStrategy.INTEGRAL)
        via_override = clean(sample_color, strategy="adaptive", config=config)
        via_config = clean(sample_color, config=CleaningConfig(strategy="adaptive"))
        np.testing.assert_array_equal(via_override.pixels, via_config.pixels)

    @pytest.mark.parametrize("strategy", list(ThresholdStrategy))
    def test_shape_preserved(self, strategy):
        rng = np.random.default_rng(99)
        image = ColorImage(
            width=17,
            height=11,
            maxval=255,
            pixels=rng.integers(0, 256, size=17 * 11 * 3).astype(np.uint16),
        )
        result = clean(image, strategy=strategy)
        assert (result.width, result.height) == (17, 11)
        assert result.pixels.size == 17 * 11 * 3
        assert result.maxval == 255
        _assert_binary_gray(result)

    @pytest.mark.parametrize("strategy", list(ThresholdStrategy))
    def test_empty_image_passes_through(self, strategy):
        result = clean(ColorImage(), strategy=strategy)
        assert result.empty
        assert result.pixels.size == 0

    def test_input_is_not_modified(self, sample_color):
        before = sample_color.pixels.copy()
        clean(sample_color, strategy="adaptive")
        np.testing.assert_array_equal(sample_color.pixels, before)


class TestImageCleaner:
    def test_clean_image_writes_output(self, tmp_path):
        output = tmp_path / "out" / "clean.ppm"
        cleaner = ImageCleaner(strategy="adaptive")
        result = cleaner.clean_image(SAMPLE_PPM, output)

        assert output.exists()
        written = load_image(make_file_path(output))
        np.testing.assert_array_equal(written.pixels, result.pixels)
        _assert_binary_gray(written)

    def test_clean_array_uses_config(self, sample_color):
        cleaner = ImageCleaner(strategy="integral", half_window=7, factor=0.85)
        result = cleaner.clean_array(sample_color)
        assert _channels(result)[:, 0].tolist() == [0, 255, 0, 255, 255, 0, 255, 255, 0]

    def test_invalid_settings(self):
        with pytest.raises(ValueError):
            ImageCleaner(half_window=-3)

    def test_file_not_found(self, tmp_path):
        cleaner = ImageCleaner()
        with pytest.raises(FileNotFoundError):
            cleaner.clean_image(tmp_path / "missing.ppm", tmp_path / "out.ppm")
