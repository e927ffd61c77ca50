#!/usr/bin/env python3
"""Tests for the built-in and custom data patterns."""

import math

import pytest

from rasterfakers.conversions import PixelKind, convert
from rasterfakers.errors import InvalidParameterError
from rasterfakers.patterns import (
    PATTERNS,
    DataGenerator,
    FunctionPattern,
    GradientPattern,
    NoisePattern,
    SineWavePattern,
    as_generator,
    describe,
    get_pattern,
)


class TestGradient:
    def test_examples(self):
        pattern = GradientPattern()
        assert pattern.generate(0, 0, 0) == 0.0
        assert pattern.generate(1, 1, 1) == 3.0
        assert pattern.generate(10, 20, 3) == 33.0
        assert pattern.generate(1000, 2000, 5) == 3005.0
        assert pattern.generate(0, 0, 1) == 1.0

    def test_exact_over_grid(self):
        pattern = GradientPattern()
        for band in range(3):
            for y in range(17):
                for x in range(23):
                    assert pattern.generate(x, y, band) == x + y + band


class TestSineWave:
    def test_examples(self):
        pattern = SineWavePattern()
        assert pattern.generate(0, 0, 0) == 256.0
        assert pattern.generate(0, 0, 0) != pattern.generate(25, 25, 1)
        assert pattern.generate(50, 50, 0) != pattern.generate(50, 50, 1)

    def test_dense_sample_range(self):
        """Band 0 over [0, 1000) x [0, 1000) stays within the derived bound."""
        pattern = SineWavePattern()
        values = [pattern.generate(x, y, 0) for y in range(1000) for x in range(1000)]
        low, high = min(values), max(values)

        # sin + cos spans [-2, 2] on band 0
        assert -128.0 <= low < 0.0
        assert 255.0 < high <= 384.0

        converted = {convert(PixelKind.U8, v) for v in values}
        assert min(converted) == 0
        assert max(converted) == 255

    def test_all_bands_bounded(self):
        pattern = SineWavePattern()
        for band in range(8):
            for y in range(0, 400, 7):
                for x in range(0, 400, 7):
                    assert -256.0 <= pattern.generate(x, y, band) <= 512.0


class TestNoise:
    def test_reproducible(self):
        pattern = NoisePattern()
        assert pattern.generate(10, 20, 3) == pattern.generate(10, 20, 3)
        assert NoisePattern().generate(7, 8, 9) == pattern.generate(7, 8, 9)

    def test_distinct_inputs(self):
        pattern = NoisePattern()
        assert pattern.generate(0, 0, 0) != pattern.generate(1, 1, 1)
        assert pattern.generate(100, 200, 1) != pattern.generate(100, 200, 2)

        values = {
            pattern.generate(x, y, band)
            for band in range(3)
            for y in range(32)
            for x in range(32)
        }
        assert len(values) == 3 * 32 * 32

    def test_bounded_by_amplitude(self):
        pattern = NoisePattern()
        assert all(
            abs(pattern.generate(x, y, 0)) <= 43758.5453
            for y in range(50)
            for x in range(50)
        )


class TestCustomPatterns:
    def test_custom_class(self):
        class CustomPattern:
            def generate(self, x, y, band):
                return float(x * y * band * 2)

        pattern = as_generator(CustomPattern())
        assert isinstance(pattern, DataGenerator)
        assert pattern.generate(2, 3, 4) == 48.0
        assert pattern.generate(0, 5, 2) == 0.0
        assert pattern.generate(10, 10, 1) == 200.0

    def test_callable(self):
        pattern = as_generator(lambda x, y, band: 255 if (x + y) % 2 == 0 else 0)
        assert isinstance(pattern, FunctionPattern)
        assert pattern.generate(0, 0, 0) == 255.0
        assert pattern.generate(1, 0, 0) == 0.0

    def test_rejects_non_generator(self):
        with pytest.raises(InvalidParameterError):
            as_generator(42)

    def test_rejects_pattern_class(self):
        with pytest.raises(InvalidParameterError, match="GradientPattern"):
            as_generator(GradientPattern)


class TestRegistry:
    def test_get_pattern(self):
        assert isinstance(get_pattern("gradient"), GradientPattern)
        assert isinstance(get_pattern("sine"), SineWavePattern)
        assert isinstance(get_pattern("NOISE"), NoisePattern)

    def test_unknown_pattern(self):
        with pytest.raises(InvalidParameterError, match="checkerboard"):
            get_pattern("checkerboard")

    def test_descriptions(self):
        for pattern_cls in PATTERNS.values():
            assert describe(pattern_cls)
            assert not math.isnan(pattern_cls().generate(1, 2, 3))
