"""Data patterns for synthetic rasters

A pattern is any object with a ``generate(x, y, band)`` method returning a
float. It must be a pure function of its arguments: the encoder may call it in
any order and from several processes.

Creating a custom checkerboard pattern:

    class CheckerboardPattern:
        def generate(self, x: int, y: int, band: int) -> float:
            return 255.0 if (x + y + band) % 2 == 0 else 0.0
"""

import dataclasses
import enum
import math
import typing

from .errors import InvalidParameterError


@typing.runtime_checkable
class DataGenerator(typing.Protocol):
    """Anything that computes a sample for a pixel coordinate and band"""

    def generate(self, x: int, y: int, band: int) -> float: ...


class GradientPattern:
    """Diagonal gradient: the sum of x, y and band indices.

    Values increase from the top-left to the bottom-right corner and by one
    per band. This is the default pattern.
    """

    def generate(self, x: int, y: int, band: int) -> float:
        return float(x + y + band)


class SineWavePattern:
    """Interference of a sine over columns and a cosine over rows.

    Each band is shifted by a phase of ``band * pi / 4``. Centred on 128 with
    an amplitude of 128 per term, so raw values span roughly [-256, 512] and
    rely on saturation when written as u8.
    """

    def generate(self, x: int, y: int, band: int) -> float:
        fx = x / 50.0
        fy = y / 50.0
        phase = band * math.pi / 4.0
        return (math.sin(fx) + math.cos(fy) + math.sin(phase)) * 128.0 + 128.0


class NoisePattern:
    """Deterministic pseudo-random noise from a hash of the coordinate.

    Not seeded: the same ``(x, y, band)`` always yields the same value.
    """

    def generate(self, x: int, y: int, band: int) -> float:
        return math.sin(x * 12.9898 + y * 78.233 + band * 37.719) * 43758.5453


@dataclasses.dataclass(frozen=True)
class FunctionPattern:
    """Adapt a plain ``f(x, y, band) -> float`` callable into a pattern"""

    func: typing.Callable[[int, int, int], float]

    def generate(self, x: int, y: int, band: int) -> float:
        return float(self.func(x, y, band))


class PatternName(enum.StrEnum):
    """Built-in pattern tokens"""

    GRADIENT = "gradient"
    SINE = "sine"
    NOISE = "noise"


PATTERNS: dict[PatternName, type] = {
    PatternName.GRADIENT: GradientPattern,
    PatternName.SINE: SineWavePattern,
    PatternName.NOISE: NoisePattern,
}


def get_pattern(name: str) -> DataGenerator:
    """Instantiate a built-in pattern by its token"""
    try:
        return PATTERNS[PatternName(name.strip().lower())]()
    except ValueError:
        supported = ", ".join(p.value for p in PatternName)
        raise InvalidParameterError(
            f"Unknown pattern: {name!r} (expected one of {supported})"
        ) from None


def as_generator(obj: DataGenerator | typing.Callable) -> DataGenerator:
    """Accept either a pattern object or a bare callable"""
    if isinstance(obj, type):
        raise InvalidParameterError(
            f"Expected a pattern instance, got the class {obj.__name__}"
        )
    if isinstance(obj, DataGenerator):
        return obj
    if callable(obj):
        return FunctionPattern(obj)
    raise InvalidParameterError(f"Not a data generator: {obj!r}")


def describe(pattern_cls: type) -> str:
    """First line of a pattern's docstring"""
    return (pattern_cls.__doc__ or "").strip().splitlines()[0]
