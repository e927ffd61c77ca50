"""Narrowing of generated samples into raster pixel types

Every sample is computed as a Python float (IEEE double) and converted once
into the pixel kind the raster is written with. The conversion is total:

    - Unsigned integers saturate: NaN and values above the maximum become the
      maximum, values below zero become zero, anything else truncates toward
      zero.
    - Signed integers saturate to their minimum or maximum; NaN and +inf are
      treated as above the maximum.
    - float32 narrows finite values with round-to-nearest (overflowing to
      signed infinity) but maps NaN and +/-inf to NaN, unlike the integer
      policy.
    - float64 is the identity.

>>> convert(PixelKind.U8, 300.0), convert(PixelKind.U8, -5.0)
(255, 0)
>>> convert(PixelKind.I16, math.nan)
32767
"""

import dataclasses
import enum
import math
import struct
from typing import Iterable

from .errors import InvalidParameterError


@dataclasses.dataclass(frozen=True)
class BandType:
    """Convenience wrapper for details of band data type"""

    fmt: str
    size: int
    typ: type
    name: str
    gdal_name: str
    min: int | None = None
    max: int | None = None


class PixelKind(enum.StrEnum):
    """Pixel representation tokens accepted on the command line"""

    U8 = "u8"
    U16 = "u16"
    I16 = "i16"
    U32 = "u32"
    I32 = "i32"
    F32 = "f32"
    F64 = "f64"

    @classmethod
    def parse(cls, token: str) -> "PixelKind":
        try:
            return cls(token.strip().lower())
        except ValueError:
            supported = ", ".join(kind.value for kind in cls)
            raise InvalidParameterError(
                f"Unsupported data type: {token!r} (expected one of {supported})"
            ) from None

    @property
    def band_type(self) -> BandType:
        return BAND_TYPES[self]


BAND_TYPES: dict[PixelKind, BandType] = {
    PixelKind.U8: BandType("B", 1, int, "uint8", "Byte", 0, 2**8 - 1),
    PixelKind.U16: BandType("H", 2, int, "uint16", "UInt16", 0, 2**16 - 1),
    PixelKind.I16: BandType("h", 2, int, "int16", "Int16", -(2**15), 2**15 - 1),
    PixelKind.U32: BandType("I", 4, int, "uint32", "UInt32", 0, 2**32 - 1),
    PixelKind.I32: BandType("i", 4, int, "int32", "Int32", -(2**31), 2**31 - 1),
    PixelKind.F32: BandType("f", 4, float, "float32", "Float32"),
    PixelKind.F64: BandType("d", 8, float, "float64", "Float64"),
}

_FLOAT32 = struct.Struct("=f")


def _to_unsigned(value: float, band_type: BandType) -> int:
    if math.isfinite(value) and 0.0 <= value <= band_type.max:
        return int(value)
    elif value < 0.0:
        return 0
    return band_type.max


def _to_signed(value: float, band_type: BandType) -> int:
    if math.isfinite(value) and band_type.min <= value <= band_type.max:
        return int(value)
    elif value < band_type.min:
        return band_type.min
    return band_type.max


def _to_float32(value: float) -> float:
    if not math.isfinite(value):
        return math.nan
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        # Outside float32 range rounds to infinity, as a C cast would
        return math.copysign(math.inf, value)


def convert(kind: PixelKind, value: float) -> int | float:
    """Convert one generated sample to the given pixel kind"""
    band_type = BAND_TYPES[kind]
    if kind is PixelKind.F64:
        return value
    if kind is PixelKind.F32:
        return _to_float32(value)
    if band_type.min == 0:
        return _to_unsigned(value, band_type)
    return _to_signed(value, band_type)


def pack(kind: PixelKind, values: Iterable[int | float]) -> bytes:
    """Serialise converted samples into native-endian bytes for GDAL"""
    values = list(values)
    return struct.pack(f"={len(values)}{BAND_TYPES[kind].fmt}", *values)
