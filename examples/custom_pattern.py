#!/usr/bin/env python3
"""Write a chessboard from a user-defined pattern.

Any object with a ``generate(x, y, band)`` method works as a pattern.

Usage:
    python custom_pattern.py
"""

from rasterfakers import PixelKind, RasterBuilder


class ChessboardPattern:
    """Alternating 0/255 pixels"""

    def generate(self, x: int, y: int, band: int) -> float:
        return 255.0 if (x + y) % 2 == 0 else 0.0


if __name__ == "__main__":
    config = (
        RasterBuilder()
        .set_dimensions(512, 512)
        .set_output_path("chessboard.tif")
        .set_data_generator(ChessboardPattern())
        .build(PixelKind.U8)
    )
    config.write()
    print("Chessboard pattern GeoTIFF generated!")
