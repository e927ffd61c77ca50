#!/usr/bin/env python3
"""Write a 256x256 single-band float32 gradient in WGS84.

Usage:
    python basic_usage.py
"""

import logging

from rasterfakers import PixelKind, RasterBuilder

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    config = (
        RasterBuilder()
        .set_dimensions(256, 256)
        .set_bands(1)
        .set_projection("EPSG:4326")
        .set_output_path("basic_output.tif")
        .build(PixelKind.F32)
    )
    config.write()
    print("Basic GeoTIFF generated successfully!")
