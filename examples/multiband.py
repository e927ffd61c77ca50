#!/usr/bin/env python3
"""Write a three-band sine wave raster, one process per band.

Usage:
    python multiband.py
"""

from rasterfakers import PixelKind, RasterBuilder, SineWavePattern

if __name__ == "__main__":
    config = (
        RasterBuilder()
        .set_dimensions(512, 512)
        .set_bands(3)
        .set_projection("EPSG:4326")
        .set_data_generator(SineWavePattern())
        .set_output_path("multiband.tif")
        .build(PixelKind.F32)
    )
    config.write(workers=3)
    print("Multiband GeoTIFF generated successfully!")
