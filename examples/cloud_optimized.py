#!/usr/bin/env python3
"""Write a tiled, LZW-compressed GeoTIFF with internal overviews.

Usage:
    python cloud_optimized.py
"""

from rasterfakers import GeoTransform, PixelKind, RasterBuilder, SineWavePattern

if __name__ == "__main__":
    result = (
        RasterBuilder()
        .set_dimensions(512, 512)
        .set_bands(3)
        .set_projection("EPSG:3857")
        .set_geo_transform(GeoTransform.from_origin((-20037508.34, 20037508.34), (78271.52, 78271.52)))
        .set_output_path("cloud_optimized.tif")
        .set_data_generator(SineWavePattern())
        .set_cloud_optimized(True)
        .build(PixelKind.F32)
        .write()
    )
    print(f"Cloud Optimized GeoTIFF generated with overviews {result.overview_factors}")
