"""GDAL-backed raster writer

Thin pass-through to osgeo.gdal. Every GDAL failure surfaces as a
CollaboratorError carrying GDAL's message; nothing is retried.

Required packages:
    - GDAL <https://pypi.org/project/GDAL/>
"""

import functools
import logging
import typing

from .conversions import PixelKind
from .errors import CollaboratorError

logger = logging.getLogger(__name__)


class RasterCollaborator(typing.Protocol):
    """Operations the encoder needs from a raster I/O library"""

    def create(
        self,
        path: str,
        width: int,
        height: int,
        band_count: int,
        pixel_kind: PixelKind,
        options: list[str],
    ) -> typing.Any: ...

    def set_projection(self, dataset: typing.Any, projection: str) -> None: ...

    def set_geo_transform(
        self, dataset: typing.Any, geo_transform: tuple[float, ...]
    ) -> None: ...

    def write_band(
        self,
        dataset: typing.Any,
        band_index: int,
        origin: tuple[int, int],
        size: tuple[int, int],
        data: bytes,
    ) -> None: ...

    def build_overviews(
        self,
        dataset: typing.Any,
        resampling: str,
        factors: list[int],
        bands: list[int] | None = None,
    ) -> None: ...

    def close(self, dataset: typing.Any) -> None: ...


def _gdal_errors(operation: str):
    """Re-raise GDAL's RuntimeError as CollaboratorError"""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except RuntimeError as e:
                raise CollaboratorError(f"GDAL error: {e}", operation) from e

        return wrapper

    return decorator


class GDALWriter:
    """Writes rasters with a named GDAL driver, GTiff by default"""

    def __init__(self, driver_name: str = "GTiff"):
        self.driver_name = driver_name

    @functools.cached_property
    def gdal(self):
        import osgeo.gdal

        osgeo.gdal.UseExceptions()
        return osgeo.gdal

    @_gdal_errors("create")
    def create(self, path, width, height, band_count, pixel_kind, options):
        driver = self.gdal.GetDriverByName(self.driver_name)
        if driver is None:
            raise CollaboratorError(
                f"GDAL driver {self.driver_name} is not available", "create"
            )
        datatype = self.gdal.GetDataTypeByName(pixel_kind.band_type.gdal_name)
        logger.info(
            "Creating %s %dx%dx%d %s with options %s",
            self.driver_name,
            width,
            height,
            band_count,
            pixel_kind.band_type.gdal_name,
            options,
        )
        dataset = driver.Create(
            str(path), width, height, band_count, datatype, options=options
        )
        if dataset is None:
            raise CollaboratorError(f"GDAL could not create {path}", "create")
        return dataset

    @_gdal_errors("set_projection")
    def set_projection(self, dataset, projection):
        import osgeo.osr

        srs = osgeo.osr.SpatialReference()
        srs.SetFromUserInput(projection)
        dataset.SetProjection(srs.ExportToWkt())

    @_gdal_errors("set_geo_transform")
    def set_geo_transform(self, dataset, geo_transform):
        dataset.SetGeoTransform(list(geo_transform))

    @_gdal_errors("write_band")
    def write_band(self, dataset, band_index, origin, size, data):
        band = dataset.GetRasterBand(band_index)
        xoff, yoff = origin
        xsize, ysize = size
        band.WriteRaster(xoff, yoff, xsize, ysize, data)

    @_gdal_errors("build_overviews")
    def build_overviews(self, dataset, resampling, factors, bands=None):
        if bands is not None:
            # GDAL's Python bindings only build overviews for all bands
            raise CollaboratorError(
                "Band subsets are not supported for overviews", "build_overviews"
            )
        logger.info("Building %s overviews at %s", resampling, factors)
        dataset.BuildOverviews(resampling, list(factors))

    @_gdal_errors("close")
    def close(self, dataset):
        dataset.FlushCache()
        dataset.Close()
