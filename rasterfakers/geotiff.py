"""Synthetic GeoTIFF configuration and encoding

Usage:
    from rasterfakers import RasterBuilder, SineWavePattern, PixelKind

    config = (
        RasterBuilder()
        .set_dimensions(512, 512)
        .set_bands(3)
        .set_projection("EPSG:4326")
        .set_data_generator(SineWavePattern())
        .set_output_path("multiband.tif")
        .build(PixelKind.F32)
    )
    config.write()

Samples are generated band by band, row by row, column by column into one
band-major buffer; band ``b`` occupies ``[b * width * height, (b + 1) *
width * height)`` in row-major order. The buffer is complete before GDAL is
asked to create the file.
"""

import dataclasses
import logging
import multiprocessing
import os
import typing

from . import conversions
from .conversions import PixelKind
from .errors import (
    CollaboratorError,
    InvalidDimensionsError,
    InvalidParameterError,
    MissingFieldError,
)
from .gdal_io import GDALWriter, RasterCollaborator
from .patterns import DataGenerator, GradientPattern, as_generator

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 256
DEFAULT_HEIGHT = 256
DEFAULT_BANDS = 1

# GTiff creation options for a cloud-optimized layout
COG_CREATION_OPTIONS = [
    "TILED=YES",
    "COMPRESS=LZW",
    "BIGTIFF=IF_NEEDED",
    "COPY_SRC_OVERVIEWS=YES",
]

OVERVIEW_FACTORS = [2, 4, 8, 16]
OVERVIEW_RESAMPLING = "NEAREST"


@dataclasses.dataclass(frozen=True)
class GeoTransform:
    """Affine mapping from pixel column/row to world coordinates

    Not validated: zero or negative pixel sizes are accepted as given.
    """

    x_min: float = 0.0
    pixel_width: float = 1.0
    rotation_x: float = 0.0
    y_max: float = 0.0
    rotation_y: float = 0.0
    pixel_height: float = -1.0

    @staticmethod
    def from_origin(
        upper_left: tuple[float, float], resolution: tuple[float, float]
    ) -> "GeoTransform":
        """North-up transform from an upper-left corner and (x, y) pixel size"""
        x_min, y_max = upper_left
        res_x, res_y = resolution
        return GeoTransform(x_min, res_x, 0.0, y_max, 0.0, -res_y)

    @staticmethod
    def from_gdal(coefficients: typing.Sequence[float]) -> "GeoTransform":
        if len(coefficients) != 6:
            raise InvalidParameterError(
                f"Expected six geotransform coefficients, got {len(coefficients)}"
            )
        return GeoTransform(*(float(c) for c in coefficients))

    def to_gdal(self) -> tuple[float, float, float, float, float, float]:
        return (
            self.x_min,
            self.pixel_width,
            self.rotation_x,
            self.y_max,
            self.rotation_y,
            self.pixel_height,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """World coordinate of pixel corner (x, y)"""
        return (
            self.x_min + x * self.pixel_width + y * self.rotation_x,
            self.y_max + x * self.rotation_y + y * self.pixel_height,
        )

    def bounds(self, width: int, height: int) -> tuple[float, float, float, float]:
        """Return (minx, miny, maxx, maxy) of a width x height grid"""
        corners = [self.apply(x, y) for x in (0, width) for y in (0, height)]
        xs = [c[0] for c in corners]
        ys = [c[1] for c in corners]
        return min(xs), min(ys), max(xs), max(ys)


@dataclasses.dataclass(frozen=True)
class RasterConfig:
    """Everything needed to write one synthetic raster"""

    width: int
    height: int
    band_count: int
    output_path: str | os.PathLike
    data_generator: DataGenerator
    pixel_kind: PixelKind = PixelKind.F64
    projection: str | None = None
    geo_transform: GeoTransform = dataclasses.field(default_factory=GeoTransform)
    cloud_optimized: bool = False

    @property
    def band_size(self) -> int:
        return self.width * self.height

    def write(
        self, collaborator: RasterCollaborator | None = None, workers: int = 1
    ) -> "WriteResult":
        return write(self, collaborator, workers)


class RasterBuilder:
    """Fluent builder for RasterConfig

    Dimensions and band count are checked as soon as they are set; the output
    path is only required when ``build()`` is called.
    """

    def __init__(self):
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self.band_count = DEFAULT_BANDS
        self.projection: str | None = None
        self.geo_transform = GeoTransform()
        self.output_path: str | os.PathLike | None = None
        self.data_generator: DataGenerator | None = None
        self.cloud_optimized = False

    def set_dimensions(self, width: int, height: int) -> "RasterBuilder":
        if width < 1 or height < 1:
            raise InvalidDimensionsError(
                f"Width and height must be greater than 0, got {width}x{height}"
            )
        self.width = width
        self.height = height
        return self

    def set_bands(self, count: int) -> "RasterBuilder":
        if count < 1:
            raise InvalidDimensionsError(
                f"Number of bands must be greater than 0, got {count}"
            )
        self.band_count = count
        return self

    def set_projection(self, projection: str | None) -> "RasterBuilder":
        self.projection = projection
        return self

    def set_geo_transform(self, geo_transform: GeoTransform) -> "RasterBuilder":
        self.geo_transform = geo_transform
        return self

    def set_output_path(self, path: str | os.PathLike) -> "RasterBuilder":
        self.output_path = path
        return self

    def set_data_generator(
        self, generator: DataGenerator | typing.Callable[[int, int, int], float]
    ) -> "RasterBuilder":
        self.data_generator = as_generator(generator)
        return self

    def set_cloud_optimized(self, enabled: bool = True) -> "RasterBuilder":
        self.cloud_optimized = bool(enabled)
        return self

    def build(self, pixel_kind: PixelKind | str = PixelKind.F64) -> RasterConfig:
        if self.output_path is None:
            raise MissingFieldError("Output path must be specified", "output_path")
        if not isinstance(pixel_kind, PixelKind):
            pixel_kind = PixelKind.parse(pixel_kind)

        return RasterConfig(
            width=self.width,
            height=self.height,
            band_count=self.band_count,
            output_path=self.output_path,
            data_generator=(
                self.data_generator
                if self.data_generator is not None
                else GradientPattern()
            ),
            pixel_kind=pixel_kind,
            projection=self.projection,
            geo_transform=self.geo_transform,
            cloud_optimized=self.cloud_optimized,
        )


@dataclasses.dataclass
class WriteResult:
    """Summary of a completed write"""

    path: str
    width: int
    height: int
    band_count: int
    pixel_kind: PixelKind
    creation_options: list[str]
    overview_factors: list[int]
    bytes_written: int


def creation_options(cloud_optimized: bool) -> list[str]:
    return list(COG_CREATION_OPTIONS) if cloud_optimized else []


def generate_band(
    generator: DataGenerator, pixel_kind: PixelKind, width: int, height: int, band: int
) -> list[int | float]:
    """Converted samples of one band in row-major order"""
    return [
        conversions.convert(pixel_kind, generator.generate(x, y, band))
        for y in range(height)
        for x in range(width)
    ]


def _generate_band_star(args):
    return generate_band(*args)


def generate_samples(config: RasterConfig, workers: int = 1) -> list[int | float]:
    """Band-major buffer of converted samples for the whole raster

    With ``workers > 1`` bands are computed in a process pool, which requires
    the data generator to be picklable. Output is identical either way.
    """
    tasks = [
        (config.data_generator, config.pixel_kind, config.width, config.height, band)
        for band in range(config.band_count)
    ]

    if workers > 1 and config.band_count > 1:
        with multiprocessing.Pool(min(workers, config.band_count)) as pool:
            bands = pool.map(_generate_band_star, tasks)
    else:
        bands = [_generate_band_star(task) for task in tasks]

    data = []
    for band_data in bands:
        data.extend(band_data)
    return data


def write(
    config: RasterConfig,
    collaborator: RasterCollaborator | None = None,
    workers: int = 1,
) -> WriteResult:
    """Generate all samples and write them to ``config.output_path``

    Any collaborator failure aborts the remaining steps. A created dataset is
    always closed, but nothing written before the failure is rolled back.
    """
    if collaborator is None:
        collaborator = GDALWriter()

    data = generate_samples(config, workers)
    logger.info(
        "Generated %d samples with %s", len(data), type(config.data_generator).__name__
    )

    options = creation_options(config.cloud_optimized)
    overview_factors = OVERVIEW_FACTORS if config.cloud_optimized else []
    path = os.fspath(config.output_path)
    bytes_written = 0

    dataset = collaborator.create(
        path,
        config.width,
        config.height,
        config.band_count,
        config.pixel_kind,
        options,
    )
    try:
        if config.projection is not None:
            collaborator.set_projection(dataset, config.projection)
        collaborator.set_geo_transform(dataset, config.geo_transform.to_gdal())

        for band_index in range(1, config.band_count + 1):
            start = (band_index - 1) * config.band_size
            end = band_index * config.band_size
            band_bytes = conversions.pack(config.pixel_kind, data[start:end])
            collaborator.write_band(
                dataset,
                band_index,
                (0, 0),
                (config.width, config.height),
                band_bytes,
            )
            bytes_written += len(band_bytes)
            logger.info("Wrote band %d of %d", band_index, config.band_count)

        if config.cloud_optimized:
            collaborator.build_overviews(dataset, OVERVIEW_RESAMPLING, overview_factors)
    except BaseException:
        # The original failure wins over a failure to close
        try:
            collaborator.close(dataset)
        except CollaboratorError as close_error:
            logger.warning("Failed to close %s after error: %s", path, close_error)
        raise

    collaborator.close(dataset)

    logger.info("Wrote %s", path)

    return WriteResult(
        path=path,
        width=config.width,
        height=config.height,
        band_count=config.band_count,
        pixel_kind=config.pixel_kind,
        creation_options=options,
        overview_factors=list(overview_factors),
        bytes_written=bytes_written,
    )
