from .conversions import BandType, PixelKind, convert, pack
from .errors import (
    CollaboratorError,
    InvalidDimensionsError,
    InvalidParameterError,
    MissingFieldError,
    RasterFakersError,
)
from .gdal_io import GDALWriter, RasterCollaborator
from .geotiff import (
    GeoTransform,
    RasterBuilder,
    RasterConfig,
    WriteResult,
    creation_options,
    generate_samples,
    write,
)
from .patterns import (
    DataGenerator,
    FunctionPattern,
    GradientPattern,
    NoisePattern,
    SineWavePattern,
    get_pattern,
)
