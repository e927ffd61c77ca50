"""Exceptions raised by RasterFakers"""


class RasterFakersError(Exception):
    """Base exception for raster generation and encoding."""

    pass


class InvalidDimensionsError(RasterFakersError):
    """Width, height or band count is zero."""

    pass


class MissingFieldError(RasterFakersError):
    """A required configuration field was never set."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidParameterError(RasterFakersError):
    """Malformed user input, e.g. a coordinate pair or pixel kind token."""

    pass


class CollaboratorError(RasterFakersError):
    """GDAL reported a failure while creating or writing a raster."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation
