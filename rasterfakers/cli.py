#!/usr/bin/env python3
"""RasterFakers CLI - Generate synthetic GeoTIFF files for tests and fixtures

No real imagery is involved: every pixel comes from a deterministic pattern.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from . import geotiff, patterns
from .conversions import PixelKind
from .errors import InvalidParameterError, RasterFakersError


def parse_pair(value: str) -> tuple[float, float]:
    """Parse "a,b" into two floats"""
    parts = value.split(",")
    if len(parts) != 2:
        raise InvalidParameterError(
            f"Expected two comma-separated values, got {value!r}"
        )
    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError as e:
        raise InvalidParameterError(f"Invalid number in {value!r}: {e}") from e


class CoordinatePair(click.ParamType):
    """Custom Click type for "x,y" pairs such as resolutions and corners."""

    name = "x,y"

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value
        try:
            return parse_pair(value)
        except InvalidParameterError as e:
            self.fail(str(e), param, ctx)


# Configure logging
def setup_logging(verbose: bool):
    """Configure logging based on verbosity."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
        )


def _print_summary(result: geotiff.WriteResult, config: geotiff.RasterConfig):
    console = Console()

    table = Table(title="Synthetic GeoTIFF", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    minx, miny, maxx, maxy = config.geo_transform.bounds(config.width, config.height)

    table.add_row("Path", result.path)
    table.add_row("Size", f"{result.width} x {result.height} px")
    table.add_row("Bands", str(result.band_count))
    table.add_row("Data Type", result.pixel_kind.band_type.gdal_name)
    table.add_row("Pattern", type(config.data_generator).__name__)
    table.add_row("Projection", config.projection or "none")
    table.add_row("Bounds", f"{minx:.6f}, {miny:.6f}, {maxx:.6f}, {maxy:.6f}")
    table.add_row("Creation Options", " ".join(result.creation_options) or "none")
    table.add_row(
        "Overviews", ", ".join(str(f) for f in result.overview_factors) or "none"
    )

    console.print(table)


@click.group()
@click.version_option(package_name="rasterfakers")
def cli():
    """RasterFakers CLI - Generate synthetic GeoTIFF files.

    Rasters are filled from deterministic patterns, so the same options always
    produce the same pixels.

    \b
    Examples:
        rasterfakers generate gradient.tif
        rasterfakers generate sine.tif -w 512 -e 512 -b 3 -t f32 --pattern sine
        rasterfakers generate cog.tif --pattern noise --cloud-optimized
        rasterfakers patterns
    """
    pass


@cli.command("generate")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-w",
    "--width",
    type=int,
    default=geotiff.DEFAULT_WIDTH,
    help="Width in pixels (default: 256)",
)
@click.option(
    "-e",
    "--height",
    type=int,
    default=geotiff.DEFAULT_HEIGHT,
    help="Height in pixels (default: 256)",
)
@click.option(
    "-b",
    "--bands",
    type=int,
    default=geotiff.DEFAULT_BANDS,
    help="Number of bands (default: 1)",
)
@click.option(
    "-t",
    "--data-type",
    type=click.Choice([kind.value for kind in PixelKind]),
    default=PixelKind.F64.value,
    help="Pixel data type (default: f64)",
)
@click.option(
    "-p",
    "--projection",
    default="EPSG:4326",
    help="Projection, e.g. EPSG:3857 or WKT (default: EPSG:4326)",
)
@click.option(
    "-r",
    "--pixel-resolution",
    type=CoordinatePair(),
    default="1.0,1.0",
    help="Pixel size as x,y (default: 1.0,1.0)",
)
@click.option(
    "-c",
    "--upper-left-corner",
    type=CoordinatePair(),
    default="0.0,0.0",
    help="Upper-left corner as x,y (default: 0.0,0.0)",
)
@click.option(
    "--pattern",
    type=click.Choice([p.value for p in patterns.PatternName]),
    default=patterns.PatternName.GRADIENT.value,
    help="Data pattern (default: gradient)",
)
@click.option(
    "--cloud-optimized",
    is_flag=True,
    help="Tile, LZW-compress and add overviews (2, 4, 8, 16)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    help="Processes used to generate bands (default: 1)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def generate_command(
    output: Path,
    width: int,
    height: int,
    bands: int,
    data_type: str,
    projection: str,
    pixel_resolution: tuple[float, float],
    upper_left_corner: tuple[float, float],
    pattern: str,
    cloud_optimized: bool,
    workers: int,
    verbose: bool,
):
    """Generate a synthetic GeoTIFF.

    OUTPUT is the path of the GeoTIFF file to write.

    \b
    Examples:
        rasterfakers generate out.tif -t u8
        rasterfakers generate out.tif -r 0.25,0.25 -c 30.0,10.0 -p EPSG:4326
        rasterfakers generate out.tif -b 4 --pattern noise --workers 4 -v
    """
    setup_logging(verbose)

    try:
        config = (
            geotiff.RasterBuilder()
            .set_dimensions(width, height)
            .set_bands(bands)
            .set_projection(projection or None)
            .set_geo_transform(
                geotiff.GeoTransform.from_origin(upper_left_corner, pixel_resolution)
            )
            .set_data_generator(patterns.get_pattern(pattern))
            .set_cloud_optimized(cloud_optimized)
            .set_output_path(output)
            .build(PixelKind.parse(data_type))
        )

        result = config.write(workers=workers)

        _print_summary(result, config)
        click.echo(f"GeoTIFF generated successfully at {output}")

    except RasterFakersError as e:
        click.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


@cli.command("patterns")
def patterns_command():
    """List the built-in data patterns."""
    for name, pattern_cls in patterns.PATTERNS.items():
        click.echo(f"  {name.value:<10} {patterns.describe(pattern_cls)}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
