import logging
import os
import sys

import click

from core import config
from core.coordinate_manager import CoordinateManager
from core.errors import MapDataError
from core.region_map import build_region_map
from exporters.html_exporter import DEFAULT_TITLE, HTMLExporter
from exporters.svg_exporter import SVGExporter

CONSOLE_FORMAT = "%(message)s"
LOGFILE_FORMAT = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"
LOGGER_NAMES = ("core", "exporters")


def init_logging(logfile=None, verbose=False):
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    handlers = [console_handler]
    if logfile:
        logfile_handler = logging.FileHandler(logfile, "w")
        logfile_handler.setLevel(logging.DEBUG)
        logfile_handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
        handlers.append(logfile_handler)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)


def _load(geojson_filename, config_filename, width, padding, skip_unsupported):
    overrides = {
        'canvas_width': width,
        'padding': padding,
        'skip_unsupported': True if skip_unsupported else None,
    }
    settings = config.settings_from_file(config_filename, overrides)
    mgr = CoordinateManager.from_file(geojson_filename, settings.skip_unsupported)
    return settings, build_region_map(mgr, settings)


def _map_options(fn):
    options = [
        click.argument('geojson_filename', type=click.Path(exists=True, dir_okay=False)),
        click.option('-c', '--config', 'config_filename', help='Path to configuration file'),
        click.option('-w', '--width', type=float, help='Canvas width'),
        click.option('-p', '--padding', type=float, help='Canvas padding'),
        click.option('--skip-unsupported', is_flag=True, help='Drop features that are not Polygon/MultiPolygon.'),
        click.option('-v', '--verbose', is_flag=True, help='Log debug output to the console.'),
        click.option('-l', '--logfile', help='Write a debug log to this file.'),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


@click.group(epilog="For detailed help on each command, run: regionmap COMMAND --help")
def cli():
    """The regionmap utility projects the regions of a GeoJSON
    FeatureCollection onto a drawing surface and exports them as
    SVG or interactive HTML maps."""
    pass


@cli.command()
@_map_options
def info(geojson_filename, config_filename, width, padding, skip_unsupported, verbose, logfile):
    """Summarizes the bounds and projection of a GeoJSON file."""
    init_logging(logfile, verbose)
    try:
        settings, region_map = _load(geojson_filename, config_filename, width, padding, skip_unsupported)
    except (MapDataError, ValueError, OSError) as e:
        click.echo(f"\nUnable to read map data: {e}")
        sys.exit(1)

    if verbose:
        settings.show()
    p = region_map.params
    click.echo(f'Regions: {len(region_map.regions)}')
    click.echo(f'  + longitude: {p.bounds.min_lon} .. {p.bounds.max_lon}')
    click.echo(f'  + latitude: {p.bounds.min_lat} .. {p.bounds.max_lat}')
    click.echo(f'  + latitude correction: {p.lat_correction:.6f}')
    click.echo(f'  + canvas: {p.canvas_width:.2f} x {p.canvas_height:.2f} (padding {p.padding})')
    click.echo(f'  + scale: x={p.scale_x:.6f} y={p.scale_y:.6f}')


@cli.command()
@_map_options
@click.option('-o', '--output', 'output_filename', required=True, help='Output file (.svg or .html)')
@click.option('-t', '--title', default=None, help='Page title for HTML output')
def export(geojson_filename, config_filename, width, padding, skip_unsupported, verbose, logfile,
           output_filename, title):
    """Writes the projected regions to an SVG or HTML file."""
    init_logging(logfile, verbose)
    extension = os.path.splitext(output_filename)[1].lower()
    try:
        _, region_map = _load(geojson_filename, config_filename, width, padding, skip_unsupported)
        if extension == '.svg':
            SVGExporter.export(region_map, output_filename)
        elif extension in ('.html', '.htm'):
            HTMLExporter.export(region_map, output_filename, title or DEFAULT_TITLE)
        else:
            raise ValueError(f"Formato '{extension}' no soportado (esperados: .svg, .html)")
    except (MapDataError, ValueError, RuntimeError, OSError) as e:
        click.echo(f"\nUnable to export map: {e}")
        sys.exit(1)
    click.echo(f'Exported {len(region_map.regions)} regions to {output_filename}')


if __name__ == "__main__":
    cli()
