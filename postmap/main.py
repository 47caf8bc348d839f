#!/usr/bin/env python3

import logging
import os
import sys
from typing import Dict, Optional

import click
import pyfiglet
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .cache import CoordinateCache
from .config import DEFAULT_CONFIG_PATH, load_config, map_settings
from .countries import POPULAR_COUNTRIES
from .errors import InvalidInputError, NoDataError, ResourceError
from .service import MapService

logger = logging.getLogger(__name__)

EXIT_NO_DATA = 1
EXIT_USAGE = 2


def configure_logging(verbose: bool = False) -> None:
    """Send postmap log records to stderr through rich."""
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    root = logging.getLogger("postmap")
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def terminal_size():
    try:
        size = os.get_terminal_size()
        return size.columns, size.lines
    except OSError:
        return 80, 24


def parse_dimension(value: Optional[str], terminal_size: int, param_hint: str = "dimension") -> Optional[int]:
    """Parse a dimension value that can be a number or percentage.

    Args:
        value: String value like "100", "80%", or None
        terminal_size: The terminal dimension to use for percentage calculation
        param_hint: Option name used in error messages

    Returns:
        Parsed integer value or None

    Raises:
        click.BadParameter: for anything that is not a positive size or a
            percentage in (0, 100].
    """
    if not value:
        return None

    value = value.strip()

    # Check if it's a percentage
    if value.endswith('%'):
        try:
            percentage = float(value[:-1])
        except ValueError:
            raise click.BadParameter(f"invalid percentage value: {value}", param_hint=param_hint)
        if 0 < percentage <= 100:
            return max(1, int(terminal_size * percentage / 100))
        raise click.BadParameter(f"percentage must be between 0 and 100, got {value}", param_hint=param_hint)

    try:
        size = int(value)
    except ValueError:
        raise click.BadParameter(f"invalid size value: {value}", param_hint=param_hint)
    if size > 0:
        return size
    raise click.BadParameter(f"size must be positive, got {size}", param_hint=param_hint)


def display_logo() -> None:
    """Print the postmap figlet logo."""
    print(pyfiglet.Figlet(font="small").renderText("postmap").rstrip())


def render_banner(text: str, font: str = "standard") -> str:
    """Figlet rendering of a country name, shown above a map."""
    try:
        fig = pyfiglet.Figlet(font=font, width=1000)
    except pyfiglet.FontNotFound:
        logger.warning("Unknown figlet font '%s', using 'standard'", font)
        fig = pyfiglet.Figlet(font="standard", width=1000)
    return fig.renderText(text.strip()).rstrip('\n') + '\n'


def render_country_table(countries: Dict[str, str], console: Optional[Console] = None) -> None:
    """Print available countries as a Rich table, popular ones first."""
    console = console or Console()

    if not countries:
        console.print("[dim]No countries available[/dim]")
        return

    table = Table(title="Available countries", box=box.ROUNDED)
    table.add_column("#", style="dim", width=4)
    table.add_column("Code", style="cyan")
    table.add_column("Country", style="green", overflow="fold")
    table.add_column("Popular", style="yellow")

    popular = [code for code in POPULAR_COUNTRIES if code in countries]
    others = sorted((code for code in countries if code not in popular), key=lambda c: countries[c])
    for i, code in enumerate(popular + others):
        table.add_row(str(i + 1), code, countries[code], "*" if code in popular else "")

    footer_row = ["", "Total", f"{len(countries)} countries", ""]
    table.add_row(*footer_row, style="bold")

    console.print(table)


class PostmapCommand(click.Command):
    """Custom command class that displays logo in help."""
    def format_help(self, ctx, formatter):
        """Format help with logo."""
        display_logo()
        super().format_help(ctx, formatter)


@click.command(cls=PostmapCommand)
@click.argument('country_code', required=False)
@click.option('--csv', 'csv_path', help='Semicolon-delimited postal code file (.csv or .csv.gz)')
@click.option('--uk-postcodes', help='Render the UK from a ukpostcodes.csv file (id,postcode,latitude,longitude)')
@click.option('--config', '-c', default=DEFAULT_CONFIG_PATH, help='Config file path')
@click.option('--width', help='Map width in characters (e.g., 120) or percentage of terminal (e.g., "80%")')
@click.option('--height', help='Map height in lines (e.g., 60) or percentage of terminal (e.g., "50%")')
@click.option('--radius', type=int, help='Density radius in cells around each point')
@click.option('--padding', type=float, help='Padding fraction added around the bounding box (e.g., 0.01)')
@click.option('--color/--no-color', default=None, help='Wrap map symbols in ANSI color codes')
@click.option('--banner', is_flag=True, help='Print the country name in large letters above the map')
@click.option('--font', default='standard', help='Figlet font for --banner')
@click.option('--list-available', is_flag=True, help='List country codes present in the data file')
@click.option('--verbose', '-v', is_flag=True, help='Log progress to stderr')
@click.option('--version', is_flag=True, is_eager=True, expose_value=False,
              callback=lambda ctx, param, value: (click.echo(f"postmap, version {__version__}"), ctx.exit()) if value else None,
              help='Show the version and exit.')
def main(country_code: Optional[str], csv_path: Optional[str], uk_postcodes: Optional[str], config: str,
         width: Optional[str], height: Optional[str], radius: Optional[int], padding: Optional[float],
         color: Optional[bool], banner: bool, font: str, list_available: bool, verbose: bool):
    """Render postal code coordinates as an ASCII density map.

    COUNTRY_CODE: Two-letter country code to render (e.g. US, DE, GB)

    Examples:
      postmap US --csv geonames-postal-code.csv --width 120 --height 60
      postmap --list-available --csv geonames-postal-code.csv
      postmap --uk-postcodes ukpostcodes.csv --color
    """
    configure_logging(verbose)

    try:
        settings = map_settings(load_config(config))
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    if csv_path:
        settings["csv_path"] = csv_path

    terminal_width, terminal_height = terminal_size()
    parsed_width = parse_dimension(width, terminal_width, "--width")
    parsed_height = parse_dimension(height, terminal_height, "--height")

    cache = CoordinateCache(settings["csv_path"], settings["batch_size"], settings["max_workers"],
                            preload=False)
    service = MapService(cache, settings)

    try:
        if list_available:
            render_country_table(service.available_countries())
            return

        if uk_postcodes:
            rendered = service.render_uk_map(uk_postcodes, parsed_width, parsed_height,
                                             color=color, density_radius=radius)
            title = "United Kingdom"
        else:
            if not country_code:
                print("Error: COUNTRY_CODE is required (or use --uk-postcodes / --list-available)",
                      file=sys.stderr)
                sys.exit(EXIT_USAGE)
            if settings["preload"]:
                cache.preload()
            rendered = service.render_country_map(country_code, parsed_width, parsed_height,
                                                  color=color, density_radius=radius,
                                                  padding_fraction=padding)
            title = service.available_countries().get(country_code.strip().upper(), country_code)
    except NoDataError as e:
        print(str(e), file=sys.stderr)
        sys.exit(EXIT_NO_DATA)
    except ResourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_NO_DATA)
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    if banner:
        print(render_banner(title, font), end='')
    print(rendered.text, end='')


if __name__ == "__main__":
    main()
