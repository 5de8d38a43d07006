"""
Command-line interface for the EMS tracker.
Downloads delivery status information by tracking code and prints it as a table.
"""

import sys
from typing import Iterable, Optional

import click
from loguru import logger
from rich.console import Console
from rich.table import Table
from rich.text import Text

from emstracker import __version__
from emstracker.config import LOG_LEVELS, init_config
from emstracker.errors import TrackingError
from emstracker.logging_config import setup_logging
from emstracker.models import Settings, TrackingStatusInfo
from emstracker.tracking import TrackingManager

console = Console()

PLACEHOLDER = "-"


def _format_date(line: TrackingStatusInfo) -> str:
    if line.date is None:
        return PLACEHOLDER
    return line.date.strftime("%Y-%m-%d %H:%M:%S UTC")


def _cell(value: Optional[str]) -> Text:
    # Carrier text is printed literally, never as console markup
    return Text(PLACEHOLDER if value is None else value)


def render_tracking_table(tracking_info: Iterable[TrackingStatusInfo]) -> Table:
    """Build a rich table of tracking events; absent fields show as ``-``."""
    table = Table(title="Tracking information")

    for title in ("Date", "ZIP code", "Description", "Status", "Weight"):
        table.add_column(title)

    for line in tracking_info:
        table.add_row(
            _format_date(line),
            _cell(line.zip_code),
            _cell(line.description),
            _cell(line.status),
            _cell(line.weight),
        )

    return table


def display_error(error: TrackingError):
    console.print("[red]Cannot get tracking information[/red]")
    console.print(str(error), markup=False)


@click.command()
@click.version_option(version=__version__, prog_name="EMS Tracker")
@click.option(
    "--tracking-code", "-C",
    help="Get tracking information for the given code",
)
@click.option(
    "--carrier",
    default=None,
    help="Carrier to query (defaults to DEFAULT_CARRIER, then \"ems\")",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
def cli(tracking_code: Optional[str], carrier: Optional[str], config: Optional[str]):
    """Download delivery status information by the tracking code."""
    tracker_config = init_config(config)
    problems = tracker_config.validate()

    if tracker_config.log_level.upper() not in LOG_LEVELS:
        tracker_config.log_level = "INFO"

    setup_logging(tracker_config)

    for problem in problems:
        logger.warning(f"Configuration: {problem}")

    settings = Settings(
        tracking_code=tracking_code,
        carrier=carrier or tracker_config.default_carrier,
    )

    if not settings.tracking_code:
        return

    manager = TrackingManager(tracker_config)

    try:
        tracking_info = manager.get_tracking_info(settings.tracking_code, settings.carrier)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--carrier")
    except TrackingError as e:
        logger.error(f"Tracking lookup failed for {settings.tracking_code}: {e!r}")
        logger.debug(f"Error raised at:\n{e.backtrace}")
        display_error(e)
        sys.exit(1)

    console.print(render_tracking_table(tracking_info))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
