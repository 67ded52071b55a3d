"""CLI entrypoint for the `transit-lab` command.

Usage:
    transit-lab parse candidates.csv
    transit-lab synthesize --period 129.9 --duration 5.2 --radius 1.17 --teff 3788 --seed 7
    transit-lab analyze --input candidates.csv --classifier-url https://example.invalid/classify
"""

from __future__ import annotations

import logging
import sys

import click

from transit_lab.cli.analyze_cli import analyze_command, crossref_command, fact_command
from transit_lab.cli.common_cli import EXIT_OK, EXIT_RUNTIME_ERROR
from transit_lab.cli.curve_cli import score_command, synthesize_command
from transit_lab.cli.records_cli import convert_command, parse_command, ranges_command


@click.group()
@click.version_option(package_name="transit-lab")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


cli.add_command(parse_command)
cli.add_command(convert_command)
cli.add_command(ranges_command)
cli.add_command(synthesize_command)
cli.add_command(score_command)
cli.add_command(crossref_command)
cli.add_command(analyze_command)
cli.add_command(fact_command)


def main() -> int:
    """Main entry point for the CLI."""
    try:
        cli(standalone_mode=False)
        return EXIT_OK
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.exceptions.Exit as e:
        return int(e.exit_code)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
