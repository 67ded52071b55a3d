"""`transit-lab parse`, `convert` and `ranges` commands."""

from __future__ import annotations

from typing import Any

import click

from transit_lab.cli.common_cli import (
    EXIT_DATA_UNAVAILABLE,
    TransitLabCliError,
    cli_error_from,
    dump_json_output,
    output_option,
    read_input_text,
    resolve_optional_output_path,
)
from transit_lab.config import ParserConfig
from transit_lab.errors import IngestError
from transit_lab.ingest.parsing import parse_records
from transit_lab.units import DisplayUnit, UnitPreferences, display_ranges, from_display, to_display

_UNIT_CHOICES = [unit.value for unit in DisplayUnit]


@click.command(name="parse")
@click.argument("input_arg", metavar="INPUT")
@click.option("--max-rows", type=int, default=None, help="Examine at most this many data rows.")
@click.option("--delimiter", type=str, default=",", show_default=True)
@click.option(
    "--allow-empty",
    is_flag=True,
    default=False,
    help="Exit 0 even when no row is valid.",
)
@output_option
def parse_command(
    input_arg: str,
    max_rows: int | None,
    delimiter: str,
    allow_empty: bool,
    output_path_arg: str | None,
) -> None:
    """Parse a delimited file (or '-' for stdin) into parameter records."""
    out_path = resolve_optional_output_path(output_path_arg)
    if max_rows is not None and max_rows < 0:
        raise TransitLabCliError("--max-rows must be non-negative.")

    try:
        config = ParserConfig(delimiter=delimiter)
    except ValueError as exc:
        raise TransitLabCliError(f"Invalid --delimiter: {exc}") from exc

    text = read_input_text(input_arg)
    try:
        result = parse_records(text, max_rows=max_rows, config=config)
    except IngestError as exc:
        raise cli_error_from(exc) from exc

    payload: dict[str, Any] = {
        "has_header": result.has_header,
        "rows_examined": result.rows_examined,
        "records": [record.to_canonical_dict() for record in result.records],
        "skipped": [skip.model_dump(mode="json") for skip in result.skipped],
    }
    dump_json_output(payload, out_path)

    if result.is_empty and not allow_empty:
        raise TransitLabCliError(
            "Input does not contain any valid data rows.", exit_code=EXIT_DATA_UNAVAILABLE
        )


@click.command(name="convert")
@click.argument("value", type=float)
@click.option("--unit", type=click.Choice(_UNIT_CHOICES), required=True)
@click.option(
    "--direction",
    type=click.Choice(["to-display", "from-display"]),
    default="to-display",
    show_default=True,
)
@output_option
def convert_command(value: float, unit: str, direction: str, output_path_arg: str | None) -> None:
    """Convert VALUE between canonical and display units."""
    out_path = resolve_optional_output_path(output_path_arg)
    converted = to_display(value, unit) if direction == "to-display" else from_display(value, unit)
    dump_json_output(
        {"value": value, "unit": unit, "direction": direction, "result": converted},
        out_path,
    )


@click.command(name="ranges")
@click.option("--period-unit", type=click.Choice(["days", "years"]), default="days")
@click.option("--radius-unit", type=click.Choice(["earth", "jupiter"]), default="earth")
@click.option("--temperature-unit", type=click.Choice(["kelvin", "celsius"]), default="kelvin")
@output_option
def ranges_command(
    period_unit: str,
    radius_unit: str,
    temperature_unit: str,
    output_path_arg: str | None,
) -> None:
    """Show input bounds and steps in the chosen display units."""
    out_path = resolve_optional_output_path(output_path_arg)
    preferences = UnitPreferences(
        orbital_period=period_unit,
        planetary_radius=radius_unit,
        stellar_temperature=temperature_unit,
    )
    dump_json_output(
        {"preferences": preferences.model_dump(), "ranges": display_ranges(preferences)},
        out_path,
    )


__all__ = ["convert_command", "parse_command", "ranges_command"]
