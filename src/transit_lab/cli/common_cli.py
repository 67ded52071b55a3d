"""Shared helpers for click-based `transit-lab` commands."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from pydantic import ValidationError

from transit_lab.domain.records import DEFAULT_RECORD_NAME, ParameterRecord
from transit_lab.errors import (
    ClassificationFailure,
    IngestError,
    NoValidRowsError,
    TransitLabError,
)
from transit_lab.ingest.parsing import parse_first_record

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_DATA_UNAVAILABLE = 4
EXIT_REMOTE_FAILURE = 5

F = TypeVar("F", bound=Callable[..., Any])


class TransitLabCliError(click.ClickException):
    """Click exception with explicit exit-code control."""

    def __init__(self, message: str, *, exit_code: int = EXIT_INPUT_ERROR) -> None:
        super().__init__(message)
        self.exit_code = int(exit_code)


def cli_error_from(exc: Exception) -> TransitLabCliError:
    """Map a library exception onto a CLI error with the matching exit code."""
    if isinstance(exc, NoValidRowsError):
        return TransitLabCliError(str(exc), exit_code=EXIT_DATA_UNAVAILABLE)
    if isinstance(exc, IngestError):
        return TransitLabCliError(str(exc), exit_code=EXIT_INPUT_ERROR)
    if isinstance(exc, ValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(part) for part in first.get("loc", ()))
        detail = first.get("msg", str(exc))
        return TransitLabCliError(
            f"Invalid record value{f' for {loc}' if loc else ''}: {detail}",
            exit_code=EXIT_INPUT_ERROR,
        )
    if isinstance(exc, ClassificationFailure):
        return TransitLabCliError(str(exc), exit_code=EXIT_REMOTE_FAILURE)
    if isinstance(exc, TransitLabError):
        return TransitLabCliError(str(exc), exit_code=EXIT_RUNTIME_ERROR)
    return TransitLabCliError(f"{type(exc).__name__}: {exc}", exit_code=EXIT_RUNTIME_ERROR)


def dump_json_output(payload: dict[str, Any], out_path: Path | None) -> None:
    """Write JSON payload to file or stdout."""
    text = json.dumps(payload, sort_keys=True, indent=2)
    if out_path is None:
        click.echo(text)
        return
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text + "\n", encoding="utf-8")


def resolve_optional_output_path(output_arg: str | None) -> Path | None:
    """Map '-', empty, or None to stdout; otherwise return filesystem path."""
    if output_arg is None:
        return None
    value = str(output_arg).strip()
    if value in {"", "-"}:
        return None
    return Path(value)


def read_input_text(input_arg: str) -> str:
    """Read a document from a path, or from stdin when given '-'."""
    if str(input_arg).strip() == "-":
        return sys.stdin.read()
    path = Path(input_arg)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise TransitLabCliError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise TransitLabCliError(f"Cannot read input file: {exc}") from exc


# =============================================================================
# Record options
# =============================================================================


def record_options(func: F) -> F:
    """Attach the options that describe one parameter record."""
    options = [
        click.option(
            "--input",
            "input_arg",
            type=str,
            default=None,
            help="Delimited file whose first data row is used ('-' for stdin).",
        ),
        click.option("--name", type=str, default=None, help="Candidate name."),
        click.option("--period", type=float, default=None, help="Orbital period (days)."),
        click.option("--duration", type=float, default=None, help="Transit duration (hours)."),
        click.option("--radius", type=float, default=None, help="Planetary radius (Earth radii)."),
        click.option("--teff", type=float, default=None, help="Stellar temperature (K)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_record(
    *,
    input_arg: str | None,
    name: str | None,
    period: float | None,
    duration: float | None,
    radius: float | None,
    teff: float | None,
) -> ParameterRecord:
    """Build a record from ``--input`` or from the four value options.

    Values given as options override the corresponding fields of the
    ``--input`` row.
    """
    overrides: dict[str, Any] = {
        key: value
        for key, value in (
            ("orbital_period", period),
            ("transit_duration", duration),
            ("planetary_radius", radius),
            ("stellar_temperature", teff),
        )
        if value is not None
    }
    if name:
        overrides["name"] = name

    try:
        if input_arg is not None:
            base = parse_first_record(read_input_text(input_arg))
            return base.replace(**overrides) if overrides else base

        missing = [
            flag
            for flag, key in (
                ("--period", "orbital_period"),
                ("--duration", "transit_duration"),
                ("--radius", "planetary_radius"),
                ("--teff", "stellar_temperature"),
            )
            if key not in overrides
        ]
        if missing:
            raise TransitLabCliError(
                f"Provide --input or all of --period/--duration/--radius/--teff (missing {', '.join(missing)})."
            )
        overrides.setdefault("name", DEFAULT_RECORD_NAME)
        return ParameterRecord.model_validate(overrides)
    except (IngestError, ValidationError) as exc:
        raise cli_error_from(exc) from exc


def output_option(func: F) -> F:
    return click.option(
        "-o",
        "--output",
        "output_path_arg",
        type=str,
        default=None,
        help="Output path (default: stdout). Use '-' for stdout.",
    )(func)


__all__ = [
    "EXIT_DATA_UNAVAILABLE",
    "EXIT_INPUT_ERROR",
    "EXIT_OK",
    "EXIT_REMOTE_FAILURE",
    "EXIT_RUNTIME_ERROR",
    "TransitLabCliError",
    "cli_error_from",
    "dump_json_output",
    "output_option",
    "read_input_text",
    "record_options",
    "resolve_optional_output_path",
    "resolve_record",
]
