"""Parsing of delimited text into parameter records.

Two input shapes are accepted:
- header row naming the columns, in any order, with an optional ``name``
- headerless rows of exactly four numbers in canonical order

The first line is a header iff at least one of its non-empty fields is not a
number. A header made only of numeric-looking tokens is therefore read as data;
this is long-standing behavior that callers rely on.

Rows that cannot be turned into a record are dropped and reported as
``RowSkip`` entries rather than aborting the whole document.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict

from transit_lab.config import DEFAULT_PARSER_CONFIG, ParserConfig
from transit_lab.domain.records import ParameterRecord
from transit_lab.errors import EmptyInputError, NoValidRowsError, SchemaError

logger = logging.getLogger(__name__)

_FLOAT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

REQUIRED_FIELDS: tuple[str, ...] = (
    "orbitalPeriod",
    "transitDuration",
    "planetaryRadius",
    "stellarTemperature",
)
NAME_FIELD = "name"

_FIELD_TO_ATTR = {
    "orbitalPeriod": "orbital_period",
    "transitDuration": "transit_duration",
    "planetaryRadius": "planetary_radius",
    "stellarTemperature": "stellar_temperature",
}

SkipReason = Literal["short_row", "wrong_width", "non_numeric", "non_positive"]


class RowSkip(BaseModel):
    """A data row that was dropped during ingestion.

    Attributes:
        line_number: 1-based line number among non-empty input lines.
        reason: Why the row was dropped.
        failed_fields: Required fields that failed validation, if any.
        raw: The original line text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    line_number: int
    reason: SkipReason
    failed_fields: tuple[str, ...] = ()
    raw: str


class ParseResult(BaseModel):
    """Records and soft-skips produced from one document.

    An empty ``records`` tuple means no row was usable; callers presenting
    the result to a user should treat that as a failure.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    records: tuple[ParameterRecord, ...]
    skipped: tuple[RowSkip, ...] = ()
    has_header: bool
    rows_examined: int

    @property
    def is_empty(self) -> bool:
        return not self.records


# =============================================================================
# Helpers
# =============================================================================


def _is_number(text: str) -> bool:
    return bool(_FLOAT_RE.match(text.strip()))


def _split_lines(text: str) -> list[str]:
    if text.startswith("\ufeff"):
        text = text[1:]
    return [line.strip() for line in text.splitlines() if line.strip()]


def _split_fields(line: str, delimiter: str) -> list[str]:
    return [field.strip() for field in line.split(delimiter)]


def detect_header(first_line: str, *, delimiter: str = ",") -> bool:
    """Return True when ``first_line`` should be read as a header row.

    A line is a header iff at least one non-empty field fails to parse as a
    number.
    """
    fields = _split_fields(first_line, delimiter)
    return any(field and not _is_number(field) for field in fields)


def _header_column_map(header_fields: list[str]) -> dict[str, int]:
    columns: dict[str, int] = {}
    for index, token in enumerate(header_fields):
        columns.setdefault(token, index)

    missing = [field for field in REQUIRED_FIELDS if field not in columns]
    if missing:
        raise SchemaError(
            f"Input is missing required header field(s): {', '.join(missing)}",
            missing_fields=missing,
        )
    return columns


def _check_headerless_width(fields: list[str]) -> None:
    if len(fields) != len(REQUIRED_FIELDS):
        raise SchemaError(
            f"Input without a header must have exactly {len(REQUIRED_FIELDS)} columns in the "
            f"order {', '.join(REQUIRED_FIELDS)}; found {len(fields)}.",
            expected_columns=REQUIRED_FIELDS,
            found_columns=len(fields),
        )


# =============================================================================
# Core parsing
# =============================================================================


def parse_records(
    text: str,
    *,
    max_rows: int | None = None,
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
) -> ParseResult:
    """Parse delimited text into parameter records.

    Args:
        text: Raw document text.
        max_rows: Optional cap on the number of data lines examined.
        config: Parser configuration (delimiter, synthesized-name prefix).

    Returns:
        ParseResult with valid records in input order and dropped rows.

    Raises:
        EmptyInputError: If the document has no non-empty lines.
        SchemaError: If a header lacks required fields, or a headerless
            document does not have exactly four columns.
    """
    if max_rows is not None and max_rows < 0:
        raise ValueError(f"max_rows must be non-negative, got {max_rows}")

    lines = _split_lines(text)
    if not lines:
        raise EmptyInputError()

    delimiter = config.delimiter
    has_header = detect_header(lines[0], delimiter=delimiter)

    if has_header:
        columns = _header_column_map(_split_fields(lines[0], delimiter))
        data_lines = lines[1:]
        line_offset = 2
    else:
        _check_headerless_width(_split_fields(lines[0], delimiter))
        columns = {field: index for index, field in enumerate(REQUIRED_FIELDS)}
        data_lines = lines
        line_offset = 1

    if max_rows is not None:
        data_lines = data_lines[:max_rows]

    min_width = max(columns[field] for field in REQUIRED_FIELDS) + 1
    name_index = columns.get(NAME_FIELD)

    records: list[ParameterRecord] = []
    skipped: list[RowSkip] = []

    for row_index, line in enumerate(data_lines, start=1):
        line_number = row_index + line_offset - 1
        fields = _split_fields(line, delimiter)

        if len(fields) < min_width:
            logger.debug(
                "Skipping line %d: %d column(s), need at least %d",
                line_number,
                len(fields),
                min_width,
            )
            skipped.append(RowSkip(line_number=line_number, reason="short_row", raw=line))
            continue
        if not has_header and len(fields) != len(REQUIRED_FIELDS):
            logger.warning(
                "Skipping line %d: expected %d columns, found %d",
                line_number,
                len(REQUIRED_FIELDS),
                len(fields),
            )
            skipped.append(RowSkip(line_number=line_number, reason="wrong_width", raw=line))
            continue

        values: dict[str, float] = {}
        non_numeric: list[str] = []
        non_positive: list[str] = []
        for field in REQUIRED_FIELDS:
            raw_value = fields[columns[field]]
            if not _is_number(raw_value):
                non_numeric.append(field)
                continue
            value = float(raw_value)
            if not math.isfinite(value) or value <= 0:
                non_positive.append(field)
                continue
            values[_FIELD_TO_ATTR[field]] = value

        if non_numeric:
            logger.warning(
                "Skipping line %d: non-numeric value(s) for %s",
                line_number,
                ", ".join(non_numeric),
            )
            skipped.append(
                RowSkip(
                    line_number=line_number,
                    reason="non_numeric",
                    failed_fields=tuple(non_numeric),
                    raw=line,
                )
            )
            continue
        if non_positive:
            logger.warning(
                "Skipping line %d: non-positive value(s) for %s",
                line_number,
                ", ".join(non_positive),
            )
            skipped.append(
                RowSkip(
                    line_number=line_number,
                    reason="non_positive",
                    failed_fields=tuple(non_positive),
                    raw=line,
                )
            )
            continue

        name = ""
        if name_index is not None and name_index < len(fields):
            name = fields[name_index]
        if not name:
            name = f"{config.name_prefix} #{row_index}"

        records.append(ParameterRecord(name=name, **values))

    return ParseResult(
        records=tuple(records),
        skipped=tuple(skipped),
        has_header=has_header,
        rows_examined=len(data_lines),
    )


def parse_first_record(
    text: str,
    *,
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
) -> ParameterRecord:
    """Parse only the first data row, for committing into the active form.

    Raises:
        EmptyInputError, SchemaError: As for ``parse_records``.
        NoValidRowsError: If the first data row was dropped or absent.
    """
    result = parse_records(text, max_rows=1, config=config)
    if result.is_empty:
        raise NoValidRowsError(skipped=len(result.skipped))
    return result.records[0]


def preview_records(
    text: str,
    *,
    max_rows: int | None = None,
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
) -> ParseResult:
    """Parse up to ``max_rows`` data rows (default: ``config.preview_rows``)."""
    limit = config.preview_rows if max_rows is None else max_rows
    return parse_records(text, max_rows=limit, config=config)


def parse_record_file(
    path: Path,
    *,
    max_rows: int | None = None,
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
) -> ParseResult:
    """Read ``path`` as UTF-8 text and parse it with ``parse_records``."""
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_records(text, max_rows=max_rows, config=config)


__all__ = [
    "NAME_FIELD",
    "REQUIRED_FIELDS",
    "ParseResult",
    "RowSkip",
    "detect_header",
    "parse_first_record",
    "parse_record_file",
    "parse_records",
    "preview_records",
]
