"""Tabular ingestion of parameter records."""

from transit_lab.ingest.parsing import (
    NAME_FIELD,
    REQUIRED_FIELDS,
    ParseResult,
    RowSkip,
    detect_header,
    parse_first_record,
    parse_record_file,
    parse_records,
    preview_records,
)

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
