"""Error taxonomy for transit-lab.

Structural ingestion problems and classification failures are exceptions;
individual bad rows are not (see ``transit_lab.ingest.parsing.RowSkip``).
We also keep a small, stable error envelope that the CLI and downstream
applications can serialize into their own error formats.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    EMPTY_INPUT = "EMPTY_INPUT"
    SCHEMA = "SCHEMA"
    NO_VALID_ROWS = "NO_VALID_ROWS"
    CLASSIFICATION_FAILED = "CLASSIFICATION_FAILED"
    CLASSIFICATION_IN_PROGRESS = "CLASSIFICATION_IN_PROGRESS"
    INVALID_DATA = "INVALID_DATA"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ErrorType
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


def make_error(error_type: ErrorType, message: str, **context: Any) -> ErrorEnvelope:
    return ErrorEnvelope(type=error_type, message=message, context=dict(context))


class TransitLabError(Exception):
    """Base class for all transit-lab errors."""

    error_type: ErrorType = ErrorType.INTERNAL_ERROR

    def to_envelope(self) -> ErrorEnvelope:
        return make_error(self.error_type, str(self))


# =============================================================================
# Ingestion
# =============================================================================


class IngestError(TransitLabError):
    """Raised when tabular input cannot be ingested as a whole."""


class EmptyInputError(IngestError):
    """Raised when the ingested document contains no non-empty lines."""

    error_type = ErrorType.EMPTY_INPUT

    def __init__(self, message: str = "Input contains no data.") -> None:
        super().__init__(message)


class SchemaError(IngestError):
    """Raised on a structural mismatch between the input and the record schema.

    Attributes:
        missing_fields: Required header fields absent from a header row.
        expected_columns: Canonical column order, when the column count is wrong.
        found_columns: Column count actually seen in headerless mode.
    """

    error_type = ErrorType.SCHEMA

    def __init__(
        self,
        message: str,
        *,
        missing_fields: Sequence[str] = (),
        expected_columns: Sequence[str] = (),
        found_columns: int | None = None,
    ) -> None:
        self.missing_fields = tuple(missing_fields)
        self.expected_columns = tuple(expected_columns)
        self.found_columns = found_columns
        super().__init__(message)

    def to_envelope(self) -> ErrorEnvelope:
        context: dict[str, Any] = {}
        if self.missing_fields:
            context["missing_fields"] = list(self.missing_fields)
        if self.expected_columns:
            context["expected_columns"] = list(self.expected_columns)
        if self.found_columns is not None:
            context["found_columns"] = self.found_columns
        return make_error(self.error_type, str(self), **context)


class NoValidRowsError(IngestError):
    """Raised when a single-record entry point finds no usable data row."""

    error_type = ErrorType.NO_VALID_ROWS

    def __init__(self, skipped: int = 0) -> None:
        self.skipped = int(skipped)
        super().__init__(
            f"Input does not contain any valid data rows ({self.skipped} row(s) skipped)."
        )


# =============================================================================
# Classification boundary
# =============================================================================


class ClassificationFailure(TransitLabError):
    """Raised when the external classifier fails or returns an unknown label.

    Attributes:
        raw_label: Text returned by the classifier, when one was received.
    """

    error_type = ErrorType.CLASSIFICATION_FAILED

    def __init__(self, message: str, *, raw_label: str | None = None) -> None:
        self.raw_label = raw_label
        super().__init__(message)


class ClassificationInProgressError(TransitLabError):
    """Raised when a classification is requested while another is in flight."""

    error_type = ErrorType.CLASSIFICATION_IN_PROGRESS

    def __init__(self) -> None:
        super().__init__("A classification request is already in progress for this session.")


__all__ = [
    "ClassificationFailure",
    "ClassificationInProgressError",
    "EmptyInputError",
    "ErrorEnvelope",
    "ErrorType",
    "IngestError",
    "NoValidRowsError",
    "SchemaError",
    "TransitLabError",
    "make_error",
]
