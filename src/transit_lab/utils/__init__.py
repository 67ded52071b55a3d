"""Shared helpers."""

from transit_lab.utils.tolerances import (
    ToleranceResult,
    check_record_tolerances,
    check_relative,
    mean_relative_difference,
    relative_difference,
)

__all__ = [
    "ToleranceResult",
    "check_record_tolerances",
    "check_relative",
    "mean_relative_difference",
    "relative_difference",
]
