"""Classification orchestration and history."""

from transit_lab.pipeline.facade import (
    ANALYSIS_FAILED_MESSAGE,
    AnalysisOutcome,
    AnalysisStatus,
    PipelineFacade,
)
from transit_lab.pipeline.history import HistoryLog, YearlySummary

__all__ = [
    "ANALYSIS_FAILED_MESSAGE",
    "AnalysisOutcome",
    "AnalysisStatus",
    "HistoryLog",
    "PipelineFacade",
    "YearlySummary",
]
