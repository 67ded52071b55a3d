"""Append-only, newest-first log of completed classifications."""

from __future__ import annotations

from collections.abc import Iterator
from threading import Lock

from pydantic import BaseModel, ConfigDict

from transit_lab.domain.detection import ClassificationResult, HistoryEntry


class YearlySummary(BaseModel):
    """Classification counts for one calendar year."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int
    total_classifications: int = 0
    confirmed_exoplanets: int = 0
    planetary_candidates: int = 0
    false_positives: int = 0


_COUNT_FIELD = {
    ClassificationResult.CONFIRMED_EXOPLANET: "confirmed_exoplanets",
    ClassificationResult.PLANETARY_CANDIDATE: "planetary_candidates",
    ClassificationResult.FALSE_POSITIVE: "false_positives",
}


class HistoryLog:
    """Session-scoped history of completed classifications.

    Entries are only ever prepended; nothing is removed or edited. Appends are
    serialized with a lock so racing completions cannot interleave.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._lock = Lock()

    def append(self, entry: HistoryEntry) -> None:
        with self._lock:
            self._entries.insert(0, entry)

    def entries(self) -> tuple[HistoryEntry, ...]:
        """Snapshot of all entries, most recent first."""
        with self._lock:
            return tuple(self._entries)

    def latest(self) -> HistoryEntry | None:
        with self._lock:
            return self._entries[0] if self._entries else None

    def yearly_summary(self) -> list[YearlySummary]:
        """Counts per calendar year of the entry timestamp, newest year first."""
        counts: dict[int, dict[str, int]] = {}
        for entry in self.entries():
            year_counts = counts.setdefault(entry.timestamp.year, {"total_classifications": 0})
            year_counts["total_classifications"] += 1
            field = _COUNT_FIELD[entry.result]
            year_counts[field] = year_counts.get(field, 0) + 1
        return [
            YearlySummary(year=year, **counts[year]) for year in sorted(counts, reverse=True)
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.entries())


__all__ = ["HistoryLog", "YearlySummary"]
