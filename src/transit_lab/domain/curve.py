"""Synthetic light-curve domain models.

This module provides:
- Scenario: closed set of shapes the synthesizer can produce
- CurvePoint: one (time, flux) sample
- SyntheticCurve: internal representation with read-only numpy arrays
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


class Scenario(str, Enum):
    """Noise and shape model applied by the synthesizer."""

    CONFIRMED = "CONFIRMED"
    CANDIDATE = "CANDIDATE"
    FALSE_POSITIVE_BINARY = "FALSE_POSITIVE_BINARY"
    FALSE_POSITIVE_SPIKE = "FALSE_POSITIVE_SPIKE"
    FALSE_POSITIVE_NOISE = "FALSE_POSITIVE_NOISE"
    NONE = "NONE"  # Analysis pass, before any classification is known

    @property
    def is_false_positive(self) -> bool:
        return self in (
            Scenario.FALSE_POSITIVE_BINARY,
            Scenario.FALSE_POSITIVE_SPIKE,
            Scenario.FALSE_POSITIVE_NOISE,
        )

    @property
    def has_trapezoid_dip(self) -> bool:
        return self in (Scenario.CONFIRMED, Scenario.CANDIDATE, Scenario.NONE)


@dataclass(frozen=True)
class CurvePoint:
    """One synthesized sample.

    Attributes:
        time: Hours since the start of the observation window.
        flux: Relative brightness, nominally 1.0 out of transit.
    """

    time: float
    flux: float

    def to_dict(self) -> dict[str, float]:
        return {"time": self.time, "flux": self.flux}


@dataclass
class SyntheticCurve:
    """A synthesized light curve.

    Treat this as an internal computation structure; it is regenerated on
    demand and never persisted.

    Attributes:
        time: Sample times in hours (float64, non-decreasing)
        flux: Relative flux values (float64)
        scenario: Scenario that shaped the curve
        window_hours: Length of the observation window in hours
        transit_start: Start of the dip window in hours
        transit_end: End of the dip window in hours
        depth: Dip depth actually applied (fractional; 0 if none)
    """

    time: NDArray[np.float64]
    flux: NDArray[np.float64]
    scenario: Scenario
    window_hours: float
    transit_start: float
    transit_end: float
    depth: float = 0.0

    def __post_init__(self) -> None:
        for name, arr in (("time", self.time), ("flux", self.flux)):
            if not isinstance(arr, np.ndarray):
                raise TypeError(f"{name} must be a numpy array, got {type(arr).__name__}")
            if arr.dtype != np.float64:
                raise ValueError(f"{name} must be float64, got {arr.dtype}")
        if len(self.flux) != len(self.time):
            raise ValueError(f"flux length {len(self.flux)} != time length {len(self.time)}")

        self.time.flags.writeable = False
        self.flux.flags.writeable = False

    @property
    def n_points(self) -> int:
        return len(self.time)

    @property
    def points(self) -> list[CurvePoint]:
        return [CurvePoint(time=float(t), flux=float(f)) for t, f in zip(self.time, self.flux)]

    def to_payload(self) -> list[dict[str, float]]:
        """Samples as a JSON-friendly list of ``{"time", "flux"}`` objects."""
        return [point.to_dict() for point in self.points]

    def summary(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario.value,
            "n_points": self.n_points,
            "window_hours": self.window_hours,
            "transit_start": self.transit_start,
            "transit_end": self.transit_end,
            "depth": self.depth,
            "flux_min": float(np.min(self.flux)) if self.n_points else None,
            "flux_max": float(np.max(self.flux)) if self.n_points else None,
        }


__all__ = ["CurvePoint", "Scenario", "SyntheticCurve"]
