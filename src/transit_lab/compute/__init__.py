"""Compute operations for curve synthesis and detection scoring.

This module provides numerical primitives for:
- Synthetic light-curve generation per display scenario
- Detection depth/SNR estimation and the reference threshold curve
"""

from __future__ import annotations

from transit_lab.compute.scoring import (
    classify_zone,
    detection_threshold,
    estimate_detection_point,
    score_record,
    threshold_curve,
)
from transit_lab.compute.synthesis import (
    confirmed_depth,
    scenario_for_result,
    synthesize_curve,
    trapezoid_profile,
    v_profile,
)

__all__ = [
    "classify_zone",
    "confirmed_depth",
    "detection_threshold",
    "estimate_detection_point",
    "scenario_for_result",
    "score_record",
    "synthesize_curve",
    "threshold_curve",
    "trapezoid_profile",
    "v_profile",
]
