"""Detection-likelihood scoring.

Estimates the transit depth and signal-to-noise ratio a record would produce
and compares them against a reference detectability curve. The zone is
advisory only; it never gates classification.
"""

from __future__ import annotations

import math

import numpy as np

from transit_lab.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from transit_lab.domain.detection import (
    DetectionPoint,
    DetectionScore,
    DetectionZone,
    ThresholdPoint,
)
from transit_lab.domain.records import ParameterRecord

THRESHOLD_INTERCEPT = 30.0
THRESHOLD_SLOPE = 5.0


def estimate_detection_point(
    record: ParameterRecord,
    *,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> DetectionPoint:
    """Estimate (depth in ppm, SNR) for ``record``.

    Stellar radius is approximated as proportional to effective temperature,
    so depth is ``((R / 11.209) / (T / 5778)) ** 2 * 1e5``. SNR scales with
    depth, the square root of the transit duration, and inversely with the
    stellar temperature.

    The SNR is computed from the unfloored depth; both values are then
    floored (depth at ``min_depth_ppm``, SNR at ``min_snr``).

    Example:
        >>> from transit_lab.domain.records import DEFAULT_RECORD
        >>> point = estimate_detection_point(DEFAULT_RECORD)
        >>> round(point.depth, 1)
        795.9
    """
    radius_jupiter = record.planetary_radius / config.earth_radii_per_jupiter
    stellar_radius = record.stellar_temperature / config.solar_teff_k
    depth = (radius_jupiter / stellar_radius) ** 2 * config.depth_scale_ppm

    snr = (
        (depth / config.snr_depth_scale_ppm)
        * math.sqrt(record.transit_duration)
        * (config.solar_teff_k / record.stellar_temperature)
    )

    return DetectionPoint(
        depth=max(depth, config.min_depth_ppm),
        snr=max(snr, config.min_snr),
    )


def detection_threshold(depth_ppm: float) -> float:
    """Reference SNR for a reliable detection at ``depth_ppm``: ``30 - 5 * log10(depth)``."""
    if depth_ppm <= 0:
        raise ValueError(f"depth_ppm must be positive, got {depth_ppm}")
    return THRESHOLD_INTERCEPT - THRESHOLD_SLOPE * math.log10(depth_ppm)


def threshold_curve(*, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> list[ThresholdPoint]:
    """Sample the reference curve over the configured depth sweep (stop inclusive)."""
    n_steps = int(
        round((config.curve_depth_stop_ppm - config.curve_depth_start_ppm) / config.curve_depth_step_ppm)
    )
    depths = config.curve_depth_start_ppm + config.curve_depth_step_ppm * np.arange(
        n_steps + 1, dtype=np.float64
    )
    snrs = THRESHOLD_INTERCEPT - THRESHOLD_SLOPE * np.log10(depths)
    return [
        ThresholdPoint(depth=float(depth), snr=float(snr))
        for depth, snr in zip(depths, snrs, strict=True)
    ]


def classify_zone(snr: float, *, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> DetectionZone:
    if snr >= config.likely_snr:
        return DetectionZone.LIKELY
    if snr >= config.ambiguous_snr:
        return DetectionZone.AMBIGUOUS
    return DetectionZone.UNDETECTED


def score_record(
    record: ParameterRecord,
    *,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> DetectionScore:
    """Estimate the detection point for ``record`` and place it against the curve.

    Returns:
        DetectionScore with the point, its zone, the reference SNR at the
        point's depth and whether the point is on or above the curve.
    """
    point = estimate_detection_point(record, config=config)
    threshold_snr = detection_threshold(point.depth)
    return DetectionScore(
        point=point,
        zone=classify_zone(point.snr, config=config),
        threshold_snr=threshold_snr,
        above_threshold=point.snr >= threshold_snr,
    )


__all__ = [
    "THRESHOLD_INTERCEPT",
    "THRESHOLD_SLOPE",
    "classify_zone",
    "detection_threshold",
    "estimate_detection_point",
    "score_record",
    "threshold_curve",
]
