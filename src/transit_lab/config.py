"""Pipeline configuration.

All configs are frozen dataclasses so one instance can be shared by every
call in a session without risk of drift. Defaults reproduce the dashboard's
canonical model.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """
    Configuration for delimited-text ingestion.

    Attributes
    ----------
    delimiter : str
        Field separator (default: ",").
    preview_rows : int
        Row cap used by the preview entry point (default: 5).
    name_prefix : str
        Prefix for synthesized record names; the 1-based data-row index is
        appended after "#".
    """

    delimiter: str = ","
    preview_rows: int = 5
    name_prefix: str = "CSV Candidate"

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ValueError("delimiter must be a non-empty string")
        if self.preview_rows < 0:
            raise ValueError("preview_rows must be non-negative")


@dataclass(frozen=True)
class SynthesisConfig:
    """
    Configuration for synthetic light-curve generation.

    The observation window is ``window_multiple * transitDuration`` hours,
    sampled at ``n_intervals + 1`` evenly spaced instants (both endpoints
    included). The transit occupies ``[duration, 2 * duration]``.

    Attributes
    ----------
    n_intervals : int
        Number of sampling intervals; the curve has ``n_intervals + 1`` points.
    window_multiple : float
        Observation window as a multiple of the transit duration.
    ingress_fraction : float
        Ingress and egress ramp length as a fraction of the transit duration.
    variability_amplitude_min, variability_amplitude_max : float
        Band for the stellar variability sinusoid amplitude.
    variability_cycles_min, variability_cycles_max : float
        The variability period is the window divided by a value in this band.
    drift_span : float
        Total width of the instrumental drift band; slope is drawn from
        ``[-drift_span / 2, drift_span / 2)`` per window.
    noise_width : float
        Full width of the uniform photon-noise band for most scenarios.
    candidate_noise_width : float
        Full width of the photon-noise band for the CANDIDATE scenario.
    depth_scale : float
        Confirmed-grade depth is ``radius ** 2 / depth_scale``.
    candidate_depth_factor : float
        CANDIDATE depth as a fraction of the confirmed-grade depth.
    binary_depth_min, binary_depth_max : float
        Band for the eclipsing-binary V-dip depth.
    spike_magnitude : float
        Magnitude of the single-sample spike artifact.
    false_positive_weights : tuple[float, float, float]
        Draw weights for binary, spike and noise artifacts when a
        false-positive display scenario must be picked.
    flux_decimals, time_decimals : int
        Output rounding precision.
    """

    n_intervals: int = 200
    window_multiple: float = 3.0
    ingress_fraction: float = 0.1

    variability_amplitude_min: float = 0.0001
    variability_amplitude_max: float = 0.0004
    variability_cycles_min: float = 2.0
    variability_cycles_max: float = 5.0
    drift_span: float = 0.0008

    noise_width: float = 0.0005
    candidate_noise_width: float = 0.0008

    depth_scale: float = 1000.0
    candidate_depth_factor: float = 0.7
    binary_depth_min: float = 0.005
    binary_depth_max: float = 0.015
    spike_magnitude: float = 0.003
    false_positive_weights: tuple[float, float, float] = (0.4, 0.3, 0.3)

    flux_decimals: int = 5
    time_decimals: int = 2

    def __post_init__(self) -> None:
        if self.n_intervals <= 0:
            raise ValueError("n_intervals must be positive")
        if self.window_multiple < 2.0:
            raise ValueError("window_multiple must be at least 2 to contain the transit")
        if not (0.0 < self.ingress_fraction < 0.5):
            raise ValueError("ingress_fraction must be in (0, 0.5)")
        if self.variability_amplitude_min > self.variability_amplitude_max:
            raise ValueError("variability amplitude band is inverted")
        if self.binary_depth_min > self.binary_depth_max:
            raise ValueError("binary depth band is inverted")
        if (
            len(self.false_positive_weights) != 3
            or any(weight < 0 for weight in self.false_positive_weights)
            or sum(self.false_positive_weights) <= 0
        ):
            raise ValueError("false_positive_weights must be three non-negative weights")

    @property
    def n_points(self) -> int:
        return self.n_intervals + 1


@dataclass(frozen=True)
class ScoringConfig:
    """
    Configuration for the detection-likelihood scorer.

    Attributes
    ----------
    solar_teff_k : float
        Reference temperature; a star at this temperature has radius factor 1.
    earth_radii_per_jupiter : float
        Earth radii in one Jupiter radius.
    depth_scale_ppm : float
        Scale applied to the squared radius ratio.
    snr_depth_scale_ppm : float
        Depth that contributes an SNR of 1 per sqrt(hour).
    min_depth_ppm, min_snr : float
        Floors applied to the estimates.
    likely_snr, ambiguous_snr : float
        Zone boundaries: at or above ``likely_snr`` is a likely detection,
        at or above ``ambiguous_snr`` is ambiguous, below is undetected.
    curve_depth_start_ppm, curve_depth_stop_ppm, curve_depth_step_ppm : float
        Sweep of the reference threshold curve (inclusive of the stop).
    """

    solar_teff_k: float = 5778.0
    earth_radii_per_jupiter: float = 11.209
    depth_scale_ppm: float = 100_000.0
    snr_depth_scale_ppm: float = 500.0
    min_depth_ppm: float = 10.0
    min_snr: float = 1.0
    likely_snr: float = 10.0
    ambiguous_snr: float = 5.0
    curve_depth_start_ppm: float = 100.0
    curve_depth_stop_ppm: float = 10_000.0
    curve_depth_step_ppm: float = 100.0

    def __post_init__(self) -> None:
        if self.ambiguous_snr > self.likely_snr:
            raise ValueError("ambiguous_snr must not exceed likely_snr")
        if self.curve_depth_start_ppm <= 0 or self.curve_depth_step_ppm <= 0:
            raise ValueError("threshold sweep must use positive depths and step")


@dataclass(frozen=True)
class MatchConfig:
    """
    Configuration for catalog cross-referencing.

    Attributes
    ----------
    mode : str
        "per_field" checks each tolerance band and returns the first match in
        catalog order; "averaged" scores the mean relative difference and
        returns the best match under ``combined_tolerance``.
    period_tolerance, radius_tolerance, temperature_tolerance : float
        Strict relative bands used by "per_field".
    combined_tolerance : float
        Inclusive bound on the averaged relative difference.
    """

    mode: str = "per_field"
    period_tolerance: float = 0.05
    radius_tolerance: float = 0.10
    temperature_tolerance: float = 0.10
    combined_tolerance: float = 0.15

    def __post_init__(self) -> None:
        if self.mode not in ("per_field", "averaged"):
            raise ValueError("mode must be 'per_field' or 'averaged'")


@dataclass(frozen=True)
class ClassifierSettings:
    """
    Connection settings for the external classification service.

    Attributes
    ----------
    url : str | None
        Endpoint receiving classification requests.
    fact_url : str | None
        Optional endpoint for the fact-of-the-day text.
    api_key : str | None
        Bearer token sent with each request.
    model : str
        Model identifier forwarded to the service.
    timeout_seconds : float
        Per-request timeout.
    """

    url: str | None = None
    fact_url: str | None = None
    api_key: str | None = None
    model: str = "gemini-2.5-flash"
    timeout_seconds: float = 60.0

    @classmethod
    def from_env(cls) -> ClassifierSettings:
        timeout_text = os.environ.get("TRANSIT_LAB_CLASSIFIER_TIMEOUT", "").strip()
        return cls(
            url=os.environ.get("TRANSIT_LAB_CLASSIFIER_URL") or None,
            fact_url=os.environ.get("TRANSIT_LAB_FACT_URL") or None,
            api_key=os.environ.get("TRANSIT_LAB_API_KEY") or None,
            model=os.environ.get("TRANSIT_LAB_CLASSIFIER_MODEL") or cls.model,
            timeout_seconds=float(timeout_text) if timeout_text else cls.timeout_seconds,
        )


DEFAULT_PARSER_CONFIG = ParserConfig()
DEFAULT_SYNTHESIS_CONFIG = SynthesisConfig()
DEFAULT_SCORING_CONFIG = ScoringConfig()
DEFAULT_MATCH_CONFIG = MatchConfig()

__all__ = [
    "ClassifierSettings",
    "DEFAULT_MATCH_CONFIG",
    "DEFAULT_PARSER_CONFIG",
    "DEFAULT_SCORING_CONFIG",
    "DEFAULT_SYNTHESIS_CONFIG",
    "MatchConfig",
    "ParserConfig",
    "ScoringConfig",
    "SynthesisConfig",
]
