"""Synthetic light-curve generation.

This module provides pure numpy functions that turn a parameter record and a
scenario into a fixed-length (time, flux) series:
- trapezoid_profile: normalized flat-bottomed dip shape
- v_profile: normalized V-shaped eclipse shape
- synthesize_curve: full curve with variability, drift, dip/artifact and noise
- scenario_for_result: display scenario for a classification result

Flux model, in order of application:
1. baseline of 1.0
2. stellar variability sinusoid (random amplitude and period)
3. linear instrumental drift (random slope)
4. scenario dip or artifact inside ``[duration, 2 * duration]``
5. uniform photon noise

Every random draw comes from the injected ``numpy.random.Generator``; the
same seed and inputs reproduce the same curve exactly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from transit_lab.config import DEFAULT_SYNTHESIS_CONFIG, SynthesisConfig
from transit_lab.domain.curve import Scenario, SyntheticCurve
from transit_lab.domain.detection import ClassificationResult
from transit_lab.domain.records import ParameterRecord

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

_FALSE_POSITIVE_SCENARIOS: tuple[Scenario, Scenario, Scenario] = (
    Scenario.FALSE_POSITIVE_BINARY,
    Scenario.FALSE_POSITIVE_SPIKE,
    Scenario.FALSE_POSITIVE_NOISE,
)


def _resolve_rng(rng: np.random.Generator | None, seed: int | None) -> np.random.Generator:
    if rng is not None and seed is not None:
        raise ValueError("Pass either rng or seed, not both")
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def confirmed_depth(record: ParameterRecord, config: SynthesisConfig = DEFAULT_SYNTHESIS_CONFIG) -> float:
    """Fractional dip depth for confirmed-grade transits: ``radius**2 / scale``."""
    return record.planetary_radius**2 / config.depth_scale


def trapezoid_profile(
    time: NDArray[np.float64],
    start: float,
    end: float,
    ramp: float,
) -> NDArray[np.float64]:
    """Normalized trapezoid dip (0 outside, 1 on the flat bottom).

    Points strictly inside ``(start, end)`` are in transit. The first and last
    ``ramp`` hours of the window are linear ingress and egress.

    Args:
        time: Sample times in hours.
        start: Transit start in hours.
        end: Transit end in hours.
        ramp: Ingress/egress length in hours (must be positive).

    Returns:
        Dip fraction per sample, in [0, 1].
    """
    if ramp <= 0:
        raise ValueError(f"ramp must be positive, got {ramp}")

    profile = np.zeros_like(time, dtype=np.float64)
    in_window = (time > start) & (time < end)
    ingress = in_window & (time < start + ramp)
    egress = in_window & ~ingress & (time > end - ramp)
    bottom = in_window & ~ingress & ~egress

    profile[ingress] = (time[ingress] - start) / ramp
    profile[egress] = (end - time[egress]) / ramp
    profile[bottom] = 1.0
    return profile


def v_profile(
    time: NDArray[np.float64],
    start: float,
    end: float,
) -> NDArray[np.float64]:
    """Normalized symmetric V dip peaking at the window midpoint.

    Returns:
        Dip fraction per sample: 1 at the midpoint, falling linearly to 0 at
        the window edges, 0 outside ``(start, end)``.
    """
    half_width = (end - start) / 2.0
    if half_width <= 0:
        raise ValueError("end must be greater than start")
    midpoint = start + half_width

    profile = np.zeros_like(time, dtype=np.float64)
    in_window = (time > start) & (time < end)
    profile[in_window] = 1.0 - np.abs(time[in_window] - midpoint) / half_width
    return profile


def synthesize_curve(
    record: ParameterRecord,
    scenario: Scenario = Scenario.NONE,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    config: SynthesisConfig = DEFAULT_SYNTHESIS_CONFIG,
) -> SyntheticCurve:
    """Generate a synthetic light curve for ``record`` shaped by ``scenario``.

    Args:
        record: Parameters of the candidate transit.
        scenario: Shape and noise model to apply.
        rng: Random source. Mutually exclusive with ``seed``.
        seed: Seed for a fresh ``default_rng``; None draws from OS entropy.
        config: Synthesis constants.

    Returns:
        SyntheticCurve with ``config.n_points`` samples. Time is rounded to
        ``config.time_decimals`` and flux to ``config.flux_decimals`` places.

    Example:
        >>> from transit_lab.domain.records import DEFAULT_RECORD
        >>> curve = synthesize_curve(DEFAULT_RECORD, Scenario.CONFIRMED, seed=7)
        >>> curve.n_points
        201
    """
    generator = _resolve_rng(rng, seed)
    scenario = Scenario(scenario)

    duration = float(record.transit_duration)
    window = duration * config.window_multiple
    transit_start = duration
    transit_end = duration * 2.0
    n_points = config.n_points

    time = np.arange(n_points, dtype=np.float64) / config.n_intervals * window

    # Draw order is part of the reproducibility contract.
    amplitude = generator.uniform(config.variability_amplitude_min, config.variability_amplitude_max)
    cycles = generator.uniform(config.variability_cycles_min, config.variability_cycles_max)
    variability_period = window / cycles
    drift = generator.uniform(-config.drift_span / 2.0, config.drift_span / 2.0)

    flux = np.ones(n_points, dtype=np.float64)
    flux += np.sin(time / variability_period * 2.0 * np.pi) * amplitude
    flux += drift * time / window

    noise_width = config.noise_width
    depth = 0.0

    if scenario.has_trapezoid_dip:
        depth = confirmed_depth(record, config)
        if scenario is Scenario.CANDIDATE:
            depth *= config.candidate_depth_factor
            noise_width = config.candidate_noise_width
        ramp = duration * config.ingress_fraction
        flux -= depth * trapezoid_profile(time, transit_start, transit_end, ramp)
    elif scenario is Scenario.FALSE_POSITIVE_BINARY:
        depth = float(generator.uniform(config.binary_depth_min, config.binary_depth_max))
        flux -= depth * v_profile(time, transit_start, transit_end)
    elif scenario is Scenario.FALSE_POSITIVE_SPIKE:
        spike_index = int(generator.integers(0, config.n_intervals))
        sign = 1.0 if generator.random() >= 0.5 else -1.0
        flux[spike_index] += sign * config.spike_magnitude
        logger.debug("Spike artifact at sample %d (sign %+.0f)", spike_index, sign)

    flux += generator.uniform(-noise_width / 2.0, noise_width / 2.0, size=n_points)

    if record.duration_exceeds_period:
        logger.debug(
            "Transit duration %.3f h exceeds orbital period %.3f d for %s",
            duration,
            record.orbital_period,
            record.name,
        )

    return SyntheticCurve(
        time=np.round(time, config.time_decimals),
        flux=np.round(flux, config.flux_decimals),
        scenario=scenario,
        window_hours=window,
        transit_start=transit_start,
        transit_end=transit_end,
        depth=depth,
    )


def scenario_for_result(
    result: ClassificationResult | None,
    *,
    rng: np.random.Generator | None = None,
    config: SynthesisConfig = DEFAULT_SYNTHESIS_CONFIG,
) -> Scenario:
    """Pick the display scenario for a classification result.

    False positives are shown as one of the three artifact scenarios, drawn
    with ``config.false_positive_weights``; no result maps to ``NONE``.
    """
    if result is None:
        return Scenario.NONE
    result = ClassificationResult(result)
    if result is ClassificationResult.CONFIRMED_EXOPLANET:
        return Scenario.CONFIRMED
    if result is ClassificationResult.PLANETARY_CANDIDATE:
        return Scenario.CANDIDATE

    generator = rng if rng is not None else np.random.default_rng()
    weights = np.asarray(config.false_positive_weights, dtype=np.float64)
    index = int(generator.choice(len(_FALSE_POSITIVE_SCENARIOS), p=weights / weights.sum()))
    return _FALSE_POSITIVE_SCENARIOS[index]


__all__ = [
    "confirmed_depth",
    "scenario_for_result",
    "synthesize_curve",
    "trapezoid_profile",
    "v_profile",
]
