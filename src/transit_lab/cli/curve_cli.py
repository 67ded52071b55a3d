"""`transit-lab synthesize` and `score` commands."""

from __future__ import annotations

from typing import Any

import click

from transit_lab.cli.common_cli import (
    dump_json_output,
    output_option,
    record_options,
    resolve_optional_output_path,
    resolve_record,
)
from transit_lab.compute.scoring import score_record, threshold_curve
from transit_lab.compute.synthesis import synthesize_curve
from transit_lab.domain.curve import Scenario

_SCENARIO_CHOICES = [scenario.value for scenario in Scenario]


@click.command(name="synthesize")
@record_options
@click.option(
    "--scenario",
    type=click.Choice(_SCENARIO_CHOICES, case_sensitive=False),
    default=Scenario.NONE.value,
    show_default=True,
)
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible curve.")
@click.option("--summary-only", is_flag=True, default=False, help="Omit the sample points.")
@output_option
def synthesize_command(
    input_arg: str | None,
    name: str | None,
    period: float | None,
    duration: float | None,
    radius: float | None,
    teff: float | None,
    scenario: str,
    seed: int | None,
    summary_only: bool,
    output_path_arg: str | None,
) -> None:
    """Synthesize a light curve for one record."""
    out_path = resolve_optional_output_path(output_path_arg)
    record = resolve_record(
        input_arg=input_arg,
        name=name,
        period=period,
        duration=duration,
        radius=radius,
        teff=teff,
    )
    curve = synthesize_curve(record, Scenario(scenario.upper()), seed=seed)

    payload: dict[str, Any] = {
        "record": record.to_canonical_dict(),
        "seed": seed,
        "summary": curve.summary(),
    }
    if not summary_only:
        payload["points"] = curve.to_payload()
    dump_json_output(payload, out_path)


@click.command(name="score")
@record_options
@click.option(
    "--include-curve",
    is_flag=True,
    default=False,
    help="Include the reference threshold curve samples.",
)
@output_option
def score_command(
    input_arg: str | None,
    name: str | None,
    period: float | None,
    duration: float | None,
    radius: float | None,
    teff: float | None,
    include_curve: bool,
    output_path_arg: str | None,
) -> None:
    """Estimate transit depth/SNR and the advisory detection zone."""
    out_path = resolve_optional_output_path(output_path_arg)
    record = resolve_record(
        input_arg=input_arg,
        name=name,
        period=period,
        duration=duration,
        radius=radius,
        teff=teff,
    )
    score = score_record(record)

    payload: dict[str, Any] = {
        "record": record.to_canonical_dict(),
        "score": score.model_dump(mode="json"),
        "margin": score.margin,
    }
    if include_curve:
        payload["threshold_curve"] = [point.model_dump() for point in threshold_curve()]
    dump_json_output(payload, out_path)


__all__ = ["score_command", "synthesize_command"]
