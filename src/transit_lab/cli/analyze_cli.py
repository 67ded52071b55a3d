"""`transit-lab crossref`, `analyze` and `fact` commands."""

from __future__ import annotations

from dataclasses import replace

import click
import numpy as np

from transit_lab.catalogs.crossmatch import cross_reference
from transit_lab.classify.boundary import fascinating_fact
from transit_lab.classify.http_client import HttpClassifier
from transit_lab.cli.common_cli import (
    EXIT_REMOTE_FAILURE,
    TransitLabCliError,
    dump_json_output,
    output_option,
    record_options,
    resolve_optional_output_path,
    resolve_record,
)
from transit_lab.config import ClassifierSettings, MatchConfig
from transit_lab.pipeline.facade import PipelineFacade


def _settings_from_options(
    classifier_url: str | None,
    timeout: float | None,
    *,
    require_url: bool,
) -> ClassifierSettings:
    settings = ClassifierSettings.from_env()
    if classifier_url:
        settings = replace(settings, url=classifier_url)
    if timeout is not None:
        settings = replace(settings, timeout_seconds=float(timeout))
    if require_url and not settings.url:
        raise TransitLabCliError(
            "No classifier endpoint configured. Pass --classifier-url or set "
            "TRANSIT_LAB_CLASSIFIER_URL."
        )
    return settings


@click.command(name="crossref")
@record_options
@click.option(
    "--mode",
    type=click.Choice(["per_field", "averaged"]),
    default="per_field",
    show_default=True,
)
@output_option
def crossref_command(
    input_arg: str | None,
    name: str | None,
    period: float | None,
    duration: float | None,
    radius: float | None,
    teff: float | None,
    mode: str,
    output_path_arg: str | None,
) -> None:
    """Match a record against the known-body catalog."""
    out_path = resolve_optional_output_path(output_path_arg)
    record = resolve_record(
        input_arg=input_arg,
        name=name,
        period=period,
        duration=duration,
        radius=radius,
        teff=teff,
    )
    result = cross_reference(record, config=MatchConfig(mode=mode))
    dump_json_output(
        {"record": record.to_canonical_dict(), "mode": mode, "cross_reference": result.model_dump(mode="json")},
        out_path,
    )


@click.command(name="analyze")
@record_options
@click.option("--classifier-url", type=str, default=None, help="Classifier endpoint URL.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.option("--seed", type=int, default=None, help="Random seed for the synthesized curves.")
@click.option("--include-curves", is_flag=True, default=False, help="Include curve sample points.")
@output_option
def analyze_command(
    input_arg: str | None,
    name: str | None,
    period: float | None,
    duration: float | None,
    radius: float | None,
    teff: float | None,
    classifier_url: str | None,
    timeout: float | None,
    seed: int | None,
    include_curves: bool,
    output_path_arg: str | None,
) -> None:
    """Classify one record with the external service and cross-reference it."""
    out_path = resolve_optional_output_path(output_path_arg)
    record = resolve_record(
        input_arg=input_arg,
        name=name,
        period=period,
        duration=duration,
        radius=radius,
        teff=teff,
    )
    settings = _settings_from_options(classifier_url, timeout, require_url=True)
    classifier = HttpClassifier(settings)
    facade = PipelineFacade(
        classifier,
        rng=np.random.default_rng(seed),
        model=settings.model,
    )

    outcome = facade.analyze(record)
    dump_json_output(outcome.to_dict(include_curves=include_curves), out_path)
    if not outcome.succeeded:
        raise TransitLabCliError(outcome.message, exit_code=EXIT_REMOTE_FAILURE)


@click.command(name="fact")
@record_options
@click.option("--fact-url", type=str, default=None, help="Fact endpoint URL.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@output_option
def fact_command(
    input_arg: str | None,
    name: str | None,
    period: float | None,
    duration: float | None,
    radius: float | None,
    teff: float | None,
    fact_url: str | None,
    timeout: float | None,
    output_path_arg: str | None,
) -> None:
    """Print a fact about exoplanets related to the record (never fails)."""
    out_path = resolve_optional_output_path(output_path_arg)
    record = resolve_record(
        input_arg=input_arg,
        name=name,
        period=period,
        duration=duration,
        radius=radius,
        teff=teff,
    )
    settings = _settings_from_options(None, timeout, require_url=False)
    if fact_url:
        settings = replace(settings, fact_url=fact_url)

    provider = HttpClassifier(settings) if settings.fact_url else None
    text = fascinating_fact(provider, record)
    dump_json_output({"record": record.to_canonical_dict(), "fact": text}, out_path)


__all__ = ["analyze_command", "crossref_command", "fact_command"]
