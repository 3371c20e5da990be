"""conetune threshold — estimate cone thresholds from trial data."""

from __future__ import annotations

import click

from conetune.cli.utils import (
    FORMAT_CHOICES,
    console,
    error_handler,
    format_output,
    get_config,
    parse_number_list,
    parse_response_list,
)
from conetune.measure.metrics import metrics_from_threshold
from conetune.measure.thresholding import (
    ThresholdError,
    threshold_from_fixed_levels,
    threshold_from_reversals,
)


@click.group()
def threshold() -> None:
    """Estimate a contrast threshold from trial data."""


@threshold.command()
@click.argument("contrasts", nargs=-1, required=True, type=float)
@click.option("--last-n", default=6, show_default=True, type=click.IntRange(min=1),
              help="Number of reversals to average.")
@click.option("--discard-first", default=1, show_default=True, type=click.IntRange(min=0),
              help="Early reversals to discard.")
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@click.pass_context
@error_handler
def reversals(
    ctx: click.Context,
    contrasts: tuple[float, ...],
    last_n: int,
    discard_first: int,
    fmt: str,
) -> None:
    """Staircase estimate from a sequence of presented CONTRASTS."""
    result = threshold_from_reversals(list(contrasts), last_n=last_n, discard_first=discard_first)
    if isinstance(result, ThresholdError):
        console.print(f"[yellow]Insufficient data:[/yellow] {result.message}")
        raise SystemExit(1)

    metrics = metrics_from_threshold(
        result.threshold,
        std_error=result.standard_error,
        trial_count=len(contrasts),
        config=get_config(ctx).scoring,
    )
    rows = [{
        "threshold": f"{result.threshold:.4g}",
        "std": f"{result.std:.4g}",
        "reversals": result.total_reversals,
        "used": " ".join(f"{v:g}" for v in result.used),
        "log_cs": metrics.log_sensitivity,
        "score": metrics.score,
        "category": metrics.category,
    }]
    format_output(
        rows,
        ["threshold", "std", "reversals", "used", "log_cs", "score", "category"],
        fmt,
        "Staircase Threshold",
    )


@threshold.command()
@click.option("--levels", required=True, help="Tested contrast levels, e.g. '1,5,10,25,50,100'.")
@click.option("--responses", required=True,
              help="One response per level: correct/miss (or 1/0).")
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@click.pass_context
@error_handler
def fixed(ctx: click.Context, levels: str, responses: str, fmt: str) -> None:
    """Bracketing estimate from one response per fixed contrast level."""
    level_values = parse_number_list(levels, "--levels")
    response_values = parse_response_list(responses, "--responses")
    value = threshold_from_fixed_levels(level_values, response_values)

    metrics = metrics_from_threshold(
        value, trial_count=len(level_values), config=get_config(ctx).scoring,
    )
    rows = [{
        "threshold": f"{value:.4g}",
        "log_cs": metrics.log_sensitivity,
        "score": metrics.score,
        "category": metrics.category,
    }]
    format_output(rows, ["threshold", "log_cs", "score", "category"], fmt, "Fixed-Level Threshold")
