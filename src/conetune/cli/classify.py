"""conetune classify — deficiency profile from per-channel thresholds."""

from __future__ import annotations

import click

from conetune.cli.utils import (
    FORMAT_CHOICES,
    console,
    error_handler,
    format_output,
    get_config,
    threshold_options,
)
from conetune.core.config import ConeTuneConfig
from conetune.core.models import ChannelMetrics, DeficiencyProfile
from conetune.measure.metrics import metrics_from_threshold
from conetune.profile.profiler import classify_deficiency, compare_axes, detect_type


def build_profile(
    config: ConeTuneConfig,
    l_threshold: float,
    m_threshold: float,
    s_threshold: float,
    declared: str | None,
) -> tuple[dict[str, ChannelMetrics], DeficiencyProfile]:
    """Metrics and profile for thresholds given on the command line."""
    metrics = {
        ch: metrics_from_threshold(t, config=config.scoring)
        for ch, t in (("L", l_threshold), ("M", m_threshold), ("S", s_threshold))
    }
    return metrics, classify_deficiency(metrics, declared, config.profiler)


@click.command()
@threshold_options
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@click.pass_context
@error_handler
def classify(
    ctx: click.Context,
    l_threshold: float,
    m_threshold: float,
    s_threshold: float,
    declared: str | None,
    fmt: str,
) -> None:
    """Classify the deficiency axis and severity from cone thresholds."""
    metrics, profile = build_profile(
        get_config(ctx), l_threshold, m_threshold, s_threshold, declared,
    )
    comparison = compare_axes(declared, detect_type(metrics))

    rows = [
        {
            "channel": ch,
            "threshold": m.threshold,
            "log_cs": m.log_sensitivity,
            "score": m.score,
            "category": m.category,
        }
        for ch, m in metrics.items()
    ]
    if fmt == "table":
        format_output(rows, ["channel", "threshold", "log_cs", "score", "category"],
                      fmt, "Cone Metrics")
        console.print(
            f"Axis: [bold]{profile.axis}[/bold]  severity: {profile.severity:.3f}  "
            f"detected: {comparison.detected}"
        )
        if comparison.mismatch:
            console.print(
                f"[yellow]Self-report ({comparison.declared}) does not match the "
                f"measured type ({comparison.detected}). A retest is recommended.[/yellow]"
            )
        return

    summary = [{
        "axis": profile.axis,
        "severity": round(profile.severity, 4),
        "declared": comparison.declared or "",
        "detected": comparison.detected,
        "mismatch": comparison.mismatch,
    }]
    format_output(summary, ["axis", "severity", "declared", "detected", "mismatch"],
                  fmt, "Deficiency Profile")
