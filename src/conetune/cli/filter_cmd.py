"""conetune filter — build and apply color-correction filters."""

from __future__ import annotations

import click

from conetune.cli.classify import build_profile
from conetune.cli.utils import (
    FORMAT_CHOICES,
    error_handler,
    format_output,
    get_config,
    threshold_options,
)
from conetune.filters.engine import FilterEngine
from conetune.filters.presets import SUPPORTED_PRESETS, apply_preset, filter_display_name
from conetune.profile.profiler import detect_type


@click.group("filter")
def filter_cmd() -> None:
    """Build and apply color-correction filters."""


@filter_cmd.command()
@threshold_options
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@click.pass_context
@error_handler
def build(
    ctx: click.Context,
    l_threshold: float,
    m_threshold: float,
    s_threshold: float,
    declared: str | None,
    fmt: str,
) -> None:
    """Show the custom filter parameters for a set of cone thresholds."""
    metrics, profile = build_profile(
        get_config(ctx), l_threshold, m_threshold, s_threshold, declared,
    )
    engine = FilterEngine.configure(
        profile,
        detected_type=detect_type(metrics),
        thresholds={"L": l_threshold, "M": m_threshold, "S": s_threshold},
        config=get_config(ctx).profiler,
    )
    params = engine.params
    rows = [
        {
            "primary": color,
            "hue_shift": params.hue_shift[color],
            "saturation_boost": round(params.saturation_boost.get(color, 0.0), 4),
            "luminance_gain": round(params.luminance_gain.get(color, 0.0), 4),
        }
        for color in ("red", "green", "blue")
    ]
    format_output(
        rows,
        ["primary", "hue_shift", "saturation_boost", "luminance_gain"],
        fmt,
        f"Custom Filter ({params.axis}, severity {params.severity:.3f}, "
        f"preset {engine.preset})",
    )


@filter_cmd.command()
@click.argument("colors", nargs=-1, required=True)
@threshold_options
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@click.pass_context
@error_handler
def apply(
    ctx: click.Context,
    colors: tuple[str, ...],
    l_threshold: float,
    m_threshold: float,
    s_threshold: float,
    declared: str | None,
    fmt: str,
) -> None:
    """Apply the custom and recommended preset filters to COLORS."""
    metrics, profile = build_profile(
        get_config(ctx), l_threshold, m_threshold, s_threshold, declared,
    )
    engine = FilterEngine.configure(
        profile, detected_type=detect_type(metrics), config=get_config(ctx).profiler,
    )
    rows = [
        {"input": c, "custom": engine.apply(c), engine.preset: engine.apply_preset(c)}
        for c in colors
    ]
    format_output(rows, ["input", "custom", engine.preset], fmt, "Filtered Colors")


@filter_cmd.command()
@click.argument("colors", nargs=-1, required=True)
@click.option("--preset", "preset_name", type=click.Choice(sorted(SUPPORTED_PRESETS)),
              required=True, help="Preset filter.")
@click.option("--intensity", default=1.0, show_default=True,
              type=click.FloatRange(0.0, 1.0), help="Filter strength.")
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@error_handler
def preset(colors: tuple[str, ...], preset_name: str, intensity: float, fmt: str) -> None:
    """Apply an OS-style preset filter to COLORS."""
    rows = [{"input": c, "output": apply_preset(c, preset_name, intensity)} for c in colors]
    format_output(rows, ["input", "output"], fmt, filter_display_name(preset_name))
