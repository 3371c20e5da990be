"""conetune color — color conversions and WCAG contrast."""

from __future__ import annotations

import click

from conetune.cli.utils import FORMAT_CHOICES, console, error_handler, format_output
from conetune.color.space import (
    contrast_ratio,
    parse_hex,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
)


@click.group("color")
def color_cmd() -> None:
    """Color conversions and contrast."""


@color_cmd.command()
@click.argument("colors", nargs=-1, required=True)
@click.option("--format", "fmt", type=click.Choice(FORMAT_CHOICES),
              default="table", help="Output format.")
@error_handler
def convert(colors: tuple[str, ...], fmt: str) -> None:
    """Show RGB, HSL and relative luminance for hex COLORS."""
    rows = []
    for value in colors:
        rgb = parse_hex(value)
        h, s, l = rgb_to_hsl(*rgb)
        rows.append({
            "hex": rgb_to_hex(*rgb),
            "rgb": "{} {} {}".format(*rgb),
            "hsl": f"{h:.1f} {s:.3f} {l:.3f}",
            "luminance": f"{relative_luminance(rgb):.4f}",
        })
    format_output(rows, ["hex", "rgb", "hsl", "luminance"], fmt, "Colors")


@color_cmd.command()
@click.argument("foreground")
@click.argument("background")
@error_handler
def contrast(foreground: str, background: str) -> None:
    """WCAG contrast ratio between FOREGROUND and BACKGROUND."""
    parse_hex(foreground)
    parse_hex(background)
    ratio = contrast_ratio(foreground, background)
    level = "AAA" if ratio >= 7 else "AA" if ratio >= 4.5 else "AA-Large" if ratio >= 3 else "Fail"
    console.print(f"Contrast ratio: [bold]{ratio:.2f}:1[/bold] ({level})")
