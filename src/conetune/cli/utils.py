"""Shared CLI utilities — Rich console, error handling, output formatting."""

from __future__ import annotations

import csv
import functools
import io
import json
import traceback
from typing import Any, Callable

import click
from rich.console import Console
from rich.table import Table

from conetune.core.config import DEFAULT_CONFIG, ConeTuneConfig

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False

FORMAT_CHOICES = ["table", "csv", "json"]

_TRUE_TOKENS = frozenset({"correct", "c", "1", "true", "yes", "y", "hit"})
_FALSE_TOKENS = frozenset({"miss", "m", "0", "false", "no", "n", "incorrect"})


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator wrapping CLI commands with standard error handling.

    Catches ConeTuneError (exit 1) and unexpected exceptions (exit 2).
    With --verbose, unexpected errors include the full traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from conetune.core.exceptions import ConeTuneError

        try:
            return func(*args, **kwargs)
        except (SystemExit, click.ClickException):
            raise
        except ConeTuneError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Internal error:[/red] {e}")
                console.print(traceback.format_exc())
            else:
                console.print(
                    f"[red]Internal error:[/red] {type(e).__name__}: {e}\n"
                    "[dim]Use --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper


def get_config(ctx: click.Context) -> ConeTuneConfig:
    """Config loaded by the top-level group, or the defaults."""
    obj = ctx.find_object(dict) or {}
    return obj.get("config", DEFAULT_CONFIG)


def format_output(
    rows: list[dict[str, Any]],
    columns: list[str],
    fmt: str,
    title: str,
) -> None:
    """Render rows in the requested format (table, csv, or json).

    Args:
        rows: List of dicts, each with keys matching columns.
        columns: Column names (display order).
        fmt: One of "table", "csv", "json".
        title: Title for table output.
    """
    if fmt == "table":
        table = Table(show_header=True, title=title)
        for col in columns:
            if col == columns[0]:
                table.add_column(col, style="bold")
            else:
                table.add_column(col)
        for row in rows:
            table.add_row(*(str(row.get(c, "")) for c in columns))
        console.print(table)
    elif fmt == "csv":
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(columns)
        for row in rows:
            writer.writerow([row.get(c, "") for c in columns])
        # Print without trailing newline from csv module
        console.print(buf.getvalue().rstrip())
    elif fmt == "json":
        console.print(json.dumps(rows, indent=2), markup=False, highlight=False)


def parse_number_list(value: str, name: str) -> list[float]:
    """Parse "1, 5, 10" (commas or whitespace) into floats."""
    tokens = value.replace(",", " ").split()
    try:
        return [float(t) for t in tokens]
    except ValueError:
        raise click.BadParameter(f"expected numbers, got {value!r}", param_hint=name) from None


def parse_response_list(value: str, name: str) -> list[bool]:
    """Parse "correct,miss,..." style responses into booleans."""
    result = []
    for token in value.replace(",", " ").split():
        key = token.lower()
        if key in _TRUE_TOKENS:
            result.append(True)
        elif key in _FALSE_TOKENS:
            result.append(False)
        else:
            raise click.BadParameter(f"unknown response {token!r}", param_hint=name)
    return result


def threshold_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add -L/-M/-S threshold options and --declared to a command."""
    options = [
        click.option("-L", "--l-threshold", "l_threshold", type=float, required=True,
                     help="L-cone (red) threshold, percent."),
        click.option("-M", "--m-threshold", "m_threshold", type=float, required=True,
                     help="M-cone (green) threshold, percent."),
        click.option("-S", "--s-threshold", "s_threshold", type=float, required=True,
                     help="S-cone (blue) threshold, percent."),
        click.option("--declared", default=None,
                     help="Self-reported type (protan, deutan, tritan, none, unknown)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func
