"""ConeTune CLI — top-level Click group."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="conetune")
@click.option("--verbose", "-v", is_flag=True, help="Show full tracebacks on errors.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="YAML file overriding scoring/profiler constants.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """ConeTune — cone contrast testing and personalized color correction."""
    from conetune.cli import utils
    from conetune.core.config import DEFAULT_CONFIG, load_config
    from conetune.core.exceptions import ConfigError

    utils.verbose = verbose
    ctx.ensure_object(dict)
    if config_path is None:
        ctx.obj["config"] = DEFAULT_CONFIG
        return
    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        utils.console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)


def _register_commands() -> None:
    """Register all subcommands."""
    from conetune.cli.classify import classify
    from conetune.cli.color_cmd import color_cmd
    from conetune.cli.filter_cmd import filter_cmd
    from conetune.cli.threshold import threshold

    cli.add_command(classify)
    cli.add_command(color_cmd)
    cli.add_command(filter_cmd)
    cli.add_command(threshold)


_register_commands()
