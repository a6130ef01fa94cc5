"""Interactive REPL command."""

from pathlib import Path

import click

from lispy.config import ConfigError, ReplConfig
from lispy.repl import run_repl


@click.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config file (defaults to $LISPY_CONFIG).",
)
@click.option(
    "--history",
    "history_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="History file to load and save.",
)
@click.option("--no-history", is_flag=True, default=False, help="Do not load or save history.")
@click.option(
    "--show-tree",
    is_flag=True,
    default=False,
    help="Print the parsed syntax tree before each result.",
)
def repl(
    config_path: Path | None,
    history_file: Path | None,
    no_history: bool,
    show_tree: bool,
):
    """Start an interactive session."""
    try:
        config = ReplConfig.load(config_path)
    except ConfigError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    overrides: dict = {}
    if history_file is not None:
        overrides["history_file"] = history_file
    if no_history:
        overrides["history_enabled"] = False
    if show_tree:
        overrides["show_tree"] = True

    run_repl(config.merge(overrides))
