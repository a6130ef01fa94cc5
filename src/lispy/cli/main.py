"""Lispy CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """Lispy — a tiny prefix arithmetic language."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from lispy.cli.expr_cmd import eval_cmd, operators, read_cmd  # noqa: E402
from lispy.cli.repl_cmd import repl  # noqa: E402

cli.add_command(repl)
cli.add_command(eval_cmd)
cli.add_command(read_cmd)
cli.add_command(operators)
