"""Expression CLI commands — eval, read, operators."""

from typing import NoReturn

import click

from lispy.evaluator import evaluate_value
from lispy.grammar import Grammar, NestingError, ParseError, SyntaxNode
from lispy.operators import OperatorRegistry, ensure_builtin_operators
from lispy.printer import to_text
from lispy.reader import read
from lispy.values import Error


def _parse_or_exit(expression: str) -> SyntaxNode:
    """Parse a command-line expression, exiting with status 1 on failure."""
    try:
        return Grammar().parse(expression)
    except ParseError as e:
        click.echo(click.style(e.diagnostic("<arg>"), fg="red"), err=True)
        raise SystemExit(1)


def _exit_too_deep() -> NoReturn:
    click.echo(click.style(NestingError().diagnostic("<arg>"), fg="red"), err=True)
    raise SystemExit(1)


@click.command("eval")
@click.argument("expression")
@click.option(
    "--show-tree",
    is_flag=True,
    default=False,
    help="Print the parsed syntax tree before the result.",
)
def eval_cmd(expression: str, show_tree: bool):
    """Evaluate EXPRESSION and print the result.

    Evaluation errors such as division by zero are results, not failures:
    they are printed and the exit status stays 0.
    """
    node = _parse_or_exit(expression)
    try:
        tree = node.pretty() if show_tree else None
        result = evaluate_value(read(node))
    except RecursionError:
        _exit_too_deep()

    if tree is not None:
        click.echo(tree)
    colour = "red" if isinstance(result, Error) else None
    click.echo(click.style(to_text(result), fg=colour))


@click.command("read")
@click.argument("expression")
def read_cmd(expression: str):
    """Print EXPRESSION as the reader sees it, without evaluating."""
    node = _parse_or_exit(expression)
    try:
        text = to_text(read(node))
    except RecursionError:
        _exit_too_deep()
    click.echo(text)


@click.command()
def operators():
    """List the available operators."""
    ensure_builtin_operators()

    for op in OperatorRegistry.list_all():
        click.echo(click.style(f"{op.symbol}  {op.name}", bold=True))
        click.echo(f"    {op.description}")
        for example in op.examples:
            click.echo(f"    {example}")
