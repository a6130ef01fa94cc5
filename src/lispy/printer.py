"""Printer for Lispy values."""

from typing import IO

import click

from lispy.values import Error, Expression, Number, Symbol, Value


def to_text(value: Value) -> str:
    """Render a value as text, without a trailing newline.

    Expressions print as ``(`` children separated by single spaces ``)``,
    so an error-free value reads back to an equal tree.
    """
    if isinstance(value, Number):
        return str(value.value)
    if isinstance(value, Error):
        return f"Error: {value.message}"
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, Expression):
        return "(" + " ".join(to_text(child) for child in value.children) + ")"
    raise TypeError(f"Cannot print {type(value).__name__}")


def println(value: Value, file: IO[str] | None = None) -> None:
    """Print a value followed by a newline."""
    click.echo(to_text(value), file=file)
