"""Value model for the Lispy expression language.

A Value is one of four variants:
- Number: a signed integer
- Error: a typed evaluation error
- Symbol: raw operator text, only produced by the reader
- Expression: an ordered list of child values

Values are immutable. An Expression owns its children through a tuple, so a
tree is built strictly bottom-up and can never contain a cycle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

# Width of the integer literals accepted by the reader (signed 64 bit).
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


class ErrorKind(Enum):
    """Kinds of evaluation error, valued by their display message."""

    DIVISION_BY_ZERO = "Division by zero!"
    BAD_OPERATOR = "Invalid Operator!"
    BAD_NUMBER = "Invalid Number!"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class Number:
    """An integer value."""
    value: int


@dataclass(frozen=True)
class Error:
    """An evaluation error.

    Errors are ordinary values: they flow up the tree instead of being raised,
    so the first error found poisons every enclosing computation.
    """
    kind: ErrorKind

    @property
    def message(self) -> str:
        return self.kind.message


@dataclass(frozen=True)
class Symbol:
    """Operator text as it appeared in the source."""
    name: str


@dataclass(frozen=True)
class Expression:
    """An ordered list of child values, e.g. ``(+ 1 2)``."""
    children: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable but always store a tuple
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def count(self) -> int:
        return len(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.children)


Value = Union[Number, Error, Symbol, Expression]

VALUE_TYPES = (Number, Error, Symbol, Expression)


def is_value(obj: object) -> bool:
    """Check whether obj is one of the Value variants."""
    return isinstance(obj, VALUE_TYPES)


def walk(value: Value) -> Iterator[Value]:
    """Yield value and all of its descendants, depth first, children first."""
    if isinstance(value, Expression):
        for child in value.children:
            yield from walk(child)
    yield value


def fits_int(n: int) -> bool:
    """Check whether n is representable in the reader's integer width."""
    return INT_MIN <= n <= INT_MAX


def checked_number(n: int) -> Value:
    """Wrap n as a Number, or an invalid-number Error if it does not fit."""
    if not fits_int(n):
        return Error(ErrorKind.BAD_NUMBER)
    return Number(n)
