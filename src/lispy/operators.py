"""Operator registry for the Lispy expression language.

Operators are binary integer functions applied pairwise while folding an
expression's operands from left to right. Each one is registered with
metadata so the CLI can document it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from lispy.values import Error, ErrorKind, Number, Value, checked_number, fits_int

BinaryImplementation = Callable[[int, int], Value]


@dataclass
class OperatorDefinition:
    """Complete definition of an operator.

    Attributes:
        symbol: Operator text as used in expressions
        name: Short human-readable name
        description: What the operator computes, including edge cases
        implementation: Callable taking two ints and returning a Value
        examples: Example expressions with their results
    """

    symbol: str
    name: str
    description: str
    implementation: BinaryImplementation
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Export for the documentation listing."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "description": self.description,
            "examples": self.examples,
        }


class OperatorRegistry:
    """Registry of the operators an expression may start with.

    Example:
        OperatorRegistry.register(OperatorDefinition(
            symbol="+",
            name="add",
            ...
        ))

        op = OperatorRegistry.get("+")
        result = op.implementation(1, 2)  # Returns Number(3)
    """

    _operators: dict[str, OperatorDefinition] = {}

    @classmethod
    def register(cls, op_def: OperatorDefinition) -> None:
        """Register an operator definition, replacing any previous one."""
        cls._operators[op_def.symbol] = op_def

    @classmethod
    def get(cls, symbol: str) -> OperatorDefinition:
        """Get an operator definition by symbol.

        Raises:
            ValueError: If the operator is not registered
        """
        if symbol not in cls._operators:
            raise ValueError(f"Unknown operator: {symbol}")
        return cls._operators[symbol]

    @classmethod
    def is_registered(cls, symbol: str) -> bool:
        """Check if an operator is registered."""
        return symbol in cls._operators

    @classmethod
    def list_all(cls) -> list[OperatorDefinition]:
        """List all registered operators in registration order."""
        return list(cls._operators.values())

    @classmethod
    def export_documentation(cls) -> dict[str, Any]:
        """Export the registry as plain data."""
        return {
            "operators": {symbol: op.to_dict() for symbol, op in cls._operators.items()},
        }

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._operators.clear()


# -----------------------------------------------------------------------------
# Built-in operators
# -----------------------------------------------------------------------------


def _add(x: int, y: int) -> Value:
    return checked_number(x + y)


def _subtract(x: int, y: int) -> Value:
    return checked_number(x - y)


def _multiply(x: int, y: int) -> Value:
    return checked_number(x * y)


def _divide(x: int, y: int) -> Value:
    """Integer division truncating toward zero."""
    if y == 0:
        return Error(ErrorKind.DIVISION_BY_ZERO)
    quotient = abs(x) // abs(y)
    return checked_number(quotient if (x < 0) == (y < 0) else -quotient)


def _remainder(x: int, y: int) -> Value:
    """Remainder matching truncating division: the sign follows x."""
    if y == 0:
        return Error(ErrorKind.DIVISION_BY_ZERO)
    remainder = abs(x) % abs(y)
    return Number(-remainder if x < 0 else remainder)


def _power(x: int, y: int) -> Value:
    """Exponentiation by repeated multiplication.

    A zero or negative exponent performs no multiplication and yields 1.
    Multiplication stops as soon as the result leaves the integer range.
    """
    if y <= 0:
        return Number(1)

    # Magnitude never grows, only the sign of -1 alternates
    if x in (-1, 0, 1):
        return Number(-1 if x == -1 and y % 2 else abs(x))

    result = 1
    for _ in range(y):
        result *= x
        if not fits_int(result):
            return Error(ErrorKind.BAD_NUMBER)
    return Number(result)


BUILTIN_OPERATORS = [
    OperatorDefinition(
        symbol="+",
        name="add",
        description="Sum of all operands",
        implementation=_add,
        examples=["(+ 1 2) => 3", "(+ 1 2 3 4) => 10"],
    ),
    OperatorDefinition(
        symbol="-",
        name="subtract",
        description="First operand minus the rest; negates a single operand",
        implementation=_subtract,
        examples=["(- 10 3 2) => 5", "(- 5) => -5"],
    ),
    OperatorDefinition(
        symbol="*",
        name="multiply",
        description="Product of all operands",
        implementation=_multiply,
        examples=["(* 2 3 4) => 24"],
    ),
    OperatorDefinition(
        symbol="/",
        name="divide",
        description="Integer division truncating toward zero; error on zero divisor",
        implementation=_divide,
        examples=["(/ 7 2) => 3", "(/ -7 2) => -3", "(/ 1 0) => Error: Division by zero!"],
    ),
    OperatorDefinition(
        symbol="%",
        name="remainder",
        description="Remainder of truncating division; error on zero divisor",
        implementation=_remainder,
        examples=["(% 10 3) => 1", "(% -7 2) => -1"],
    ),
    OperatorDefinition(
        symbol="^",
        name="power",
        description=(
            "Repeated multiplication; a zero or negative exponent gives 1, "
            "a result past 64 bits is an invalid number"
        ),
        implementation=_power,
        examples=["(^ 2 10) => 1024", "(^ 5 0) => 1", "(^ 2 64) => Error: Invalid Number!"],
    ),
]


def register_builtin_operators() -> None:
    """Register the arithmetic operators, replacing any with the same symbol."""
    for op_def in BUILTIN_OPERATORS:
        OperatorRegistry.register(op_def)


def ensure_builtin_operators(registry: type[OperatorRegistry] = OperatorRegistry) -> None:
    """Register the arithmetic operators that are not registered yet.

    Operators already registered under a built-in symbol are kept.
    """
    for op_def in BUILTIN_OPERATORS:
        if not registry.is_registered(op_def.symbol):
            registry.register(op_def)
