"""Lispy — a tiny prefix arithmetic language.

This package provides:
- Value model: Number, Error, Symbol, Expression
- Grammar: parses source text into SyntaxNode trees
- Reader: converts SyntaxNode trees into Values
- Printer: renders Values as text
- Evaluator: reduces a Value to a Number or an Error
"""

from lispy.evaluator import EvaluationError, Evaluator, evaluate, evaluate_value
from lispy.grammar import Grammar, NestingError, ParseError, SyntaxNode, parse
from lispy.operators import (
    OperatorDefinition,
    OperatorRegistry,
    ensure_builtin_operators,
    register_builtin_operators,
)
from lispy.printer import println, to_text
from lispy.reader import read, read_number, read_string
from lispy.values import (
    Error,
    ErrorKind,
    Expression,
    Number,
    Symbol,
    Value,
)

__all__ = [
    # Values
    "Error",
    "ErrorKind",
    "Expression",
    "Number",
    "Symbol",
    "Value",
    # Grammar
    "Grammar",
    "NestingError",
    "ParseError",
    "SyntaxNode",
    "parse",
    # Reader
    "read",
    "read_number",
    "read_string",
    # Printer
    "println",
    "to_text",
    # Operators
    "OperatorDefinition",
    "OperatorRegistry",
    "ensure_builtin_operators",
    "register_builtin_operators",
    # Evaluator
    "EvaluationError",
    "Evaluator",
    "evaluate",
    "evaluate_value",
]
