"""Evaluator for the Lispy expression language.

Reduces a Value tree to a single Number or Error. An expression is
``(op operand operand ...)``: the operator is folded over the operands
from left to right, and an Error anywhere in a subtree poisons every
enclosing computation.
"""

from lispy.grammar import Grammar
from lispy.operators import OperatorRegistry, ensure_builtin_operators
from lispy.reader import read_string
from lispy.values import Error, ErrorKind, Expression, Number, Symbol, Value, checked_number


class EvaluationError(Exception):
    """The evaluator was handed something that is not a Value."""
    pass


class Evaluator:
    """Evaluates a Value tree.

    Usage:
        evaluator = Evaluator()
        result = evaluator.evaluate(read_string("(+ 1 2)"))  # Number(3)
    """

    def __init__(self, registry: type[OperatorRegistry] = OperatorRegistry):
        self.registry = registry
        ensure_builtin_operators(self.registry)

    def evaluate(self, value: Value) -> Number | Error:
        """Evaluate a value and return a Number or an Error."""
        method_name = f"_eval_{type(value).__name__.lower()}"
        method = getattr(self, method_name, None)

        if method is None:
            raise EvaluationError(f"Unknown value type: {type(value).__name__}")

        return method(value)

    # -------------------------------------------------------------------------
    # Value type evaluators
    # -------------------------------------------------------------------------

    def _eval_number(self, value: Number) -> Number:
        return value

    def _eval_error(self, value: Error) -> Error:
        return value

    def _eval_symbol(self, value: Symbol) -> Error:
        """A bare operator has nothing to apply to."""
        return Error(ErrorKind.BAD_OPERATOR)

    def _eval_expression(self, value: Expression) -> Number | Error:
        """Evaluate ``(op operand ...)``."""
        if value.count == 0:
            return Error(ErrorKind.BAD_OPERATOR)

        # A single child is a grouping, e.g. the root list or (5)
        if value.count == 1:
            return self.evaluate(value.children[0])

        op, *operands = value.children
        if not isinstance(op, Symbol) or not self.registry.is_registered(op.name):
            return Error(ErrorKind.BAD_OPERATOR)

        x = self.evaluate(operands[0])

        # Unary minus
        if op.name == "-" and len(operands) == 1:
            if isinstance(x, Error):
                return x
            return checked_number(-x.value)

        for operand in operands[1:]:
            if isinstance(x, Error):
                return x
            y = self.evaluate(operand)
            x = self._apply(op.name, x, y)

        return x

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _apply(self, symbol: str, x: Number | Error, y: Number | Error) -> Number | Error:
        """Apply a binary operator; the left operand's error wins."""
        if isinstance(x, Error):
            return x
        if isinstance(y, Error):
            return y
        return self.registry.get(symbol).implementation(x.value, y.value)


# -----------------------------------------------------------------------------
# Convenience functions
# -----------------------------------------------------------------------------


def evaluate_value(value: Value) -> Number | Error:
    """Evaluate an already-read Value tree."""
    return Evaluator().evaluate(value)


def evaluate(source: str, grammar: Grammar | None = None) -> Number | Error:
    """Parse, read and evaluate a line of source.

    This is the main entry point for expression evaluation.

    Raises:
        ParseError: If source does not match the grammar
        RecursionError: If source nests deeper than the interpreter stack

    Example:
        evaluate("(* 2 (+ 1 1))")
        # Number(4)
    """
    return evaluate_value(read_string(source, grammar))
