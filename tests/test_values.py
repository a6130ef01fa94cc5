"""Tests for the Lispy value model."""

import gc
import weakref

import pytest

from lispy import evaluate_value, read_string
from lispy.values import (
    INT_MAX,
    INT_MIN,
    Error,
    ErrorKind,
    Expression,
    Number,
    Symbol,
    fits_int,
    is_value,
    walk,
)


class TestVariants:
    def test_values_compare_structurally(self):
        assert Number(3) == Number(3)
        assert Number(3) != Number(4)
        assert Symbol("+") == Symbol("+")
        assert Expression((Number(1), Symbol("+"))) == Expression((Number(1), Symbol("+")))
        assert Error(ErrorKind.BAD_NUMBER) == Error(ErrorKind.BAD_NUMBER)
        assert Error(ErrorKind.BAD_NUMBER) != Error(ErrorKind.BAD_OPERATOR)

    def test_number_and_expression_are_distinct(self):
        assert Number(1) != Expression((Number(1),))

    def test_values_are_immutable(self):
        with pytest.raises(AttributeError):
            Number(1).value = 2

    def test_error_message_follows_kind(self):
        assert Error(ErrorKind.DIVISION_BY_ZERO).message == "Division by zero!"
        assert Error(ErrorKind.BAD_OPERATOR).message == "Invalid Operator!"
        assert Error(ErrorKind.BAD_NUMBER).message == "Invalid Number!"

    def test_is_value(self):
        assert is_value(Number(1))
        assert is_value(Expression())
        assert not is_value(1)
        assert not is_value("+")


class TestExpression:
    def test_empty_expression(self):
        expr = Expression()
        assert expr.count == 0
        assert len(expr) == 0
        assert list(expr) == []

    def test_count_matches_children(self):
        expr = Expression((Symbol("+"), Number(1), Number(2)))
        assert expr.count == 3
        assert expr.count == len(expr.children)

    def test_children_always_stored_as_tuple(self):
        expr = Expression([Number(1), Number(2)])
        assert isinstance(expr.children, tuple)
        assert expr == Expression((Number(1), Number(2)))

    def test_iterates_in_order(self):
        expr = Expression((Symbol("-"), Number(5)))
        assert list(expr) == [Symbol("-"), Number(5)]


class TestWalk:
    def test_walk_visits_children_before_parent(self):
        inner = Expression((Symbol("+"), Number(1)))
        outer = Expression((inner, Number(2)))

        nodes = list(walk(outer))

        assert nodes == [Symbol("+"), Number(1), inner, Number(2), outer]

    def test_walk_leaf(self):
        assert list(walk(Number(7))) == [Number(7)]


class TestIntegerWidth:
    def test_bounds_are_signed_64_bit(self):
        assert fits_int(INT_MAX)
        assert fits_int(INT_MIN)
        assert not fits_int(INT_MAX + 1)
        assert not fits_int(INT_MIN - 1)


class TestOwnership:
    """Every node of a tree is released once its owner drops it."""

    def test_read_tree_is_released(self):
        value = read_string("(+ 1 (* 2 3) (- 4))")
        refs = [weakref.ref(node) for node in walk(value)]
        assert len(refs) == 11

        del value
        gc.collect()

        assert all(ref() is None for ref in refs)

    def test_tree_is_released_after_evaluation(self):
        value = read_string("(/ (+ 1 2) (^ 2 3))")
        refs = [weakref.ref(node) for node in walk(value)]

        result = evaluate_value(value)
        assert result == Number(0)

        del value, result
        gc.collect()

        assert all(ref() is None for ref in refs)
