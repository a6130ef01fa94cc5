"""Reader for the Lispy expression language.

Converts a SyntaxNode tree produced by the grammar into a Value tree.
The reader never raises: a malformed number literal becomes an
Error(BAD_NUMBER) value so downstream consumers always get a Value.
"""

import re

from lispy.grammar import ROOT_TAG, Grammar, SyntaxNode, default_grammar
from lispy.values import Error, ErrorKind, Expression, Number, Symbol, Value, fits_int

# Literal punctuation is structure, not content
PUNCTUATION = frozenset({"(", ")", "{", "}"})

_NUMBER_RE = re.compile(r"-?[0-9]+")

# Anchor tokens some grammar engines add around the root
ANCHOR_TAG = "regex"


def read(node: SyntaxNode) -> Value:
    """Read a syntax node into a Value."""
    if "number" in node.tag:
        return read_number(node.contents)

    if "symbol" in node.tag:
        return Symbol(node.contents)

    if node.tag == ROOT_TAG or "sexpr" in node.tag or "qexpr" in node.tag:
        return _read_expression(node)

    # Unknown rule: keep its content, let evaluation reject it
    if node.children:
        return _read_expression(node)
    return Symbol(node.contents)


def read_number(text: str) -> Value:
    """Parse a base-10 signed integer literal."""
    if not _NUMBER_RE.fullmatch(text):
        return Error(ErrorKind.BAD_NUMBER)
    n = int(text)
    if not fits_int(n):
        return Error(ErrorKind.BAD_NUMBER)
    return Number(n)


def _read_expression(node: SyntaxNode) -> Expression:
    return Expression(
        tuple(read(child) for child in node.children if not _is_skipped(child))
    )


def _is_skipped(node: SyntaxNode) -> bool:
    return node.contents in PUNCTUATION or node.tag == ANCHOR_TAG


def read_string(source: str, grammar: Grammar | None = None) -> Value:
    """Parse source text and read it into a Value.

    Raises:
        ParseError: If source does not match the grammar
    """
    grammar = grammar or default_grammar()
    return read(grammar.parse(source))
