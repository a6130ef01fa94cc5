"""Grammar for the Lispy expression language.

Source text is parsed with a Lark LALR parser and converted into a tree of
SyntaxNode objects. The tree keeps the punctuation tokens so it mirrors the
source one-to-one; the reader decides what is semantic content.

Grammar:
    lispy  : expr*
    expr   : NUMBER | SYMBOL | sexpr | qexpr
    sexpr  : "(" expr* ")"
    qexpr  : "{" expr* "}"
"""

from dataclasses import dataclass
from typing import Iterator

from lark import Lark, Token
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)
from lark.visitors import Transformer_NonRecursive

ROOT_TAG = "lispy"

GRAMMAR = r"""
    lispy: expr*

    ?expr: NUMBER
         | SYMBOL
         | sexpr
         | qexpr

    !sexpr: "(" expr* ")"
    !qexpr: "{" expr* "}"

    NUMBER.2: /-?[0-9]+/
    SYMBOL: /[a-zA-Z_+\-*\/\\=<>!&%^@]+/

    %import common.WS
    %ignore WS
"""


@dataclass(frozen=True)
class SyntaxNode:
    """A node of the parsed syntax tree.

    Attributes:
        tag: Grammar label ("lispy", "sexpr", "number", "lpar", ...)
        contents: Raw source text for tokens, empty for rules
        children: Child nodes in source order
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    tag: str
    contents: str = ""
    children: tuple["SyntaxNode", ...] = ()
    line: int = 1
    column: int = 1

    def __iter__(self) -> Iterator["SyntaxNode"]:
        return iter(self.children)

    def pretty(self, indent: str = "  ") -> str:
        """Render the tree one node per line, children indented."""
        lines: list[str] = []
        self._pretty(lines, 0, indent)
        return "\n".join(lines)

    def _pretty(self, lines: list[str], depth: int, indent: str) -> None:
        if self.contents:
            lines.append(
                f"{indent * depth}{self.tag}:{self.line}:{self.column} '{self.contents}'"
            )
        else:
            lines.append(f"{indent * depth}{self.tag}")
        for child in self.children:
            child._pretty(lines, depth + 1, indent)


class ParseError(Exception):
    """Source text does not match the grammar."""

    def __init__(self, message: str, line: int = 1, column: int = 1):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")

    def diagnostic(self, source_name: str = "<stdin>") -> str:
        """Format the error the way compilers report it."""
        return f"{source_name}:{self.line}:{self.column}: error: {self.message}"


class NestingError(ParseError):
    """Source nests deeper than the reader and evaluator can follow."""

    def __init__(self, line: int = 1, column: int = 1):
        super().__init__("expression nested too deeply", line, column)


class _SyntaxBuilder(Transformer_NonRecursive):
    """Convert a Lark parse tree into SyntaxNode objects."""

    def __default__(self, data, children, meta):
        return SyntaxNode(
            tag=str(data),
            children=tuple(children),
            line=getattr(meta, "line", 1),
            column=getattr(meta, "column", 1),
        )

    def __default_token__(self, token: Token) -> SyntaxNode:
        return SyntaxNode(
            tag=token.type.lower(),
            contents=str(token),
            line=token.line or 1,
            column=token.column or 1,
        )


class Grammar:
    """Compiled parser for the Lispy language.

    Building the Lark parser is the expensive part, so a Grammar is
    constructed once and reused for every line.

    Usage:
        grammar = Grammar()
        node = grammar.parse("(+ 1 2)")
    """

    def __init__(self, source: str = GRAMMAR):
        self.source = source
        self._parser = Lark(
            source,
            start=ROOT_TAG,
            parser="lalr",
            propagate_positions=True,
        )
        self._builder = _SyntaxBuilder()

    def parse(self, text: str) -> SyntaxNode:
        """Parse text and return the root SyntaxNode.

        Raises:
            ParseError: If text does not match the grammar
        """
        try:
            tree = self._parser.parse(text)
        except UnexpectedInput as e:
            raise _to_parse_error(e, text) from e
        return self._builder.transform(tree)


def _to_parse_error(error: UnexpectedInput, text: str) -> ParseError:
    """Translate a Lark exception into a ParseError."""
    if isinstance(error, UnexpectedCharacters):
        message = f"unexpected character '{error.char}'"
    elif isinstance(error, UnexpectedToken) and error.token.type != "$END":
        message = f"unexpected token '{error.token}'"
    elif isinstance(error, (UnexpectedToken, UnexpectedEOF)):
        message = "unexpected end of input"
    else:
        message = "invalid syntax"

    line = getattr(error, "line", None)
    column = getattr(error, "column", None)
    # Lark reports end of input without a usable position
    if (
        message == "unexpected end of input"
        or not isinstance(line, int)
        or not isinstance(column, int)
        or line < 1
    ):
        lines = text.split("\n")
        line = len(lines)
        column = len(lines[-1]) + 1

    return ParseError(message, line, column)


_default_grammar: Grammar | None = None


def default_grammar() -> Grammar:
    """Return the shared Grammar, building it on first use."""
    global _default_grammar
    if _default_grammar is None:
        _default_grammar = Grammar()
    return _default_grammar


def parse(text: str) -> SyntaxNode:
    """Convenience function to parse text with the shared grammar.

    Args:
        text: A line of Lispy source

    Returns:
        The root SyntaxNode
    """
    return default_grammar().parse(text)
