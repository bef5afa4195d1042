"""Lark Transformer that converts a CSS parse tree into a Stylesheet model."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from var_fallback.model.stylesheet import AtStatement, Block, Declaration, Node, Stylesheet
from var_fallback.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_IMPORTANT_RE = re.compile(r"^(?P<value>.*?)\s*!\s*important$", re.IGNORECASE | re.DOTALL)


def _build_declaration(prop: Token, raw: Token) -> Declaration:
    """Build a Declaration, locating the trimmed value inside the source."""
    text = str(raw)[1:]  # drop the leading colon
    base = raw.start_pos + 1
    leading = len(text) - len(text.lstrip())
    body = text.strip()

    important = False
    match = _IMPORTANT_RE.match(body)
    if match:
        body = match.group("value")
        important = True

    start = base + leading
    return Declaration(
        prop=str(prop).strip(),
        value=body,
        important=important,
        line=prop.line,
        column=prop.column,
        start=start,
        end=start + len(body),
    )


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into Stylesheet nodes."""

    def declaration(self, items: list[Token]) -> Declaration:
        return _build_declaration(items[0], items[1])

    def at_statement(self, items: list[Token]) -> AtStatement:
        token = items[0]
        return AtStatement(text=str(token).strip(), line=token.line, column=token.column)

    def block(self, items: list[object]) -> Block:
        prelude = items[0]
        assert isinstance(prelude, Token)
        children: list[Node] = [
            item for item in items[1:] if isinstance(item, (Declaration, Block, AtStatement))
        ]
        return Block(
            prelude=str(prelude).strip(),
            children=children,
            line=prelude.line,
            column=prelude.column,
        )

    def start(self, items: list[Node]) -> list[Node]:
        return list(items)


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_css(source: str, path: str | None = None) -> Stylesheet:
    """Parse CSS source text into a Stylesheet.

    Raises :class:`ParseError` (with line/column where Lark reports them)
    when the block structure is malformed.
    """
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        # UnexpectedEOF reports -1 for both.
        line = e.line if e.line > 0 else None
        column = e.column if e.column > 0 else None
        raise ParseError(str(e), line=line, column=column) from e
    except LarkError as e:
        raise ParseError(str(e)) from e
    nodes = CssTransformer().transform(tree)
    return Stylesheet(source=source, nodes=nodes, path=path)
