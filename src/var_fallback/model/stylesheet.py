"""Stylesheet model: Declaration, Block, AtStatement and Stylesheet.

The model keeps the original source text and the span of every declaration
value, so serialization reproduces the input exactly except for the values
that were reassigned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass
class Declaration:
    """A ``property: value`` pair.

    ``value`` excludes surrounding whitespace and a trailing ``!important``
    (reported by ``important``). ``start``/``end`` locate the original value
    text in the stylesheet source.
    """

    prop: str
    value: str
    important: bool = False
    line: int | None = None
    column: int | None = None
    start: int = 0
    end: int = 0
    original_value: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not self.original_value:
            self.original_value = self.value

    @property
    def is_variable(self) -> bool:
        return self.prop.startswith("--")

    @property
    def modified(self) -> bool:
        return self.value != self.original_value


@dataclass
class AtStatement:
    """A body-less at-rule such as ``@import url(base.css);``."""

    text: str
    line: int | None = None
    column: int | None = None


@dataclass
class Block:
    """A rule or at-rule with a ``{ ... }`` body."""

    prelude: str
    children: list[Node] = field(default_factory=list)
    line: int | None = None
    column: int | None = None

    @property
    def is_at_rule(self) -> bool:
        return self.prelude.startswith("@")


Node = Union[Declaration, Block, AtStatement]


@dataclass
class Stylesheet:
    """A parsed stylesheet together with the text it was parsed from."""

    source: str
    nodes: list[Node] = field(default_factory=list)
    path: str | None = None

    def walk_declarations(self) -> Iterator[Declaration]:
        """Yield every declaration in document order, at any nesting depth."""
        stack: list[Iterator[Node]] = [iter(self.nodes)]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
            elif isinstance(node, Declaration):
                yield node
            elif isinstance(node, Block):
                stack.append(iter(node.children))

    @property
    def modified(self) -> bool:
        return any(d.modified for d in self.walk_declarations())

    def to_css(self) -> str:
        """Serialize back to CSS, replacing only the values that changed."""
        changed = sorted(
            (d for d in self.walk_declarations() if d.modified),
            key=lambda d: d.start,
        )
        if not changed:
            return self.source
        parts: list[str] = []
        cursor = 0
        for decl in changed:
            parts.append(self.source[cursor : decl.start])
            parts.append(decl.value)
            cursor = decl.end
        parts.append(self.source[cursor:])
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_css()
