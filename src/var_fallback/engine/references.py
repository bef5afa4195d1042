"""Scanner for ``var()`` references inside declaration values.

A small hand-written scanner rather than a regular expression: it tracks
parenthesis depth and quoted strings so that a fallback such as
``rgba(0, 0, 0, .5)`` stays in one piece.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["VarReference", "find_references", "referenced_names"]

_FUNCTION = "var("


@dataclass(frozen=True)
class VarReference:
    """One ``var(<name>[, <fallback>])`` call found in a value.

    ``start``/``end`` delimit the whole call (``end`` is exclusive).
    ``fallback`` is the raw text after the first top-level comma, or None
    when the call has no comma.
    """

    name: str
    fallback: str | None
    start: int
    end: int
    text: str

    @property
    def has_fallback(self) -> bool:
        return self.fallback is not None and self.fallback.strip() != ""


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "-_" or ord(ch) > 0x7F


def _skip_string(value: str, pos: int) -> int:
    """Return the index just past the string literal opening at *pos*."""
    quote = value[pos]
    i = pos + 1
    while i < len(value):
        ch = value[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return len(value)


def _skip_comment(value: str, pos: int) -> int:
    end = value.find("*/", pos + 2)
    return len(value) if end == -1 else end + 2


def _scan_call(value: str, open_pos: int) -> tuple[int, int | None] | None:
    """Scan from the ``(`` at *open_pos* to its matching ``)``.

    Returns ``(close_pos, comma_pos)`` where *comma_pos* is the first comma
    at depth one, or None when the parenthesis is never closed.
    """
    depth = 0
    comma: int | None = None
    i = open_pos
    while i < len(value):
        ch = value[i]
        if ch in "\"'":
            i = _skip_string(value, i)
            continue
        if value.startswith("/*", i):
            i = _skip_comment(value, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i, comma
        elif ch == "," and depth == 1 and comma is None:
            comma = i
        i += 1
    return None


def find_references(value: str) -> list[VarReference]:
    """Return the outermost ``var()`` calls in *value*, left to right.

    Calls nested inside another ``var()`` (in its fallback) are not reported
    separately; calls nested in other functions such as ``calc()`` are.
    """
    refs: list[VarReference] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch in "\"'":
            i = _skip_string(value, i)
            continue
        if value.startswith("/*", i):
            i = _skip_comment(value, i)
            continue
        at_function = value[i : i + len(_FUNCTION)].lower() == _FUNCTION
        if at_function and (i == 0 or not _is_ident_char(value[i - 1])):
            open_pos = i + len(_FUNCTION) - 1
            scanned = _scan_call(value, open_pos)
            if scanned is None:
                # Unbalanced: the rest of the value is plain text.
                break
            close_pos, comma = scanned
            if comma is None:
                name = value[open_pos + 1 : close_pos].strip()
                fallback = None
            else:
                name = value[open_pos + 1 : comma].strip()
                fallback = value[comma + 1 : close_pos]
            if name.startswith("--"):
                refs.append(
                    VarReference(
                        name=name,
                        fallback=fallback,
                        start=i,
                        end=close_pos + 1,
                        text=value[i : close_pos + 1],
                    )
                )
                i = close_pos + 1
                continue
            # Not a custom property reference; keep scanning inside it.
            i = open_pos + 1
            continue
        i += 1
    return refs


def referenced_names(value: str) -> list[str]:
    """Names of the outermost ``var()`` calls in *value*, in order.

    These are the edges of the reference graph: names that only appear
    inside a fallback clause do not count.
    """
    return [ref.name for ref in find_references(value)]
