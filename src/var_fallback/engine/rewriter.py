"""Declaration rewriting: add computed fallbacks to ``var()`` uses."""

from __future__ import annotations

import logging
from collections.abc import Set

from var_fallback.engine.references import find_references
from var_fallback.engine.resolver import VariableResolver
from var_fallback.model.stylesheet import Stylesheet

logger = logging.getLogger(__name__)


def rewrite_value(
    value: str, resolver: VariableResolver, cycles: Set[str] | None = None
) -> tuple[str, bool]:
    """Rewrite every ``var()`` use in *value* with a computed fallback.

    Returns the new value and whether any occurrence changed. Circular and
    unresolvable references, and all text between references, are copied
    through unchanged.
    """
    if cycles is None:
        cycles = resolver.cycles
    refs = find_references(value)
    if not refs:
        return value, False

    parts: list[str] = []
    cursor = 0
    changed = False
    for ref in refs:
        parts.append(value[cursor : ref.start])
        cursor = ref.end
        replacement = ref.text
        if ref.name not in cycles:
            resolved = resolver.resolve(ref.name)
            if resolved:
                # Keep the author's spelling of the function name.
                replacement = f"{ref.text[:3]}({ref.name}, {resolved})"
        if replacement != ref.text:
            changed = True
        parts.append(replacement)
    parts.append(value[cursor:])

    if not changed:
        return value, False
    return "".join(parts), True


def rewrite_declarations(
    stylesheet: Stylesheet, resolver: VariableResolver, cycles: Set[str] | None = None
) -> int:
    """Rewrite the declarations of *stylesheet* in place.

    Returns the number of declarations whose value changed.
    """
    count = 0
    for decl in stylesheet.walk_declarations():
        new_value, changed = rewrite_value(decl.value, resolver, cycles)
        if changed:
            decl.value = new_value
            count += 1
    logger.debug("Rewrote %d declaration(s)", count)
    return count
