"""Variable extraction: custom property declarations of one stylesheet."""

from __future__ import annotations

from var_fallback.model.stylesheet import Stylesheet


def extract_variables(stylesheet: Stylesheet) -> dict[str, str]:
    """Map every ``--name`` declared in *stylesheet* to its raw value.

    Declarations are read at any depth (``:root``, class rules, media
    queries); the last one in document order wins.
    """
    variables: dict[str, str] = {}
    for decl in stylesheet.walk_declarations():
        if decl.is_variable:
            variables[decl.prop] = decl.value
    return variables
