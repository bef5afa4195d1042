"""Circular reference detection over the merged variable mapping.

The reference graph has an edge ``a -> b`` when the value of ``--a``
contains ``var(--b)`` outside of a fallback clause. A variable is circular
when it lies on a cycle of that graph. Detection is a depth-first walk with
an explicit stack (Tarjan's strongly connected components), so long acyclic
chains do not hit the interpreter's recursion limit and cycles terminate on
the first revisit of a name still on the walk.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterator

from var_fallback.engine.references import referenced_names
from var_fallback.model.diagnostic import DiagnosticSink

logger = logging.getLogger(__name__)

CIRCULAR_REFERENCE = "circular-reference"


def reference_graph(mapping: Mapping[str, str]) -> dict[str, list[str]]:
    """Adjacency lists restricted to names defined in *mapping*.

    Undefined names are leaves and are left out.
    """
    return {
        name: [ref for ref in referenced_names(value) if ref in mapping]
        for name, value in mapping.items()
    }


def find_cycles(
    mapping: Mapping[str, str], diagnostics: DiagnosticSink | None = None
) -> frozenset[str]:
    """Return every variable name that participates in a reference cycle.

    One ``circular-reference`` warning is reported per circular variable.
    """
    edges = reference_graph(mapping)
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    cyclic: set[str] = set()

    def visit(name: str) -> Iterator[str]:
        index[name] = lowlink[name] = len(index)
        stack.append(name)
        on_stack.add(name)
        return iter(edges[name])

    for root in mapping:
        if root in index:
            continue
        work: list[tuple[str, Iterator[str]]] = [(root, visit(root))]
        while work:
            name, children = work[-1]
            child = next(children, None)
            if child is not None:
                if child not in index:
                    work.append((child, visit(child)))
                elif child in on_stack:
                    # Revisit of a name on the current walk: a cycle.
                    lowlink[name] = min(lowlink[name], index[child])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[name])
            if lowlink[name] != index[name]:
                continue

            component: list[str] = []
            while True:
                member = stack.pop()
                on_stack.discard(member)
                component.append(member)
                if member == name:
                    break
            if len(component) > 1 or name in edges[name]:
                cyclic.update(component)

    if cyclic:
        logger.debug("Found %d circular variable(s)", len(cyclic))
    if diagnostics is not None:
        for name in mapping:
            if name in cyclic:
                diagnostics.warn(
                    CIRCULAR_REFERENCE,
                    f"Circular reference detected for variable {name}",
                    word=name,
                )
    return frozenset(cyclic)
