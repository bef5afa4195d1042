"""Variable resolution: expand nested ``var()`` references to a final value."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from var_fallback.engine.cycles import CIRCULAR_REFERENCE, find_cycles
from var_fallback.engine.references import VarReference, find_references
from var_fallback.model.diagnostic import DiagnosticSink

logger = logging.getLogger(__name__)


class VariableResolver:
    """Resolve variables against one frozen mapping.

    A resolver belongs to a single run: it snapshots the mapping it is given
    and memoizes every value it computes, so repeated uses of a variable are
    answered from the cache and nothing is shared with other runs.

    Resolution walks references with an explicit work stack. Every branch
    carries its own copy of the names being resolved above it, so sibling
    branches never see each other's progress.
    """

    def __init__(
        self,
        mapping: Mapping[str, str],
        cycles: Iterable[str] | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self.mapping: Mapping[str, str] = MappingProxyType(dict(mapping))
        self.diagnostics = diagnostics
        if cycles is None:
            cycles = find_cycles(self.mapping, diagnostics)
        self.cycles = frozenset(cycles)
        self._cache: dict[str, str] = {}
        self._references: dict[str, list[VarReference]] = {}
        self._warned: set[str] = set()

    def resolve(self, name: str) -> str | None:
        """Return the fully substituted value of *name*.

        Returns None when *name* is circular or not defined.
        """
        if name in self.cycles:
            self._warn_circular(name)
            return None
        if name not in self.mapping:
            return None
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        work: list[tuple[str, frozenset[str]]] = [(name, frozenset())]
        while work:
            current, path = work[-1]
            if current in self._cache:
                work.pop()
                continue
            branch = path | {current}
            pending = [
                (ref.name, branch)
                for ref in self._refs(current)
                if self._needs_resolving(ref.name, branch)
            ]
            if pending:
                work.extend(reversed(pending))
                continue
            work.pop()
            self._cache[current] = self._substitute(current, branch)

        return self._cache[name]

    def resolve_all(self) -> dict[str, str | None]:
        return {name: self.resolve(name) for name in self.mapping}

    def is_circular(self, name: str) -> bool:
        return name in self.cycles

    def _refs(self, name: str) -> list[VarReference]:
        refs = self._references.get(name)
        if refs is None:
            refs = find_references(self.mapping[name])
            self._references[name] = refs
        return refs

    def _needs_resolving(self, name: str, branch: frozenset[str]) -> bool:
        return (
            name in self.mapping
            and name not in self.cycles
            and name not in branch
            and name not in self._cache
        )

    def _substitute(self, name: str, branch: frozenset[str]) -> str:
        value = self.mapping[name]
        refs = self._refs(name)
        if not refs:
            return value
        parts: list[str] = []
        cursor = 0
        for ref in refs:
            parts.append(value[cursor : ref.start])
            parts.append(self._replacement(ref, branch))
            cursor = ref.end
        parts.append(value[cursor:])
        return "".join(parts)

    def _replacement(self, ref: VarReference, branch: frozenset[str]) -> str:
        resolved: str | None = None
        if ref.name in self.cycles or ref.name in branch:
            self._warn_circular(ref.name)
        else:
            resolved = self._cache.get(ref.name)
        if resolved is not None:
            # A computed value supersedes the author's fallback.
            return resolved
        if ref.has_fallback:
            assert ref.fallback is not None
            return ref.fallback.strip()
        return ref.text

    def _warn_circular(self, name: str) -> None:
        if name in self._warned:
            return
        self._warned.add(name)
        logger.debug("Skipping circular variable %s", name)
        if self.diagnostics is not None:
            self.diagnostics.warn(
                CIRCULAR_REFERENCE,
                f"Cannot compute a fallback for circular variable {name}",
                word=name,
            )
