"""Fallback transform: adds computed fallbacks to every ``var()`` use."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from var_fallback.config import FallbackConfig
from var_fallback.engine.cycles import find_cycles
from var_fallback.engine.loader import SourceLoader
from var_fallback.engine.merger import merge_sources
from var_fallback.engine.resolver import VariableResolver
from var_fallback.engine.rewriter import rewrite_declarations
from var_fallback.model.diagnostic import DiagnosticSink
from var_fallback.model.stylesheet import Stylesheet

logger = logging.getLogger(__name__)


class VarFallbackTransform:
    """Rewrite ``var(--x)`` to ``var(--x, <value>)`` using fallback sources.

    Sources listed in ``config.fallbacks`` are loaded in order relative to
    the directory of the stylesheet being processed (or the working
    directory when it has no path); later sources override earlier ones.
    Every run builds its own mapping, cycle set and resolver. Only the
    loader's parse cache outlives a run.
    """

    def __init__(
        self, config: FallbackConfig | None = None, loader: SourceLoader | None = None
    ) -> None:
        self.config = config if config is not None else FallbackConfig()
        self.loader = loader if loader is not None else SourceLoader()

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any] | None,
        diagnostics: DiagnosticSink,
        loader: SourceLoader | None = None,
    ) -> VarFallbackTransform:
        """Build the transform from host options, reporting a bad shape."""
        return cls(FallbackConfig.from_options(options, diagnostics), loader)

    def apply(self, stylesheet: Stylesheet, diagnostics: DiagnosticSink) -> Stylesheet:
        if not self.config.fallbacks:
            return stylesheet

        base_dir = Path(stylesheet.path).parent if stylesheet.path else None
        mapping = merge_sources(self.config.fallbacks, self.loader, diagnostics, base_dir)
        if not mapping:
            return stylesheet

        cycles = find_cycles(mapping, diagnostics)
        resolver = VariableResolver(mapping, cycles, diagnostics)
        count = rewrite_declarations(stylesheet, resolver, cycles)
        logger.debug(
            "Applied fallbacks from %d source(s): %d variable(s), %d declaration(s) rewritten",
            len(self.config.fallbacks),
            len(mapping),
            count,
        )
        return stylesheet
