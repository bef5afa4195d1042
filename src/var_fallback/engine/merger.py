"""Precedence merging of variables from an ordered list of sources."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from var_fallback.config import coerce_sources
from var_fallback.engine.extractor import extract_variables
from var_fallback.engine.loader import SourceLoader, SourceLoadError
from var_fallback.model.diagnostic import DiagnosticSink

logger = logging.getLogger(__name__)

SOURCE_LOAD = "source-load"


def merge_mappings(mappings: Iterable[Mapping[str, str]]) -> dict[str, str]:
    """Merge variable mappings in order; later mappings win."""
    merged: dict[str, str] = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged


def merge_sources(
    sources: Any,
    loader: SourceLoader,
    diagnostics: DiagnosticSink,
    base_dir: str | Path | None = None,
) -> dict[str, str]:
    """Load *sources* in order and merge their variables.

    A source that fails to load is reported and skipped; the remaining
    sources still contribute. Sources are applied strictly in the order
    given, so a later source overrides an earlier one.
    """
    merged: dict[str, str] = {}
    for source in coerce_sources(sources, diagnostics):
        try:
            stylesheet = loader.load(source, base_dir)
        except SourceLoadError as exc:
            diagnostics.warn(
                SOURCE_LOAD,
                f"Error processing fallback file {source}: {exc.reason}",
                word=source,
                source=source,
                line=exc.line,
                column=exc.column,
            )
            continue
        variables = extract_variables(stylesheet)
        logger.debug("Found %d variable(s) in %s", len(variables), source)
        merged.update(variables)
    return merged
