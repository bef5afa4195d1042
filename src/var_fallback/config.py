from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from var_fallback.model.diagnostic import DiagnosticSink

INVALID_CONFIG = "invalid-config"


def coerce_sources(value: Any, diagnostics: DiagnosticSink) -> tuple[str, ...]:
    """Normalize a configured ``fallbacks`` value to a tuple of identifiers.

    Anything that is not a list or tuple (``None`` and bare strings
    included) is reported and treated as no sources. Entries that are not
    strings or path-like objects are reported and skipped.
    """
    if value is None or not isinstance(value, (list, tuple)):
        diagnostics.warn(
            INVALID_CONFIG,
            "Fallbacks must be an array of file paths, "
            f"got {type(value).__name__}; no fallbacks will be added",
        )
        return ()

    sources: list[str] = []
    for index, entry in enumerate(value):
        if isinstance(entry, (str, os.PathLike)):
            sources.append(os.fspath(entry))
        else:
            diagnostics.warn(
                INVALID_CONFIG,
                f"Ignoring fallback entry {index}: expected a file path, "
                f"got {type(entry).__name__}",
            )
    return tuple(sources)


@dataclass(frozen=True)
class FallbackConfig:
    fallbacks: tuple[str, ...] = ()

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any] | None, diagnostics: DiagnosticSink
    ) -> FallbackConfig:
        """Build a config from host options such as ``{"fallbacks": [...]}``."""
        if options is None:
            options = {}
        return cls(fallbacks=coerce_sources(options.get("fallbacks"), diagnostics))
