"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Protocol

from var_fallback.model.diagnostic import DiagnosticSink
from var_fallback.model.stylesheet import Stylesheet


class Transform(Protocol):
    """A stylesheet-to-stylesheet transformation step."""

    def apply(self, stylesheet: Stylesheet, diagnostics: DiagnosticSink) -> Stylesheet: ...
