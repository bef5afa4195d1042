"""Text-level entry point: parse, add fallbacks, serialize."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from var_fallback.engine.loader import SourceLoader
from var_fallback.model.diagnostic import Diagnostic, DiagnosticSink
from var_fallback.model.stylesheet import Stylesheet
from var_fallback.parser import parse_css
from var_fallback.transforms import VarFallbackTransform, apply_transforms


@dataclass
class ProcessResult:
    """Outcome of one processing run."""

    stylesheet: Stylesheet
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def css(self) -> str:
        return self.stylesheet.to_css()

    @property
    def modified(self) -> bool:
        return self.stylesheet.modified

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]


def process(
    css: str,
    options: Mapping[str, Any] | None = None,
    *,
    from_path: str | os.PathLike[str] | None = None,
    loader: SourceLoader | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> ProcessResult:
    """Add computed fallbacks to every ``var()`` use in *css*.

    *options* is the host configuration, e.g. ``{"fallbacks": ["theme.css"]}``.
    Fallback paths resolve against the directory of *from_path* when given.
    Problems with the configuration or the fallback sources are reported as
    warnings; only a :class:`~var_fallback.parser.ParseError` in *css* itself
    propagates.
    """
    path = os.fspath(from_path) if from_path is not None else None
    if diagnostics is None:
        diagnostics = DiagnosticSink(source=path)
    stylesheet = parse_css(css, path=path)
    transform = VarFallbackTransform.from_options(options, diagnostics, loader)
    stylesheet = apply_transforms(stylesheet, [transform], diagnostics)
    return ProcessResult(stylesheet=stylesheet, diagnostics=diagnostics.diagnostics)


def process_file(
    path: str | os.PathLike[str],
    options: Mapping[str, Any] | None = None,
    *,
    loader: SourceLoader | None = None,
) -> ProcessResult:
    """Read *path* as UTF-8 and :func:`process` it."""
    source = Path(path).read_text(encoding="utf-8")
    return process(source, options, from_path=path, loader=loader)
