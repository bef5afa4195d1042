"""Diagnostic model: structured warnings reported while processing a stylesheet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

logger = logging.getLogger("var_fallback")


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding reported during a fallback run.

    Attributes:
        rule: Identifier for the condition that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        source: The stylesheet path involved, if applicable.
        word: The variable name or source identifier the message is about.
        line: 1-based line in *source*, if known.
        column: 1-based column in *source*, if known.
    """

    rule: str
    severity: Severity
    message: str
    source: str | None = None
    word: str | None = None
    line: int | None = None
    column: int | None = None

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.source:
            location = f" [{self.source}"
            if self.line is not None:
                location += f":{self.line}"
                if self.column is not None:
                    location += f":{self.column}"
            location += "]"
        return f"{self.severity.value}{location}: {self.message}"


Listener = Callable[[Diagnostic], None]


class DiagnosticSink:
    """Collects diagnostics for one run and forwards them to listeners.

    Reporting never raises; listeners are called synchronously in
    registration order.
    """

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        self._diagnostics: list[Diagnostic] = []
        self._listeners: list[Listener] = []

    def subscribe(self, callback: Listener) -> None:
        """Register a callback that receives every diagnostic."""
        self._listeners.append(callback)

    def report(self, diagnostic: Diagnostic) -> Diagnostic:
        self._diagnostics.append(diagnostic)
        logger.debug("%s", diagnostic)
        for cb in self._listeners:
            cb(diagnostic)
        return diagnostic

    def warn(
        self,
        rule: str,
        message: str,
        *,
        word: str | None = None,
        source: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> Diagnostic:
        return self.report(
            Diagnostic(
                rule=rule,
                severity=Severity.WARNING,
                message=message,
                source=source if source is not None else self.source,
                word=word,
                line=line,
                column=column,
            )
        )

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.is_warning]

    def by_rule(self, rule: str) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.rule == rule]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._diagnostics))

    def __len__(self) -> int:
        return len(self._diagnostics)
