"""Source loading: resolve, read and parse fallback stylesheets."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from var_fallback.model.stylesheet import Stylesheet
from var_fallback.parser import ParseError, parse_css

logger = logging.getLogger(__name__)

# (resolved path, mtime_ns, size)
_CacheKey = tuple[str, int, int]


class SourceLoadError(Exception):
    """Raised when a fallback source cannot be read or parsed."""

    def __init__(
        self,
        source: str,
        reason: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.source = source
        self.reason = reason
        self.line = line
        self.column = column
        super().__init__(f"{source}: {reason}")


class SourceLoader:
    """Load fallback stylesheets relative to a base directory.

    Parsed sources are cached by path and file version, so a loader may be
    reused across runs: an edited file is parsed again.
    """

    def __init__(self) -> None:
        self._cache: dict[_CacheKey, Stylesheet] = {}

    def resolve(self, source: str | os.PathLike[str], base_dir: str | Path | None = None) -> Path:
        path = Path(source)
        if path.is_absolute():
            return path
        base = Path(base_dir) if base_dir is not None else Path.cwd()
        return (base / path).resolve()

    def load(self, source: str | os.PathLike[str], base_dir: str | Path | None = None) -> Stylesheet:
        """Return the parsed stylesheet for *source*.

        Raises :class:`SourceLoadError` if the file is missing, unreadable
        or unparseable.
        """
        label = os.fspath(source)
        path = self.resolve(source, base_dir)
        try:
            stat = path.stat()
        except OSError as exc:
            raise SourceLoadError(label, f"cannot access {path}: {exc.strerror or exc}") from exc

        key = (str(path), stat.st_mtime_ns, stat.st_size)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Using cached parse of %s", path)
            return cached

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceLoadError(label, f"cannot read {path}: {exc}") from exc

        try:
            stylesheet = parse_css(text, path=str(path))
        except ParseError as exc:
            raise SourceLoadError(label, f"cannot parse {path}: {exc}", exc.line, exc.column) from exc

        self._cache[key] = stylesheet
        logger.debug("Parsed %s", path)
        return stylesheet

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
