"""var-fallback: add computed fallbacks to CSS custom property references."""

__version__ = "0.1.0"

from var_fallback.config import FallbackConfig  # noqa: E402
from var_fallback.model.diagnostic import Diagnostic, DiagnosticSink, Severity  # noqa: E402
from var_fallback.parser import ParseError, parse_css  # noqa: E402
from var_fallback.processor import ProcessResult, process, process_file  # noqa: E402
from var_fallback.transforms import VarFallbackTransform  # noqa: E402

__all__ = [
    "Diagnostic",
    "DiagnosticSink",
    "FallbackConfig",
    "ParseError",
    "ProcessResult",
    "Severity",
    "VarFallbackTransform",
    "parse_css",
    "process",
    "process_file",
    "__version__",
]
