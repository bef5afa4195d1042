from var_fallback.model.diagnostic import Diagnostic, DiagnosticSink, Severity
from var_fallback.model.stylesheet import AtStatement, Block, Declaration, Stylesheet

__all__ = [
    "AtStatement",
    "Block",
    "Declaration",
    "Diagnostic",
    "DiagnosticSink",
    "Severity",
    "Stylesheet",
]
