from var_fallback.engine.cycles import find_cycles
from var_fallback.engine.extractor import extract_variables
from var_fallback.engine.loader import SourceLoader, SourceLoadError
from var_fallback.engine.merger import merge_mappings, merge_sources
from var_fallback.engine.references import VarReference, find_references
from var_fallback.engine.resolver import VariableResolver
from var_fallback.engine.rewriter import rewrite_declarations, rewrite_value

__all__ = [
    "SourceLoadError",
    "SourceLoader",
    "VarReference",
    "VariableResolver",
    "extract_variables",
    "find_cycles",
    "find_references",
    "merge_mappings",
    "merge_sources",
    "rewrite_declarations",
    "rewrite_value",
]
