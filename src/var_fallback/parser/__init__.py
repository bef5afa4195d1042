from var_fallback.parser.errors import ParseError
from var_fallback.parser.transformer import parse_css

__all__ = ["ParseError", "parse_css"]
