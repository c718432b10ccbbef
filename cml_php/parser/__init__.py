"""CML parsing: line classification, property parsing and the scope-stack model parser."""

from .lexer import Line, LineKind, tokenize_lines, strip_comment
from .property_parser import parse_property
from .model_parser import parse_cml, split_enum_values

__all__ = [
    "Line",
    "LineKind",
    "tokenize_lines",
    "strip_comment",
    "parse_property",
    "parse_cml",
    "split_enum_values",
]
