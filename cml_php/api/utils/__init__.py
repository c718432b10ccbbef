"""Utility functions for naming and path resolution."""

from .naming import to_snake_case, capitalize, enum_case_name, short_name
from .paths import (
    PathRuleEvaluator,
    ResolvedPath,
    RuleWarning,
    build_file_path,
    build_namespace,
    get_directory_path,
    resolve_path,
)

__all__ = [
    "to_snake_case",
    "capitalize",
    "enum_case_name",
    "short_name",
    "PathRuleEvaluator",
    "ResolvedPath",
    "RuleWarning",
    "build_file_path",
    "build_namespace",
    "get_directory_path",
    "resolve_path",
]
