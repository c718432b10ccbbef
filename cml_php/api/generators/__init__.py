"""
Code generators for CML units.

Organized into:
- framework_strategies: per-framework hooks (plain / laravel / doctrine)
- enum_generator, value_object_generator, entity_generator: one PHP file per unit
- printer: PHP building blocks -> source text (Jinja templates)
"""

from .enum_generator import build_enum, generate_enum
from .value_object_generator import build_value_object, generate_value_object
from .entity_generator import build_entity, generate_entity
from .framework_strategies import (
    FrameworkStrategy,
    PlainStrategy,
    LaravelStrategy,
    DoctrineStrategy,
    get_strategy,
)
from .printer import print_file

__all__ = [
    "build_enum",
    "generate_enum",
    "build_value_object",
    "generate_value_object",
    "build_entity",
    "generate_entity",
    "FrameworkStrategy",
    "PlainStrategy",
    "LaravelStrategy",
    "DoctrineStrategy",
    "get_strategy",
    "print_file",
]
