"""Model extraction utilities."""

from .model_extractor import (
    GenerationUnit,
    iter_units,
    get_enum_names,
)
from .type_mapper import (
    map_type,
    map_property_type,
    map_primitive,
    map_collection,
    map_storage_type,
    is_primitive,
)

__all__ = [
    "GenerationUnit",
    "iter_units",
    "get_enum_names",
    "map_type",
    "map_property_type",
    "map_primitive",
    "map_collection",
    "map_storage_type",
    "is_primitive",
]
