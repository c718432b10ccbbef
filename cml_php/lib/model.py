"""
In-memory model produced by the CML parser.

The tree mirrors the CML nesting:

    CMLModel
      └── BoundedContext
            └── Aggregate
                  ├── CMLEnum
                  ├── ValueObject
                  └── Entity

Every collection keeps source order; the generator relies on it for stable output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class UnitKind(str, Enum):
    """Kind of a generated unit (one PHP file each)."""

    ENUM = "enum"
    VALUE_OBJECT = "valueobject"
    ENTITY = "entity"

    @property
    def folder(self) -> str:
        """Folder name used when output is grouped by type."""
        return {
            UnitKind.ENUM: "Enum",
            UnitKind.VALUE_OBJECT: "ValueObject",
            UnitKind.ENTITY: "Entity",
        }[self]


@dataclass
class CMLProperty:
    """A typed attribute of an entity or value object.

    For collections `type` holds the element type (`Set<OrderLine>` -> `OrderLine`).
    """
    name: str
    type: str
    nullable: bool = False
    is_relation: bool = False
    is_collection: bool = False
    is_enum: bool = False


@dataclass
class CMLEnum:
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class ValueObject:
    name: str
    properties: List[CMLProperty] = field(default_factory=list)


@dataclass
class Entity:
    name: str
    is_aggregate_root: bool = False
    properties: List[CMLProperty] = field(default_factory=list)


@dataclass
class Aggregate:
    name: str
    entities: List[Entity] = field(default_factory=list)
    value_objects: List[ValueObject] = field(default_factory=list)
    enums: List[CMLEnum] = field(default_factory=list)


@dataclass
class BoundedContext:
    name: str
    aggregates: List[Aggregate] = field(default_factory=list)


@dataclass
class CMLModel:
    """Parse root."""
    bounded_contexts: List[BoundedContext] = field(default_factory=list)
    source_name: Optional[str] = None  # file the model was read from, if any


__all__ = [
    "UnitKind",
    "CMLProperty",
    "CMLEnum",
    "ValueObject",
    "Entity",
    "Aggregate",
    "BoundedContext",
    "CMLModel",
]
