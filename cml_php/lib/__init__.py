"""Model and PHP building-block types."""

from .model import (
    UnitKind,
    CMLProperty,
    CMLEnum,
    ValueObject,
    Entity,
    Aggregate,
    BoundedContext,
    CMLModel,
)
