"""Model extraction utilities: walk a CMLModel in generation order."""

from dataclasses import dataclass
from typing import Iterator, Union

from ...lib.model import (
    Aggregate,
    BoundedContext,
    CMLEnum,
    CMLModel,
    Entity,
    UnitKind,
    ValueObject,
)


@dataclass(frozen=True)
class GenerationUnit:
    """One enum / value object / entity together with its owning scopes."""
    kind: UnitKind
    node: Union[CMLEnum, ValueObject, Entity]
    bounded_context: BoundedContext
    aggregate: Aggregate

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def qualified_name(self) -> str:
        return f"{self.bounded_context.name}.{self.aggregate.name}.{self.node.name}"


def iter_units(model: CMLModel) -> Iterator[GenerationUnit]:
    """
    Yield every generated unit in stable output order.

    Per aggregate: enums first, then value objects, then entities, so entity
    type references point at names emitted earlier in the same aggregate.
    """
    for bc in model.bounded_contexts:
        for aggregate in bc.aggregates:
            for enum_def in aggregate.enums:
                yield GenerationUnit(UnitKind.ENUM, enum_def, bc, aggregate)
            for value_object in aggregate.value_objects:
                yield GenerationUnit(UnitKind.VALUE_OBJECT, value_object, bc, aggregate)
            for entity in aggregate.entities:
                yield GenerationUnit(UnitKind.ENTITY, entity, bc, aggregate)


def get_enum_names(model: CMLModel) -> set:
    return {u.name for u in iter_units(model) if u.kind is UnitKind.ENUM}
