"""
Framework Strategies for Entity / Value Object Generation

Implements the Strategy pattern for the supported framework flavours:
- PLAIN: framework-free PHP classes, collections as arrays
- LARAVEL: Eloquent models; relations become relation methods
- DOCTRINE: ORM-mapped classes with attribute mapping and collection initialisation

A strategy is selected once per generation run (see `get_strategy`) and the
class emitters call its hooks instead of branching on the framework name.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Union

from ...config import GeneratorConfig
from ...lib.model import CMLProperty, Entity
from ...lib.php_types import PhpClass, PhpParameter, PhpProperty
from ..extractors.type_mapper import (
    DOCTRINE_ARRAY_COLLECTION,
    DOCTRINE_COLLECTION,
    DOCTRINE_JSON,
    map_primitive,
    map_property_type,
    map_storage_type,
)
from ..utils.naming import to_snake_case

PropertyTarget = Union[PhpProperty, PhpParameter]

ELOQUENT_MODEL = "Illuminate\\Database\\Eloquent\\Model"
ELOQUENT_HAS_MANY = "Illuminate\\Database\\Eloquent\\Relations\\HasMany"
ELOQUENT_BELONGS_TO = "Illuminate\\Database\\Eloquent\\Relations\\BelongsTo"

ORM_MAPPING = "Doctrine\\ORM\\Mapping"


class FrameworkStrategy(ABC):
    """Base class for framework-specific generation hooks."""

    framework = "plain"

    def __init__(self, config: GeneratorConfig, enum_names: Iterable[str] = ()):
        """
        Args:
            config: Options of the current generation run
            enum_names: Names of all enumerations in the model, so properties
                typed with an enum are recognised without the `^` marker
        """
        self.config = config
        self.enum_names = frozenset(enum_names)

    # ------------------------------------------------------------------
    # Types

    def map_type(self, prop: CMLProperty) -> str:
        return map_property_type(prop, self.framework)

    def is_enum_reference(self, prop: CMLProperty) -> bool:
        return prop.is_enum or prop.type in self.enum_names

    def collection_docstring(self, prop: CMLProperty, doc_type: str) -> Optional[str]:
        """
        Doc annotation for a collection-typed member.

        Args:
            doc_type: "var" (property / promoted parameter), "return" or "param"
        """
        if not prop.is_collection:
            return None

        php_type = self.map_type(prop)
        element = map_primitive(prop.type)
        if php_type == DOCTRINE_COLLECTION and self.config.doctrine_collection_docstrings:
            shape = f"\\{DOCTRINE_COLLECTION}<array-key, {element}>"
        elif php_type == "array" and self.config.array_docstrings:
            shape = f"array<int, {element}>"
        else:
            return None

        if doc_type == "param":
            return f"@param {shape} ${prop.name}"
        return f"@{doc_type} {shape}"

    # ------------------------------------------------------------------
    # Entity hooks

    def emits_property(self, prop: CMLProperty) -> bool:
        """Whether the property becomes a field/parameter/accessor pair."""
        return True

    def constructor_candidates(self, properties: Sequence[CMLProperty]) -> List[CMLProperty]:
        """Properties the constructor policy may pick from."""
        return list(properties)

    def build_constructor_prelude(self, entity: Entity, constructor_params: Iterable[str]) -> List[str]:
        """Statements placed at the top of the entity constructor."""
        return []

    @abstractmethod
    def decorate_class(self, php_class: PhpClass, entity: Entity) -> None:
        """Add base class, attributes or class docs to an entity class."""

    @abstractmethod
    def decorate_property(self, target: PropertyTarget, prop: CMLProperty, entity: Entity) -> None:
        """Add mapping metadata to a property or promoted constructor parameter."""

    @abstractmethod
    def build_relation_accessors(self, php_class: PhpClass, entity: Entity) -> None:
        """Add methods standing in for relation properties."""


class PlainStrategy(FrameworkStrategy):
    """Framework-free PHP: no base class, no mapping metadata."""

    framework = "plain"

    def decorate_class(self, php_class, entity):
        pass

    def decorate_property(self, target, prop, entity):
        pass

    def build_relation_accessors(self, php_class, entity):
        pass


class LaravelStrategy(FrameworkStrategy):
    """
    Eloquent models.

    Relation properties are not stored as fields: each becomes a method
    returning `hasMany` (collections) or `belongsTo` (single references).
    """

    framework = "laravel"

    def emits_property(self, prop):
        return not prop.is_relation

    def decorate_class(self, php_class, entity):
        php_class.extends = ELOQUENT_MODEL
        php_class.comments.append("@property-read int $id")

    def decorate_property(self, target, prop, entity):
        pass

    def build_relation_accessors(self, php_class, entity):
        for prop in entity.properties:
            if not prop.is_relation:
                continue
            method = php_class.add_method(prop.name)
            if prop.is_collection:
                method.return_type = ELOQUENT_HAS_MANY
                method.body = [f"return $this->hasMany({prop.type}::class);"]
            else:
                method.return_type = ELOQUENT_BELONGS_TO
                method.body = [f"return $this->belongsTo({prop.type}::class);"]


class DoctrineStrategy(FrameworkStrategy):
    """
    Doctrine ORM mapped entities.

    With `doctrine_attributes` the class and every field get mapping
    attributes: OneToMany / ManyToOne for relations, Column otherwise
    (primitive collections are stored as one json column). Collection fields
    that are not constructor parameters are initialised in the constructor.
    An integer `id` is generated by the database and never a constructor
    parameter.
    """

    framework = "doctrine"

    @property
    def attributes_enabled(self) -> bool:
        return self.config.doctrine_attributes

    def is_generated_id(self, prop: CMLProperty) -> bool:
        """`id` columns the database fills in (integer / bigint with GeneratedValue)."""
        return (
            self.attributes_enabled
            and prop.name == "id"
            and not prop.is_relation
            and not prop.is_collection
            and not self.is_enum_reference(prop)
            and map_storage_type(prop.type) in ("integer", "bigint")
        )

    def constructor_candidates(self, properties):
        return [p for p in properties if not self.is_generated_id(p)]

    def decorate_class(self, php_class, entity):
        if not self.attributes_enabled:
            return
        php_class.add_attribute(f"{ORM_MAPPING}\\Entity")
        php_class.add_attribute(f"{ORM_MAPPING}\\Table", [f"name: '{to_snake_case(entity.name)}'"])

    def decorate_property(self, target, prop, entity):
        if not self.attributes_enabled:
            return

        nullable = "true" if prop.nullable else "false"
        if prop.is_relation and prop.is_collection:
            target.add_attribute(
                f"{ORM_MAPPING}\\OneToMany",
                [f"targetEntity: {prop.type}::class", f"mappedBy: '{to_snake_case(entity.name)}'"],
                class_refs=[prop.type],
            )
        elif prop.is_relation:
            target.add_attribute(
                f"{ORM_MAPPING}\\ManyToOne",
                [f"targetEntity: {prop.type}::class"],
                class_refs=[prop.type],
            )
        elif prop.is_collection:
            target.add_attribute(
                f"{ORM_MAPPING}\\Column",
                [f"type: '{DOCTRINE_JSON}'", f"nullable: {nullable}"],
            )
        elif self.is_enum_reference(prop):
            target.add_attribute(
                f"{ORM_MAPPING}\\Column",
                ["type: 'string'", f"enumType: {prop.type}::class", f"nullable: {nullable}"],
                class_refs=[prop.type],
            )
        else:
            if prop.name == "id":
                target.add_attribute(f"{ORM_MAPPING}\\Id")
                if self.is_generated_id(prop):
                    target.add_attribute(f"{ORM_MAPPING}\\GeneratedValue")
            target.add_attribute(
                f"{ORM_MAPPING}\\Column",
                [f"type: '{map_storage_type(prop.type)}'", f"nullable: {nullable}"],
            )

    def build_constructor_prelude(self, entity, constructor_params):
        supplied = set(constructor_params)
        statements = []
        for prop in entity.properties:
            if not prop.is_collection or prop.name in supplied:
                continue
            if self.map_type(prop) == DOCTRINE_COLLECTION:
                statements.append(f"$this->{prop.name} = new \\{DOCTRINE_ARRAY_COLLECTION}();")
            else:
                statements.append(f"$this->{prop.name} = [];")
        return statements

    def build_relation_accessors(self, php_class, entity):
        pass


STRATEGIES = {
    "plain": PlainStrategy,
    "laravel": LaravelStrategy,
    "doctrine": DoctrineStrategy,
}


def get_strategy(config: GeneratorConfig, enum_names: Iterable[str] = ()) -> FrameworkStrategy:
    """Select the strategy for the configured framework."""
    try:
        strategy_cls = STRATEGIES[config.framework]
    except KeyError:
        raise ValueError(f"Unknown framework '{config.framework}'") from None
    return strategy_cls(config, enum_names)
