"""Field, constructor and accessor assembly shared by value objects and entities."""

from typing import Iterable, List, Optional, Sequence

from ...config import GeneratorConfig
from ...lib.model import CMLProperty, Entity
from ...lib.php_types import PRIVATE, PUBLIC, PhpClass, PhpMethod
from ..utils.naming import capitalize
from .framework_strategies import FrameworkStrategy


def select_constructor_properties(properties: Sequence[CMLProperty], constructor_type: str) -> List[CMLProperty]:
    """Properties that become constructor parameters under a constructor policy."""
    if constructor_type == "none":
        return []
    if constructor_type == "required":
        return [p for p in properties if not p.nullable]
    return list(properties)


def promoted_names(constructor_props: Sequence[CMLProperty], config: GeneratorConfig) -> set:
    if not config.constructor_property_promotion:
        return set()
    return {p.name for p in constructor_props}


def _visibility(config: GeneratorConfig) -> str:
    return PUBLIC if config.public_properties else PRIVATE


def add_fields(php_class: PhpClass, properties: Iterable[CMLProperty], strategy: FrameworkStrategy,
               config: GeneratorConfig, skip: Iterable[str] = (), readonly: bool = False,
               entity: Optional[Entity] = None) -> None:
    """Declare class fields; names in `skip` are declared by the constructor instead."""
    skip = set(skip)
    for prop in properties:
        if prop.name in skip:
            continue
        field = php_class.add_property(prop.name, strategy.map_type(prop), prop.nullable)
        field.visibility = _visibility(config)
        field.readonly = readonly
        doc = strategy.collection_docstring(prop, "var")
        if doc:
            field.comments.append(doc)
        if entity is not None:
            strategy.decorate_property(field, prop, entity)


def add_constructor(php_class: PhpClass, constructor_props: Sequence[CMLProperty],
                    strategy: FrameworkStrategy, config: GeneratorConfig,
                    prelude: Sequence[str] = (), readonly: bool = False,
                    entity: Optional[Entity] = None) -> PhpMethod:
    """
    Add `__construct`.

    Promoted parameters carry visibility, readonly and mapping metadata
    themselves; plain parameters are assigned to the field in the body,
    after the `prelude` statements.
    """
    method = php_class.add_method("__construct")
    body = list(prelude)
    promote = config.constructor_property_promotion

    for prop in constructor_props:
        param = method.add_parameter(prop.name, strategy.map_type(prop), prop.nullable, promoted=promote)
        if promote:
            param.visibility = _visibility(config)
            param.readonly = readonly
            doc = strategy.collection_docstring(prop, "var")
            if doc:
                param.comments.append(doc)
            if entity is not None:
                strategy.decorate_property(param, prop, entity)
        else:
            doc = strategy.collection_docstring(prop, "param")
            if doc:
                method.comments.append(doc)
            body.append(f"$this->{prop.name} = ${prop.name};")

    method.body = body
    return method


def add_accessors(php_class: PhpClass, properties: Iterable[CMLProperty], strategy: FrameworkStrategy,
                  config: GeneratorConfig, with_setters: bool) -> None:
    """Add getter (and setter) pairs, in property order."""
    for prop in properties:
        php_type = strategy.map_type(prop)

        if config.add_getters:
            getter = php_class.add_method("get" + capitalize(prop.name))
            getter.return_type = php_type
            getter.return_nullable = prop.nullable
            doc = strategy.collection_docstring(prop, "return")
            if doc:
                getter.comments.append(doc)
            getter.body = [f"return $this->{prop.name};"]

        if with_setters:
            setter = php_class.add_method("set" + capitalize(prop.name))
            setter.add_parameter(prop.name, php_type, prop.nullable)
            doc = strategy.collection_docstring(prop, "param")
            if doc:
                setter.comments.append(doc)
            setter.return_type = "self"
            setter.body = [f"$this->{prop.name} = ${prop.name};", "", "return $this;"]
