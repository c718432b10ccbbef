"""PHP class generation for CML entities."""

from ...config import GeneratorConfig
from ...lib.model import Entity
from ...lib.php_types import PhpClass, PhpFile
from .class_members import (
    add_accessors,
    add_constructor,
    add_fields,
    promoted_names,
    select_constructor_properties,
)
from .framework_strategies import FrameworkStrategy, get_strategy
from .printer import print_file


def build_entity(entity: Entity, config: GeneratorConfig, strategy: FrameworkStrategy,
                 final_name: str = None) -> PhpClass:
    """
    Assemble an entity class.

    Order of members: fields, constructor, getter/setter pairs, then
    framework relation methods (Laravel).
    """
    php_class = PhpClass(name=final_name or entity.name)
    strategy.decorate_class(php_class, entity)

    # Laravel relations are methods, not fields
    emitted = [p for p in entity.properties if strategy.emits_property(p)]

    constructor_props = select_constructor_properties(
        strategy.constructor_candidates(emitted), config.constructor_type
    )
    promoted = promoted_names(constructor_props, config)

    add_fields(php_class, emitted, strategy, config, skip=promoted, entity=entity)

    param_names = [p.name for p in constructor_props]
    prelude = strategy.build_constructor_prelude(entity, param_names)
    if config.constructor_type != "none" or prelude:
        add_constructor(
            php_class,
            constructor_props,
            strategy,
            config,
            prelude=prelude,
            entity=entity,
        )

    add_accessors(php_class, emitted, strategy, config, with_setters=config.add_setters)
    strategy.build_relation_accessors(php_class, entity)
    return php_class


def generate_entity(entity: Entity, config: GeneratorConfig, namespace: str,
                    final_name: str = None, strategy: FrameworkStrategy = None) -> str:
    strategy = strategy or get_strategy(config)
    php_class = build_entity(entity, config, strategy, final_name)
    return print_file(PhpFile(namespace=namespace, declaration=php_class))
