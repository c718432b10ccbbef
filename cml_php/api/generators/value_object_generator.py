"""
PHP class generation for CML value objects.

Value objects are always `final`. With readonly value objects enabled the
class becomes `readonly` (PHP 8.2+) or every property does (PHP 8.1); either
way every property must then be passed to the constructor and no setters are
generated.
"""

from ...config import GeneratorConfig
from ...lib.model import ValueObject
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


def build_value_object(value_object: ValueObject, config: GeneratorConfig,
                       strategy: FrameworkStrategy, final_name: str = None) -> PhpClass:
    php_class = PhpClass(
        name=final_name or value_object.name,
        final=True,
        readonly=config.readonly_class,
    )

    constructor_type = "all" if config.readonly_active else config.constructor_type
    constructor_props = select_constructor_properties(value_object.properties, constructor_type)
    promoted = promoted_names(constructor_props, config)

    add_fields(
        php_class,
        value_object.properties,
        strategy,
        config,
        skip=promoted,
        readonly=config.readonly_properties,
    )

    if constructor_type != "none" and value_object.properties:
        add_constructor(
            php_class,
            constructor_props,
            strategy,
            config,
            readonly=config.readonly_properties,
        )

    add_accessors(
        php_class,
        value_object.properties,
        strategy,
        config,
        with_setters=config.add_setters and not config.readonly_active,
    )
    return php_class


def generate_value_object(value_object: ValueObject, config: GeneratorConfig, namespace: str,
                          final_name: str = None, strategy: FrameworkStrategy = None) -> str:
    strategy = strategy or get_strategy(config)
    php_class = build_value_object(value_object, config, strategy, final_name)
    return print_file(PhpFile(namespace=namespace, declaration=php_class))
