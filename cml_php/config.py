"""
Generator configuration.

`GeneratorConfig` holds every code-style switch the PHP emitter understands.
Values can be given in code, or loaded from a YAML file with `load_config`.
Keys may be written in snake_case or camelCase
(`publicProperties`, `constructorType`, ...).

Example YAML:

    framework: doctrine
    constructor_type: all
    directory_structure: psr-4
    php_version: "8.2"
    path_rules:
      - pattern: "Repository$"
        subfolder: Repository
        strip: "Repository$"
"""

import re
from pathlib import Path
from typing import List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigError
from .lib.model import UnitKind

Framework = Literal["plain", "laravel", "doctrine"]
ConstructorType = Literal["none", "required", "all"]
DirectoryStructure = Literal["flat", "bounded-context", "aggregate", "psr-4"]
PhpVersion = Literal["8.1", "8.2", "8.3", "8.4"]
CollisionPolicy = Literal["keep", "warn", "error"]

DEFAULT_NAMESPACE = "App\\Models"

# First version with readonly properties / readonly classes.
READONLY_PROPERTY_VERSION = (8, 1)
READONLY_CLASS_VERSION = (8, 2)

# One namespace segment per subfolder component
_SUBFOLDER_SEGMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class PathRule(_ConfigModel):
    """Pattern-based output location rule.

    The first rule whose `pattern` matches a unit's name (and whose `kind`, if
    set, matches the unit kind) moves the file into `subfolder` and removes the
    first match of `strip` from the class/file name. Both regexes are compiled
    lazily during generation; an invalid one only produces a warning.
    """
    pattern: str
    subfolder: str = ""
    kind: Optional[UnitKind] = None
    strip: Optional[str] = None

    @field_validator("subfolder")
    @classmethod
    def _normalize_subfolder(cls, value: str) -> str:
        """`/Shared//Money/` -> `Shared/Money`; `..` or non-identifier segments are rejected."""
        segments = [s for s in re.split(r"[\\/]", value.strip()) if s and s != "."]
        for segment in segments:
            if not _SUBFOLDER_SEGMENT.match(segment):
                raise ValueError(
                    f"subfolder segment '{segment}' is not a valid PHP namespace segment"
                )
        return "/".join(segments)


class GeneratorConfig(_ConfigModel):
    """All options of one generation run."""

    framework: Framework = "plain"
    public_properties: bool = False
    add_getters: bool = True
    add_setters: bool = True
    namespace: str = DEFAULT_NAMESPACE
    constructor_type: ConstructorType = "none"
    constructor_property_promotion: bool = False

    # Doctrine only
    doctrine_attributes: bool = True
    doctrine_collection_docstrings: bool = False

    # Any member whose resolved type is `array`
    array_docstrings: bool = False

    directory_structure: DirectoryStructure = "flat"
    group_by_type: bool = False
    php_version: PhpVersion = "8.1"
    readonly_value_objects: bool = False

    path_rules: List[PathRule] = Field(default_factory=list)
    on_path_collision: CollisionPolicy = "warn"

    @field_validator("php_version", mode="before")
    @classmethod
    def _coerce_version(cls, value):
        # YAML reads `php_version: 8.2` as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{float(value):.1f}"
        return value

    @field_validator("namespace")
    @classmethod
    def _normalize_namespace(cls, value: str) -> str:
        value = value.strip().strip("\\")
        return value or DEFAULT_NAMESPACE

    # ------------------------------------------------------------------
    # Derived switches

    @property
    def version_tuple(self) -> Tuple[int, int]:
        major, minor = self.php_version.split(".")
        return int(major), int(minor)

    @property
    def readonly_active(self) -> bool:
        """Readonly value objects requested and supported by the target version."""
        return self.readonly_value_objects and self.version_tuple >= READONLY_PROPERTY_VERSION

    @property
    def readonly_class(self) -> bool:
        """Whole value-object class is declared `readonly`."""
        return self.readonly_active and self.version_tuple >= READONLY_CLASS_VERSION

    @property
    def readonly_properties(self) -> bool:
        """Each value-object property is declared `readonly` (8.1 only)."""
        return self.readonly_active and not self.readonly_class

    def describe(self) -> str:
        visibility = "public" if self.public_properties else "private"
        return (
            f"{self.framework} ({visibility}, getters: {self.add_getters}, "
            f"setters: {self.add_setters}, constructor: {self.constructor_type})"
        )


def load_config(path, **overrides) -> GeneratorConfig:
    """Load a GeneratorConfig from a YAML file. `overrides` win over file values."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in '{path}': {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping, got {type(data).__name__}")

    return build_config(data, **overrides)


def build_config(data: dict = None, **overrides) -> GeneratorConfig:
    """Validate a mapping (plus keyword overrides) into a GeneratorConfig."""
    values = dict(data or {})
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return GeneratorConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration:\n{e}") from e


# Configurations exercised by `cml-php check`, one per framework flavour.
PRESET_CONFIGS: List[GeneratorConfig] = [
    GeneratorConfig(
        framework="plain",
        public_properties=False,
        add_getters=True,
        add_setters=True,
        constructor_type="none",
    ),
    GeneratorConfig(
        framework="plain",
        public_properties=True,
        add_getters=False,
        add_setters=False,
        constructor_type="all",
        constructor_property_promotion=True,
    ),
    GeneratorConfig(
        framework="laravel",
        add_getters=True,
        add_setters=True,
        constructor_type="required",
    ),
    GeneratorConfig(
        framework="doctrine",
        add_getters=True,
        add_setters=True,
        constructor_type="all",
        doctrine_collection_docstrings=True,
        doctrine_attributes=True,
    ),
    GeneratorConfig(
        framework="plain",
        constructor_type="required",
        directory_structure="psr-4",
        group_by_type=True,
        php_version="8.2",
        readonly_value_objects=True,
    ),
]
