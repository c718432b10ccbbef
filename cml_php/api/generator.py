"""
Main entry point for CML -> PHP code generation.

Walks the parsed model (bounded context -> aggregate -> enums, value objects,
entities), resolves every unit's output path and namespace, and emits one PHP
source file per unit.

Architecture:
    - extractors/: model walking and type mapping
    - utils/: naming, path / namespace resolution
    - generators/: framework strategies, unit emitters, printer
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ..config import GeneratorConfig
from ..errors import GenerationError, PathCollisionError
from ..lib.model import CMLModel, UnitKind
from .extractors import GenerationUnit, get_enum_names, iter_units
from .gen_logging import get_logger
from .generators import generate_entity, generate_enum, generate_value_object, get_strategy
from .generators.framework_strategies import FrameworkStrategy
from .utils.paths import PathRuleEvaluator, RuleWarning, resolve_path

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeneratedFile:
    filename: str
    path: str  # relative output path, directory structure included
    content: str
    kind: UnitKind


@dataclass(frozen=True)
class PathCollision:
    path: str
    first: str
    second: str

    def __str__(self) -> str:
        return f"'{self.path}' is produced by both '{self.first}' and '{self.second}'"


@dataclass
class GenerationResult:
    """Ordered generated files plus the non-fatal problems met on the way."""
    files: List[GeneratedFile] = field(default_factory=list)
    warnings: List[RuleWarning] = field(default_factory=list)
    collisions: List[PathCollision] = field(default_factory=list)

    def __iter__(self):
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __getitem__(self, index):
        return self.files[index]

    def by_kind(self, kind: UnitKind) -> List[GeneratedFile]:
        return [f for f in self.files if f.kind is kind]


def emit_unit(node, kind: UnitKind, config: GeneratorConfig, namespace: str, final_name: str,
              strategy: Optional[FrameworkStrategy] = None) -> str:
    """Emit the PHP source of a single enum / value object / entity."""
    strategy = strategy or get_strategy(config)
    if kind is UnitKind.ENUM:
        return generate_enum(node, namespace, final_name)
    if kind is UnitKind.VALUE_OBJECT:
        return generate_value_object(node, config, namespace, final_name, strategy)
    return generate_entity(node, config, namespace, final_name, strategy)


def _find_collisions(files: List[GeneratedFile], units: List[GenerationUnit]) -> List[PathCollision]:
    seen: Dict[str, str] = {}
    collisions = []
    for generated, unit in zip(files, units):
        owner = seen.get(generated.path)
        if owner is None:
            seen[generated.path] = unit.qualified_name
        else:
            collisions.append(PathCollision(generated.path, owner, unit.qualified_name))
    return collisions


def generate_php(model: CMLModel, config: GeneratorConfig = None) -> GenerationResult:
    """
    Generate PHP files for every enum, value object and entity in `model`.

    Output order is stable: per bounded context, per aggregate, enums, then
    value objects, then entities. Invalid path-rule regexes are reported in
    `result.warnings` and never abort the run; any other failure raises
    GenerationError and no files are returned.
    """
    config = config or GeneratorConfig()
    logger.info(f"[GENERATE] {config.describe()}")

    strategy = get_strategy(config, get_enum_names(model))
    rules = PathRuleEvaluator(config.path_rules)

    files: List[GeneratedFile] = []
    units: List[GenerationUnit] = []
    for unit in iter_units(model):
        try:
            resolved = resolve_path(
                unit.name,
                unit.kind,
                unit.bounded_context.name,
                unit.aggregate.name,
                directory_structure=config.directory_structure,
                group_by_type=config.group_by_type,
                path_rules=rules,
                namespace_prefix=config.namespace,
            )
            content = emit_unit(unit.node, unit.kind, config, resolved.namespace, resolved.final_name, strategy)
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"{type(e).__name__}: {e}", unit=unit.qualified_name) from e

        logger.debug(f"  [{unit.kind.value}] {resolved.output_path}")
        files.append(GeneratedFile(
            filename=resolved.filename,
            path=resolved.output_path,
            content=content,
            kind=unit.kind,
        ))
        units.append(unit)

    collisions = _find_collisions(files, units)
    for collision in collisions:
        if config.on_path_collision == "error":
            raise PathCollisionError(collision.path, collision.first, collision.second)
        if config.on_path_collision == "warn":
            logger.warning(f"path collision: {collision}")

    logger.info(f"[GENERATED] {len(files)} file(s)")
    return GenerationResult(files=files, warnings=list(rules.warnings), collisions=collisions)


def write_generated_files(files, out_dir) -> List[Path]:
    """Write generated files below `out_dir`, creating directories as needed."""
    out_path = Path(out_dir)
    written = []
    for generated in files:
        target = out_path / generated.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        written.append(target)
    return written


__all__ = [
    "GeneratedFile",
    "GenerationResult",
    "PathCollision",
    "emit_unit",
    "generate_php",
    "write_generated_files",
]
