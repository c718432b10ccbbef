"""
Output path and namespace resolution.

For every generated unit we compute:
    - the final class / file name (possibly renamed by a path rule)
    - the output path, relative to the output root
    - the PHP namespace

Path = base directory (from the directory structure) / type-group folder /
matched rule subfolder / <finalName>.php, with empty segments dropped.

User supplied path rules are evaluated in order, first match wins. Their
regexes are untrusted input: a pattern that does not compile is reported as a
RuleWarning and the rule never matches; a strip pattern that does not compile
leaves the name untouched.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Union

from ...config import DEFAULT_NAMESPACE, PathRule
from ...lib.model import UnitKind
from ..gen_logging import get_logger

logger = get_logger(__name__)

PHP_EXTENSION = ".php"


@dataclass(frozen=True)
class RuleWarning:
    """A path rule whose regex could not be used."""
    rule_index: int
    field: str  # "pattern" or "strip"
    pattern: str
    message: str

    def __str__(self) -> str:
        return (
            f"path rule #{self.rule_index + 1}: invalid {self.field} "
            f"regex '{self.pattern}' ({self.message})"
        )


@dataclass(frozen=True)
class ResolvedPath:
    final_name: str
    filename: str
    directory: str
    output_path: str
    namespace: str


@dataclass(frozen=True)
class _CompiledRule:
    index: int
    rule: PathRule
    pattern: Optional[Pattern]
    strip: Optional[Pattern]


class PathRuleEvaluator:
    """Ordered, first-match-wins evaluator over PathRule definitions.

    Every regex is compiled once, in isolation; failures become warnings.
    """

    def __init__(self, rules: Sequence[PathRule] = ()):
        self.warnings: List[RuleWarning] = []
        self._rules: List[_CompiledRule] = [
            self._compile(index, rule) for index, rule in enumerate(rules or ())
        ]

    def _compile_field(self, index: int, field: str, source: str) -> Optional[Pattern]:
        try:
            return re.compile(source)
        except re.error as e:
            warning = RuleWarning(rule_index=index, field=field, pattern=source, message=str(e))
            self.warnings.append(warning)
            logger.warning(str(warning))
            return None

    def _compile(self, index: int, rule: PathRule) -> _CompiledRule:
        pattern = self._compile_field(index, "pattern", rule.pattern)
        strip = self._compile_field(index, "strip", rule.strip) if rule.strip else None
        return _CompiledRule(index=index, rule=rule, pattern=pattern, strip=strip)

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, name: str, kind: UnitKind) -> Optional[_CompiledRule]:
        for compiled in self._rules:
            if compiled.pattern is None:
                continue
            if compiled.rule.kind is not None and compiled.rule.kind != kind:
                continue
            if compiled.pattern.search(name):
                return compiled
        return None

    @staticmethod
    def rename(name: str, compiled: Optional[_CompiledRule]) -> str:
        """Remove the first match of the rule's strip pattern from `name`."""
        if compiled is None or compiled.strip is None:
            return name
        renamed = compiled.strip.sub("", name, count=1)
        return renamed or name


# ------------------------------------------------------------------------------
# Directory structure

def get_directory_path(bounded_context: str, aggregate: str, structure: str) -> str:
    if structure == "bounded-context":
        return bounded_context
    if structure in ("aggregate", "psr-4"):
        return build_file_path(bounded_context, aggregate)
    return ""


def build_file_path(*parts: str) -> str:
    """Join path parts with `/`, dropping empty parts and stray slashes."""
    cleaned = [p.strip("/") for p in parts if p and p.strip("/")]
    return "/".join(cleaned)


def build_namespace(prefix: str, bounded_context: str, aggregate: str, structure: str,
                    folders: Sequence[str] = ()) -> str:
    """
    Namespace for a unit.

    `bounded-context` appends the context, `aggregate` the context and the
    aggregate; `psr-4` mirrors every directory segment, including the
    type-group folder and rule subfolders passed in `folders`.
    """
    prefix = (prefix or DEFAULT_NAMESPACE).strip("\\")
    if structure == "bounded-context":
        segments = [bounded_context]
    elif structure == "aggregate":
        segments = [bounded_context, aggregate]
    elif structure == "psr-4":
        segments = [bounded_context, aggregate]
        for folder in folders:
            segments.extend(folder.split("/"))
    else:
        segments = []
    return "\\".join([prefix] + [s for s in segments if s])


# ------------------------------------------------------------------------------
# Public resolver

def resolve_path(unit_name: str, unit_kind: UnitKind, bounded_context: str, aggregate: str,
                 directory_structure: str = "flat", group_by_type: bool = False,
                 path_rules: Union[PathRuleEvaluator, Sequence[PathRule]] = (),
                 namespace_prefix: str = DEFAULT_NAMESPACE) -> ResolvedPath:
    """Compute final name, output path and namespace for one generated unit."""
    evaluator = path_rules if isinstance(path_rules, PathRuleEvaluator) else PathRuleEvaluator(path_rules)

    type_folder = unit_kind.folder if group_by_type else ""
    compiled = evaluator.match(unit_name, unit_kind)
    subfolder = compiled.rule.subfolder if compiled else ""
    final_name = evaluator.rename(unit_name, compiled)

    if compiled is not None:
        logger.debug(
            f"  {unit_name}: path rule #{compiled.index + 1} -> "
            f"subfolder='{subfolder}' name='{final_name}'"
        )

    base_dir = get_directory_path(bounded_context, aggregate, directory_structure)
    directory = build_file_path(base_dir, type_folder, subfolder)
    filename = f"{final_name}{PHP_EXTENSION}"

    return ResolvedPath(
        final_name=final_name,
        filename=filename,
        directory=directory,
        output_path=build_file_path(directory, filename),
        namespace=build_namespace(
            namespace_prefix,
            bounded_context,
            aggregate,
            directory_structure,
            folders=[type_folder, subfolder],
        ),
    )
