"""
PHP source printer.

Turns a PhpFile into text: resolves class names into `use` imports, formats
members into indented line blocks and renders the Jinja templates under
templates/php/. Output is PSR-12 shaped (4-space indent, braces on their own
line for classes and methods, one blank line between methods).
"""

from typing import Dict, Iterable, List, Set

from ...lib.php_types import (
    PhpAttribute,
    PhpClass,
    PhpEnum,
    PhpFile,
    PhpMethod,
    PhpParameter,
    PhpProperty,
)
from ...templates import env as jinja_env
from ..utils.naming import short_name

INDENT = "    "
WRAP_LENGTH = 120

BUILTIN_TYPES = {
    "array", "bool", "callable", "false", "float", "int", "iterable", "mixed",
    "never", "null", "object", "self", "static", "string", "true", "void",
}


class ImportRegistry:
    """Collects `use` statements for one file.

    Names that would clash with the declared class, a sibling type or an
    earlier import are printed fully qualified instead.
    """

    def __init__(self, namespace: str, reserved: Iterable[str] = ()):
        self.namespace = namespace.strip("\\")
        self.reserved: Set[str] = {r.lower() for r in reserved}
        self._imports: Dict[str, str] = {}

    def name(self, fqn: str) -> str:
        fqn = fqn.strip("\\")
        if "\\" not in fqn:
            return fqn
        if fqn in self._imports:
            return self._imports[fqn]

        namespace, short = fqn.rsplit("\\", 1)[0], short_name(fqn)
        if namespace == self.namespace and short.lower() not in self.reserved:
            return short

        taken = {s.lower() for s in self._imports.values()}
        if short.lower() in self.reserved or short.lower() in taken:
            return "\\" + fqn

        self._imports[fqn] = short
        return short

    @property
    def statements(self) -> List[str]:
        return sorted(self._imports, key=str.lower)


def format_type(type_name: str, imports: ImportRegistry, nullable: bool = False) -> str:
    if not type_name:
        type_name = "mixed"
    if type_name.lower() in BUILTIN_TYPES:
        printed = type_name.lower()
    elif type_name.startswith("\\") and "\\" not in type_name[1:]:
        printed = type_name  # global class, e.g. \DateTime
    else:
        printed = imports.name(type_name)
    if nullable and printed != "mixed" and not printed.startswith("?"):
        printed = "?" + printed
    return printed


def format_docblock(comments: List[str]) -> List[str]:
    if not comments:
        return []
    if len(comments) == 1:
        return [f"/** {comments[0]} */"]
    return ["/**"] + [f" * {c}" if c else " *" for c in comments] + [" */"]


def format_attribute(attribute: PhpAttribute, imports: ImportRegistry) -> str:
    name = imports.name(attribute.name)
    if attribute.args:
        return f"#[{name}({', '.join(attribute.args)})]"
    return f"#[{name}]"


def _modifiers(visibility: str, readonly: bool) -> str:
    return f"{visibility} readonly" if readonly else visibility


def format_property(prop: PhpProperty, imports: ImportRegistry) -> List[str]:
    lines = format_docblock(prop.comments)
    lines += [format_attribute(a, imports) for a in prop.attributes]
    php_type = format_type(prop.type, imports, prop.nullable)
    lines.append(f"{_modifiers(prop.visibility, prop.readonly)} {php_type} ${prop.name};")
    return lines


def format_parameter(param: PhpParameter, imports: ImportRegistry) -> List[str]:
    lines = format_docblock(param.comments)
    lines += [format_attribute(a, imports) for a in param.attributes]
    declaration = f"{format_type(param.type, imports, param.nullable)} ${param.name}"
    if param.promoted:
        declaration = f"{_modifiers(param.visibility, param.readonly)} {declaration}"
    lines.append(declaration)
    return lines


def format_method(method: PhpMethod, imports: ImportRegistry) -> List[str]:
    lines = format_docblock(method.comments)
    params = [format_parameter(p, imports) for p in method.parameters]
    returns = ""
    if method.return_type:
        returns = ": " + format_type(method.return_type, imports, method.return_nullable)

    head = f"{method.visibility} function {method.name}("
    inline = head + ", ".join(p[-1] for p in params) + ")" + returns
    multiline = (
        any(len(p) > 1 for p in params)
        or bool(method.promoted_parameters)
        or len(INDENT + inline) > WRAP_LENGTH
    )

    body = [INDENT + line if line else "" for line in method.body]
    if multiline and params:
        lines.append(head)
        for param_lines in params:
            lines += [INDENT + line for line in param_lines[:-1]]
            lines.append(INDENT + param_lines[-1] + ",")
        lines.append(f"){returns} {{")
    else:
        lines.append(inline)
        lines.append("{")
    lines += body
    lines.append("}")
    return lines


def _class_header(cls: PhpClass, imports: ImportRegistry) -> str:
    words = []
    if cls.final:
        words.append("final")
    if cls.readonly:
        words.append("readonly")
    words += ["class", cls.name]
    if cls.extends:
        words += ["extends", imports.name(cls.extends)]
    return " ".join(words)


def _reserved_names(cls: PhpClass) -> Set[str]:
    """Bare (same-namespace) type names used by the class, plus its own name."""
    names = {cls.name}
    types = [p.type for p in cls.properties]
    for method in cls.methods:
        types.append(method.return_type or "")
        types += [p.type for p in method.parameters]
    attributes = list(cls.attributes)
    for prop in cls.properties:
        attributes += prop.attributes
    for method in cls.methods:
        for param in method.parameters:
            attributes += param.attributes
    for attribute in attributes:
        types += attribute.class_refs
    for t in types:
        if t and "\\" not in t and t.lower() not in BUILTIN_TYPES:
            names.add(t)
    return names


def _class_context(cls: PhpClass, imports: ImportRegistry) -> dict:
    blocks = []
    spacious = any(p.attributes or p.comments for p in cls.properties)
    for prop in cls.properties:
        blocks.append({
            "separated": bool(blocks) and spacious,
            "lines": format_property(prop, imports),
        })
    for method in cls.methods:
        blocks.append({
            "separated": bool(blocks),
            "lines": format_method(method, imports),
        })
    return {
        "doc": format_docblock(cls.comments),
        "attributes": [format_attribute(a, imports) for a in cls.attributes],
        "header": _class_header(cls, imports),
        "blocks": blocks,
    }


def _enum_context(enum: PhpEnum) -> dict:
    return {
        "name": enum.name,
        "backing_type": enum.backing_type,
        "cases": [{"name": name, "value": value} for name, value in enum.cases],
    }


def print_file(php_file: PhpFile) -> str:
    """Render a PhpFile to PHP source text (always newline terminated)."""
    declaration = php_file.declaration
    ctx = {
        "strict_types": php_file.strict_types,
        "namespace": php_file.namespace,
    }

    if isinstance(declaration, PhpEnum):
        imports = ImportRegistry(php_file.namespace, [declaration.name])
        ctx.update(kind="enum", enum=_enum_context(declaration))
    else:
        imports = ImportRegistry(php_file.namespace, _reserved_names(declaration))
        ctx.update(kind="class", cls=_class_context(declaration, imports))

    # uses are only known once every member has been formatted
    ctx["uses"] = imports.statements

    text = jinja_env.get_template("file.php.jinja").render(**ctx)
    return text if text.endswith("\n") else text + "\n"
