"""Property declaration parsing.

Shape of a property line (markers may be combined):

    [-] [nullable] <Type | Set<Type> | List<Type>> [^] <name>[;,]

- a leading `-` marks a relation (reference to another entity)
- `nullable` anywhere in the line marks the property nullable
- `Set<T>` / `List<T>` marks a collection whose element type is T
- `^` marks a reference to an enumeration
- `@` before a type name (CML reference syntax) is ignored
"""

import re
from typing import Optional

from ..lib.model import CMLProperty
from .lexer import strip_comment, AGGREGATE_ROOT_MARKER

_NULLABLE = re.compile(r"\bnullable\b")
_COLLECTION = re.compile(r"\b(?:Set|List)<\s*@?(\w+)\s*>")
_IDENTIFIER = re.compile(r"^\w+$")


def parse_property(line: str) -> Optional[CMLProperty]:
    """Parse one property line, returning None when it is not a property."""
    line = strip_comment(line)
    if not line or line in ("{", "}", AGGREGATE_ROOT_MARKER):
        return None

    nullable = bool(_NULLABLE.search(line))
    is_relation = line.startswith("-")
    has_enum_marker = "^" in line

    collection_match = _COLLECTION.search(line)
    is_collection = collection_match is not None
    element_type = collection_match.group(1) if collection_match else ""

    clean = _NULLABLE.sub(" ", line)
    if is_collection:
        clean = _COLLECTION.sub(element_type, clean)
    if clean.lstrip().startswith("-"):
        clean = clean.lstrip()[1:]
    clean = clean.replace("^", " ").replace("@", " ")

    parts = clean.split()
    if len(parts) < 2:
        return None

    declared_type = parts[0]
    name = parts[1].rstrip(";,")
    if not _IDENTIFIER.match(name):
        return None

    return CMLProperty(
        name=name,
        type=element_type if is_collection and element_type else declared_type,
        nullable=nullable,
        is_relation=is_relation,
        is_collection=is_collection,
        is_enum=has_enum_marker,
    )
