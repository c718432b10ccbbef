"""Line classifier for CML source text.

CML is line oriented for our purposes: every declaration, property and enum
value list sits on its own line. The lexer trims lines, drops `//` comments
and discards blank lines, keeping the 1-based source line number.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class LineKind(Enum):
    """Classification of a logical line."""

    BOUNDED_CONTEXT = "BoundedContext"
    AGGREGATE = "Aggregate"
    ENTITY = "Entity"
    VALUE_OBJECT = "ValueObject"
    ENUM = "enum"
    AGGREGATE_ROOT = "aggregateRoot"
    BLOCK = "block"
    CLOSE = "}"
    OTHER = "other"


# Keyword prefixes that open a scope; the keyword must be followed by whitespace.
OPENING_KINDS = (
    LineKind.BOUNDED_CONTEXT,
    LineKind.AGGREGATE,
    LineKind.ENTITY,
    LineKind.VALUE_OBJECT,
    LineKind.ENUM,
)

AGGREGATE_ROOT_MARKER = "aggregateRoot"

_NAME_PATTERNS = {
    kind: re.compile(rf"^{kind.value}\s+(\w+)") for kind in OPENING_KINDS
}


@dataclass(frozen=True)
class Line:
    """A trimmed, comment-free, non-empty source line."""
    number: int
    text: str
    kind: LineKind = LineKind.OTHER

    @property
    def opens_scope(self) -> bool:
        return self.kind in OPENING_KINDS or self.kind is LineKind.BLOCK

    @property
    def closes_scope(self) -> bool:
        return self.text == "}" or self.text.endswith("}")

    def declared_name(self) -> str:
        """Name captured after the opening keyword ('' when missing)."""
        pattern = _NAME_PATTERNS.get(self.kind)
        if pattern is None:
            return ""
        match = pattern.match(self.text)
        return match.group(1) if match else ""

    def inline_body(self) -> Optional[str]:
        """Text between `{` and a closing `}` on the same line, if any.

        `enum Status { A, B }` -> `A, B`
        """
        if "{" not in self.text:
            return None
        body = self.text.split("{", 1)[1]
        if body.endswith("}"):
            body = body[:-1]
        return body.strip()


def strip_comment(text: str) -> str:
    """Remove a `//` comment and surrounding whitespace."""
    idx = text.find("//")
    if idx >= 0:
        text = text[:idx]
    return text.strip()


def classify(text: str) -> LineKind:
    for kind in OPENING_KINDS:
        prefix = kind.value
        if text.startswith(prefix) and len(text) > len(prefix) and text[len(prefix)].isspace():
            return kind
    if text == AGGREGATE_ROOT_MARKER:
        return LineKind.AGGREGATE_ROOT
    # Service, Repository, DomainEvent, ContextMap ... blocks: opaque, but their braces count
    if not text.startswith("{") and (text.endswith("{") or ("{" in text and text.endswith("}"))):
        return LineKind.BLOCK
    if text == "}" or text.endswith("}"):
        return LineKind.CLOSE
    return LineKind.OTHER


def tokenize_lines(content: str) -> List[Line]:
    """Split raw CML text into classified logical lines."""
    lines = []
    for number, raw in enumerate(content.splitlines(), start=1):
        text = strip_comment(raw)
        if not text:
            continue
        lines.append(Line(number=number, text=text, kind=classify(text)))
    return lines
