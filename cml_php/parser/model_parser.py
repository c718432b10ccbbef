"""
Scope-stack parser turning classified CML lines into a CMLModel.

Every opening keyword pushes a tagged frame, and any other line ending in `{`
(Service, Repository, DomainEvent, ContextMap ...) pushes an opaque block
frame whose content is ignored; every closing line (`}` or a line
ending in `}`) pops exactly one frame, the innermost. Members are always
delivered to the frame on top of the stack, so irregular brace placement only
affects the element being closed and never leaks properties into an outer
scope.

The parser never raises on malformed content: unknown lines are dropped,
missing names become "", and braces closing an empty stack are ignored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from ..api.gen_logging import get_logger
from ..lib.model import (
    Aggregate,
    BoundedContext,
    CMLEnum,
    CMLModel,
    Entity,
    ValueObject,
)
from .lexer import Line, LineKind, tokenize_lines
from .property_parser import parse_property

logger = get_logger(__name__)


class ScopeKind(Enum):
    CONTEXT = "BoundedContext"
    AGGREGATE = "Aggregate"
    ENTITY = "Entity"
    VALUE_OBJECT = "ValueObject"
    ENUM = "enum"
    BLOCK = "block"


_SCOPE_FOR_LINE = {
    LineKind.BOUNDED_CONTEXT: ScopeKind.CONTEXT,
    LineKind.AGGREGATE: ScopeKind.AGGREGATE,
    LineKind.ENTITY: ScopeKind.ENTITY,
    LineKind.VALUE_OBJECT: ScopeKind.VALUE_OBJECT,
    LineKind.ENUM: ScopeKind.ENUM,
    LineKind.BLOCK: ScopeKind.BLOCK,
}


@dataclass
class OpaqueBlock:
    """Service, Repository, DomainEvent, ContextMap ...: tracked for its braces only."""
    name: str


ScopeNode = Union[BoundedContext, Aggregate, Entity, ValueObject, CMLEnum, OpaqueBlock]


@dataclass
class ScopeFrame:
    kind: ScopeKind
    node: ScopeNode
    line: int


def split_enum_values(text: str) -> List[str]:
    """Split an enum body line into value labels.

    `Active, Inactive, pending-review` -> ["Active", "Inactive", "pending-review"]
    Anything after `;` or `/` inside an item is dropped.
    """
    values = []
    for item in text.split(","):
        for stop in (";", "/"):
            idx = item.find(stop)
            if idx >= 0:
                item = item[:idx]
        value = item.strip().strip("{}").strip()
        if value:
            values.append(value)
    return values


class ModelParser:
    """Stateful parser for one CML document. Use `parse_cml` instead."""

    def __init__(self):
        self.model = CMLModel()
        self.stack: List[ScopeFrame] = []

    # ------------------------------------------------------------------
    # Stack helpers

    @property
    def top(self) -> Optional[ScopeFrame]:
        return self.stack[-1] if self.stack else None

    def _nearest(self, kind: ScopeKind) -> Optional[ScopeNode]:
        for frame in reversed(self.stack):
            if frame.kind is kind:
                return frame.node
        return None

    def _pop(self, line: Line) -> None:
        if not self.stack:
            logger.debug(f"  line {line.number}: closing brace with no open scope ignored")
            return
        frame = self.stack.pop()
        logger.debug(f"  line {line.number}: closed {frame.kind.value} '{frame.node.name}'")

    # ------------------------------------------------------------------
    # Line handlers

    def _open(self, line: Line) -> ScopeFrame:
        kind = _SCOPE_FOR_LINE[line.kind]
        name = line.declared_name()

        if kind is ScopeKind.BLOCK:
            node = OpaqueBlock(name=line.text.split("{", 1)[0].strip())
        elif kind is ScopeKind.CONTEXT:
            node = BoundedContext(name=name)
            self.model.bounded_contexts.append(node)
        elif kind is ScopeKind.AGGREGATE:
            node = Aggregate(name=name)
            context = self._nearest(ScopeKind.CONTEXT)
            if context is not None:
                context.aggregates.append(node)
            else:
                logger.debug(f"  line {line.number}: Aggregate '{name}' outside a BoundedContext dropped")
        else:
            if kind is ScopeKind.ENTITY:
                node = Entity(name=name)
            elif kind is ScopeKind.VALUE_OBJECT:
                node = ValueObject(name=name)
            else:
                node = CMLEnum(name=name)

            aggregate = self._nearest(ScopeKind.AGGREGATE)
            if aggregate is not None:
                if kind is ScopeKind.ENTITY:
                    aggregate.entities.append(node)
                elif kind is ScopeKind.VALUE_OBJECT:
                    aggregate.value_objects.append(node)
                else:
                    aggregate.enums.append(node)
            else:
                logger.debug(f"  line {line.number}: {kind.value} '{name}' outside an Aggregate dropped")

        frame = ScopeFrame(kind=kind, node=node, line=line.number)
        self.stack.append(frame)
        logger.debug(f"  line {line.number}: opened {kind.value} '{node.name}'")
        return frame

    def _member(self, text: str, line: Line) -> None:
        """Deliver a non-declaration line to the innermost scope."""
        frame = self.top
        if frame is None:
            logger.debug(f"  line {line.number}: '{text}' outside any scope dropped")
            return

        if frame.kind is ScopeKind.ENUM:
            frame.node.values.extend(split_enum_values(text))
        elif frame.kind in (ScopeKind.ENTITY, ScopeKind.VALUE_OBJECT):
            prop = parse_property(text)
            if prop is not None:
                frame.node.properties.append(prop)
            elif text != "{":
                logger.debug(f"  line {line.number}: '{text}' is not a property, dropped")
        else:
            logger.debug(f"  line {line.number}: '{text}' in {frame.kind.value} ignored")

    def feed(self, line: Line) -> None:
        if line.opens_scope:
            self._open(line)
            body = line.inline_body()
            if body:
                self._member(body, line)
            if line.closes_scope:
                self._pop(line)
            return

        if line.kind is LineKind.AGGREGATE_ROOT:
            frame = self.top
            if frame is not None and frame.kind is ScopeKind.ENTITY:
                frame.node.is_aggregate_root = True
            else:
                self._member(line.text, line)
            return

        if line.closes_scope:
            content = line.text[:-1].strip()
            if content:
                self._member(content, line)
            self._pop(line)
            return

        self._member(line.text, line)

    def parse(self, content: str) -> CMLModel:
        for line in tokenize_lines(content):
            self.feed(line)
        if self.stack:
            unclosed = ", ".join(f"{f.kind.value} '{f.node.name}'" for f in self.stack)
            logger.debug(f"  end of input with open scopes: {unclosed}")
        return self.model


def parse_cml(content: str) -> CMLModel:
    """Parse CML text into a CMLModel. Never raises on malformed input."""
    return ModelParser().parse(content or "")
