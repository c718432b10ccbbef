"""
In-memory PHP building blocks.

Generators assemble a PhpFile out of these objects; the printer
(api/generators/printer.py) turns them into source text through Jinja
templates. Type names are kept as written by the type mapper:

    - builtin types:        "string", "array", "mixed", ...
    - global classes:       "\\DateTime"
    - namespaced classes:   "Doctrine\\Common\\Collections\\Collection" (imported by the printer)
    - sibling model types:  "OrderLine" (same namespace, printed as-is)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

PUBLIC = "public"
PRIVATE = "private"


@dataclass
class PhpAttribute:
    """A PHP 8 attribute, e.g. `#[ORM\\Column(type: 'string')]`."""
    name: str
    args: List[str] = field(default_factory=list)
    class_refs: List[str] = field(default_factory=list)  # names used as `X::class` in args


@dataclass
class PhpParameter:
    name: str
    type: str = "mixed"
    nullable: bool = False
    promoted: bool = False
    visibility: str = PRIVATE  # promoted parameters only
    readonly: bool = False
    attributes: List[PhpAttribute] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

    def add_attribute(self, name: str, args: List[str] = None, class_refs: List[str] = None) -> PhpAttribute:
        attribute = PhpAttribute(name, list(args or []), list(class_refs or []))
        self.attributes.append(attribute)
        return attribute


@dataclass
class PhpProperty:
    name: str
    type: str = "mixed"
    nullable: bool = False
    visibility: str = PRIVATE
    readonly: bool = False
    attributes: List[PhpAttribute] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

    def add_attribute(self, name: str, args: List[str] = None, class_refs: List[str] = None) -> PhpAttribute:
        attribute = PhpAttribute(name, list(args or []), list(class_refs or []))
        self.attributes.append(attribute)
        return attribute


@dataclass
class PhpMethod:
    name: str
    visibility: str = PUBLIC
    parameters: List[PhpParameter] = field(default_factory=list)
    return_type: Optional[str] = None
    return_nullable: bool = False
    body: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

    def add_parameter(self, name: str, type: str = "mixed", nullable: bool = False,
                      promoted: bool = False) -> PhpParameter:
        param = PhpParameter(name=name, type=type, nullable=nullable, promoted=promoted)
        self.parameters.append(param)
        return param

    @property
    def promoted_parameters(self) -> List[PhpParameter]:
        return [p for p in self.parameters if p.promoted]


@dataclass
class PhpClass:
    name: str
    final: bool = False
    readonly: bool = False
    extends: Optional[str] = None
    attributes: List[PhpAttribute] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    properties: List[PhpProperty] = field(default_factory=list)
    methods: List[PhpMethod] = field(default_factory=list)

    def add_property(self, name: str, type: str = "mixed", nullable: bool = False) -> PhpProperty:
        prop = PhpProperty(name=name, type=type, nullable=nullable)
        self.properties.append(prop)
        return prop

    def add_method(self, name: str) -> PhpMethod:
        method = PhpMethod(name=name)
        self.methods.append(method)
        return method

    def add_attribute(self, name: str, args: List[str] = None, class_refs: List[str] = None) -> PhpAttribute:
        attribute = PhpAttribute(name, list(args or []), list(class_refs or []))
        self.attributes.append(attribute)
        return attribute

    def get_method(self, name: str) -> Optional[PhpMethod]:
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass
class PhpEnum:
    name: str
    backing_type: str = "string"
    cases: List[Tuple[str, str]] = field(default_factory=list)

    def add_case(self, name: str, value: str) -> None:
        self.cases.append((name, value))


@dataclass
class PhpFile:
    namespace: str
    declaration: Union[PhpClass, PhpEnum]
    strict_types: bool = True
