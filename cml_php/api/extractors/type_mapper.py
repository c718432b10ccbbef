"""Type mapping from CML types to PHP types and Doctrine column types."""

from ...lib.model import CMLProperty

MIXED = "mixed"

DATETIME = "\\DateTime"
DOCTRINE_COLLECTION = "Doctrine\\Common\\Collections\\Collection"
DOCTRINE_ARRAY_COLLECTION = "Doctrine\\Common\\Collections\\ArrayCollection"
ELOQUENT_COLLECTION = "Illuminate\\Database\\Eloquent\\Collection"

# CML primitive (lower-cased) -> PHP type
PHP_TYPES = {
    "string": "string",
    "int": "int",
    "integer": "int",
    "long": "int",
    "bool": "bool",
    "boolean": "bool",
    "float": "float",
    "double": "float",
    "decimal": "float",
    "bigdecimal": "float",
    "date": DATETIME,
    "datetime": DATETIME,
    "timestamp": DATETIME,
    "time": DATETIME,
    "clob": "string",
    "text": "string",
    "blob": "string",
    "uuid": "string",
}

# CML primitive (lower-cased) -> Doctrine DBAL column type
DOCTRINE_TYPES = {
    "string": "string",
    "int": "integer",
    "integer": "integer",
    "long": "bigint",
    "bool": "boolean",
    "boolean": "boolean",
    "float": "float",
    "double": "float",
    "decimal": "decimal",
    "bigdecimal": "decimal",
    "date": "date",
    "datetime": "datetime",
    "timestamp": "datetime",
    "time": "time",
    "clob": "text",
    "text": "text",
    "blob": "blob",
    "uuid": "guid",
}

# Column type for collections of primitives (serialized into one column)
DOCTRINE_JSON = "json"


def is_primitive(raw_type: str) -> bool:
    return (raw_type or "").strip().lower() in PHP_TYPES


def map_primitive(raw_type: str) -> str:
    """Map a scalar CML type; unknown names pass through as class references."""
    if not raw_type or not raw_type.strip():
        return MIXED
    raw_type = raw_type.strip()
    return PHP_TYPES.get(raw_type.lower(), raw_type)


def map_collection(is_relation: bool, framework: str) -> str:
    """PHP type of a `Set<T>` / `List<T>` property for a framework variant."""
    if framework == "doctrine":
        # Only relations are mapped associations; primitive lists live in a json column
        return DOCTRINE_COLLECTION if is_relation else "array"
    if framework == "laravel":
        return ELOQUENT_COLLECTION
    return "array"


def map_type(raw_type: str, is_collection: bool = False, is_relation: bool = False,
             framework: str = "plain") -> str:
    """
    Map a CML type plus property modifiers to a PHP type name.

    Collections resolve to the framework's collection representation
    regardless of the element type.
    """
    if is_collection:
        return map_collection(is_relation, framework)
    return map_primitive(raw_type)


def map_property_type(prop: CMLProperty, framework: str = "plain") -> str:
    return map_type(prop.type, prop.is_collection, prop.is_relation, framework)


def map_storage_type(raw_type: str) -> str:
    """Map a CML type to a Doctrine column type (`string` for unknown types)."""
    if not is_primitive(raw_type):
        return "string"
    return DOCTRINE_TYPES.get(raw_type.strip().lower(), "string")
