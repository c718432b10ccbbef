"""Identifier helpers for emitted PHP code."""

import re

_NON_WORD = re.compile(r"[^a-zA-Z0-9_]")


def to_snake_case(name: str) -> str:
    """`OrderLine` -> `order_line`"""
    return re.sub(r"^_", "", re.sub(r"([A-Z])", r"_\1", name).lower())


def capitalize(name: str) -> str:
    """Upper-case the first character only (`firstName` -> `FirstName`)."""
    return name[:1].upper() + name[1:]


def enum_case_name(value: str) -> str:
    """Normalize an enum label: non `[A-Za-z0-9_]` chars -> `_`, then upper-case.

    `pending-review` -> `PENDING_REVIEW`
    """
    return _NON_WORD.sub("_", value).upper()


def short_name(fqn: str) -> str:
    """`Doctrine\\ORM\\Mapping\\Entity` -> `Entity`"""
    return fqn.strip("\\").rsplit("\\", 1)[-1]
