"""Canonical type naming and member-name wildcard matching."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from .models.types import TypeInfo, TypeResolver

WILDCARD = "*"
NULL_NAME = "null"
ARRAY_SUFFIX = "[]"


def canonical_name(type_info: TypeInfo) -> str:
    """Return the canonical name of a type.

    Array types are named after their component type plus one ``[]`` per
    dimension, so a two-dimensional int array is ``int[][]``.
    """
    component = type_info.component_type
    if component is None:
        return type_info.name
    return canonical_name(component) + ARRAY_SUFFIX


def canonical_value_name(value: Any, resolver: TypeResolver) -> str:
    """Return the canonical name of a value's runtime type, or ``null``."""
    if value is None:
        return NULL_NAME
    return canonical_name(resolver.type_of(value))


def canonical_names(types: Iterable[TypeInfo]) -> tuple[str, ...]:
    return tuple(canonical_name(t) for t in types)


def is_wildcard(identifier: str) -> bool:
    return identifier == WILDCARD


def name_matches(pattern: str, actual: str) -> bool:
    """Exact, case-sensitive name comparison where ``*`` matches anything."""
    return pattern == WILDCARD or pattern == actual
