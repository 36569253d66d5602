"""
Type compatibility checks.

A stream can be charted when its type is an object with a single scalar index
property. These helpers decide that from a TypeSchema and pick the index key;
they have no side effects.
"""

from __future__ import annotations

from sdswatch.models.sds import (
    PRIMITIVE_TYPE_CODES,
    TIME_TYPE_CODES,
    PropertySchema,
    SdsTypeCode,
    TypeSchema,
)

__all__ = [
    "find_index_key",
    "is_chartable_type",
    "is_index_key_property",
    "is_time_code",
    "value_field_names",
]


def is_time_code(type_code: int | None) -> bool:
    """Check whether a type code is a date/time code."""
    return type_code in TIME_TYPE_CODES


def is_index_key_property(prop: PropertySchema | None) -> bool:
    """Check whether a property can be used as the chart index.

    The property must be the key (or the first part of a compound key), and
    its type must be a scalar leaf type.

    Args:
        prop: Property to check

    Returns:
        True if the property qualifies as an index key
    """
    if prop is None or not prop.is_key:
        return False
    if prop.order not in (None, 0):
        return False
    leaf = prop.type
    if leaf is None or leaf.properties:
        return False
    return leaf.type_code in PRIMITIVE_TYPE_CODES


def find_index_key(type_schema: TypeSchema | None) -> PropertySchema | None:
    """Find the index key property of a type.

    When several properties qualify, the first in declared order is used.

    Args:
        type_schema: Type to inspect

    Returns:
        The index key property, or None if the type is not chartable
    """
    if type_schema is None or type_schema.type_code != SdsTypeCode.OBJECT:
        return None
    for prop in type_schema.properties or []:
        if is_index_key_property(prop):
            return prop
    return None


def is_chartable_type(type_schema: TypeSchema | None) -> bool:
    """Check whether streams of this type can be charted."""
    return find_index_key(type_schema) is not None


def value_field_names(type_schema: TypeSchema) -> list[str]:
    """Get the ids of all non-index properties in schema order.

    Args:
        type_schema: A chartable type

    Returns:
        Property ids to chart as values
    """
    key = find_index_key(type_schema)
    return [prop.id for prop in type_schema.properties or [] if prop is not None and prop is not key]
