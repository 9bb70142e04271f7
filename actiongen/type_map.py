"""Scalar type mapping from Python declarations to the TypeScript client.

Names absent from the table pass through unchanged; they are assumed to be
records declared elsewhere in the same schema.
"""

from __future__ import annotations

BASIC_TYPE_MAP: dict[str, str] = {
    "str": "string",
    "int": "number",
    "float": "number",
    "bool": "boolean",
    "Exception": "Error",
}


def map_type(type_name: str) -> str:
    """Return the client type for a declared type name."""
    return BASIC_TYPE_MAP.get(type_name, type_name)


def is_scalar(type_name: str) -> bool:
    """Check if a declared type name is one of the mapped scalars."""
    return type_name in BASIC_TYPE_MAP
