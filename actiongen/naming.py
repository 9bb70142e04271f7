"""Names as they appear on the wire and in the generated client.

Field wire names follow one of three conventions, shared by the client
interfaces and the server decoder so both artifacts agree:

  - lower    -> user_id -> user_id, UserID -> userid
  - preserve -> UserID  -> UserID
  - camel    -> user_id -> userId

Action names become exported TypeScript bindings, so words reserved in
TypeScript cannot be used as action names.
"""

from __future__ import annotations

import re

FIELD_CASES = ("lower", "preserve", "camel")

# Words that cannot be used as an exported const name in TypeScript
TS_RESERVED: frozenset[str] = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    "await", "arguments", "eval",
})

_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase, keeping leading underscores."""
    stripped = name.lstrip("_")
    prefix = name[: len(name) - len(stripped)]
    head, *rest = stripped.split("_")
    return prefix + head + "".join(part[:1].upper() + part[1:] for part in rest if part)


def wire_name(name: str, field_case: str = "lower") -> str:
    """Return the JSON key used for a record field."""
    if field_case == "lower":
        return name.lower()
    if field_case == "preserve":
        return name
    if field_case == "camel":
        return _snake_to_camel(name)
    raise ValueError(f"unknown field case {field_case!r}, expected one of {FIELD_CASES}")


def is_client_identifier(name: str) -> bool:
    """Check if a name can be exported as-is from the TypeScript client."""
    return bool(_TS_IDENTIFIER.match(name)) and name not in TS_RESERVED
