"""Build Jinja2 template contexts from an extracted schema.

One context per artifact. Both read the same Schema and never modify it, so
the client bindings and the dispatch arms always agree on names and shapes.
"""

from __future__ import annotations

from typing import Any

from .config import GeneratorConfig
from .schema import ActionDefinition, Schema, StructDefinition
from .type_map import is_scalar, map_type

# Scalars whose wire form is not the value itself
_SCALAR_ENCODERS: dict[str, str] = {
    "Exception": "_encode_Exception",
}


def _qualname(module: str, name: str) -> str:
    return f"{module}.{name}" if module else name


def decoder_for(type_name: str) -> str:
    """Name of the generated function decoding a wire value into type_name."""
    return f"_decode_{type_name}"


def encoder_for(type_name: str) -> str:
    """Name of the generated function encoding a type_name value for the wire."""
    if is_scalar(type_name):
        return _SCALAR_ENCODERS.get(type_name, "_encode_scalar")
    return f"_encode_{type_name}"


def _client_struct(struct: StructDefinition) -> dict[str, Any]:
    return {
        "name": struct.name,
        "fields": [
            {
                "wire_name": f.wire_name,
                "client_type": f.client_type,
                "optional": f.has_default,
            }
            for f in struct.fields
        ],
    }


def _client_action(action: ActionDefinition) -> dict[str, Any]:
    return {
        "name": action.name,
        "request_type": map_type(action.request_type_name),
        "response_type": map_type(action.response_type_name),
    }


def build_client_context(schema: Schema, config: GeneratorConfig) -> dict[str, Any]:
    """Build the context for client.ts.j2."""
    return {
        "endpoint": config.endpoint,
        "structs": [_client_struct(s) for s in schema.ordered_structs()],
        "actions": [_client_action(a) for a in schema.actions],
        "action_count": len(schema.actions),
        "struct_count": len(schema.structs),
    }


def _server_struct(struct: StructDefinition) -> dict[str, Any]:
    return {
        "name": struct.name,
        "qualname": _qualname(struct.module, struct.name),
        "fields": [
            {
                "name": f.name,
                "wire_name": f.wire_name,
                "type_name": f.type_name,
                "has_default": f.has_default,
                "decoder": decoder_for(f.type_name),
                "encoder": encoder_for(f.type_name),
            }
            for f in struct.fields
        ],
    }


def _server_action(action: ActionDefinition) -> dict[str, Any]:
    return {
        "name": action.name,
        "qualname": _qualname(action.module, action.name),
        "request_type": action.request_type_name,
        "response_type": action.response_type_name,
        "result_count": len(action.result_type_names),
        "decoder": decoder_for(action.request_type_name),
        "encoder": encoder_for(action.response_type_name),
    }


def build_server_context(schema: Schema, config: GeneratorConfig) -> dict[str, Any]:
    """Build the context for server.py.j2."""
    modules = {s.module for s in schema.ordered_structs()}
    modules.update(a.module for a in schema.actions)

    return {
        "endpoint": config.endpoint,
        "modules": sorted(m for m in modules if m),
        "structs": [_server_struct(s) for s in schema.ordered_structs()],
        "actions": [_server_action(a) for a in schema.actions],
        "action_count": len(schema.actions),
    }
