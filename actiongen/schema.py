"""In-memory schema shared by both generators.

Everything here is frozen: the extractor builds it once and the generators
only read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .type_map import is_scalar


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    type_name: str
    client_type: str
    wire_name: str
    has_default: bool = False


@dataclass(frozen=True)
class StructDefinition:
    """A flat record used as a request, a response or a field type."""

    name: str
    fields: tuple[FieldDefinition, ...]
    module: str
    location: str

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass(frozen=True)
class ActionDefinition:
    """A remotely invokable operation.

    ``result_type_names`` keeps every declared result; the first one is the
    response shape and any trailing ones are error indicators.
    """

    name: str
    request_type_name: str
    result_type_names: tuple[str, ...]
    module: str
    location: str

    @property
    def response_type_name(self) -> str:
        return self.result_type_names[0]


@dataclass(frozen=True)
class Schema:
    """Actions and structs of one generation run, both sorted by name."""

    actions: tuple[ActionDefinition, ...] = ()
    structs: Mapping[str, StructDefinition] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls,
        actions: list[ActionDefinition],
        structs: list[StructDefinition],
    ) -> Schema:
        """Create a schema with deterministic ordering."""
        ordered = {s.name: s for s in sorted(structs, key=lambda s: s.name)}
        return cls(
            actions=tuple(sorted(actions, key=lambda a: a.name)),
            structs=MappingProxyType(ordered),
        )

    @property
    def struct_names(self) -> list[str]:
        return list(self.structs)

    def get_struct(self, name: str) -> StructDefinition | None:
        return self.structs.get(name)

    def resolves(self, type_name: str) -> bool:
        """Check if a type name is a mapped scalar or a struct in this schema."""
        return is_scalar(type_name) or type_name in self.structs

    def ordered_structs(self) -> list[StructDefinition]:
        """Structs in name order (the order both artifacts render them)."""
        return list(self.structs.values())
