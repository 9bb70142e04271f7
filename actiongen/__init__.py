"""Generate typed client bindings and a server dispatch table from @action declarations."""

from .codegen import GenerationResult, generate, run
from .config import GeneratorConfig
from .errors import (
    ActionGenError,
    DuplicateDefinition,
    IOFailure,
    SchemaViolation,
    UnresolvedReference,
    Violation,
    ViolationKind,
)
from .marker import action
from .schema import ActionDefinition, FieldDefinition, Schema, StructDefinition
from .schema_parser import extract_schema

__all__ = [
    "ActionDefinition",
    "ActionGenError",
    "DuplicateDefinition",
    "FieldDefinition",
    "GenerationResult",
    "GeneratorConfig",
    "IOFailure",
    "Schema",
    "SchemaViolation",
    "StructDefinition",
    "UnresolvedReference",
    "Violation",
    "ViolationKind",
    "action",
    "extract_schema",
    "generate",
    "run",
]
