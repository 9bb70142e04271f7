"""Generation-time errors.

Extraction never stops at the first bad declaration. Each problem is recorded
as a ``Violation`` and the whole report is raised once, before anything is
rendered, as the most severe exception kind present.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ViolationKind(str, Enum):
    """Category of a problem found while extracting a schema."""

    SYNTAX = "syntax"
    SHAPE = "shape"
    ARITY = "arity"
    RESERVED = "reserved"
    DUPLICATE = "duplicate"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Violation:
    """One declaration that does not fit the supported shape."""

    kind: ViolationKind
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class ActionGenError(Exception):
    """Base class for every error that aborts a generation run."""


class SchemaViolation(ActionGenError):
    """Declarations outside the bounded shape the extractor supports."""

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = list(violations)
        lines = "\n".join(f"  {v}" for v in self.violations)
        super().__init__(f"{len(self.violations)} schema violation(s):\n{lines}")


class DuplicateDefinition(SchemaViolation):
    """Two structs or two actions share a name."""


class UnresolvedReference(ActionGenError):
    """A field or action names a type that is neither scalar nor a struct."""

    def __init__(self, violations: list[Violation]) -> None:
        self.violations = list(violations)
        lines = "\n".join(f"  {v}" for v in self.violations)
        super().__init__(f"{len(self.violations)} unresolved reference(s):\n{lines}")


class IOFailure(ActionGenError):
    """Source directory unreadable or output path unwritable."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


_SEVERITY: list[tuple[ViolationKind, type[ActionGenError]]] = [
    (ViolationKind.SYNTAX, SchemaViolation),
    (ViolationKind.SHAPE, SchemaViolation),
    (ViolationKind.ARITY, SchemaViolation),
    (ViolationKind.RESERVED, SchemaViolation),
    (ViolationKind.DUPLICATE, DuplicateDefinition),
    (ViolationKind.UNRESOLVED, UnresolvedReference),
]


def raise_for_violations(violations: list[Violation]) -> None:
    """Raise the most severe error kind in the report, carrying all of it."""
    if not violations:
        return
    kinds = {v.kind for v in violations}
    for kind, exc_type in _SEVERITY:
        if kind in kinds:
            raise exc_type(violations)
