"""Extract structs and actions from Python declaration sources.

Handles:
- dataclass records (@dataclass, @dataclass(...), @dataclasses.dataclass)
- NamedTuple records
- ClassVar exclusion
- rejection of inherited records (bases other than NamedTuple)
- string annotations holding a bare name
- @action marker as a decorator, a leading comment or a docstring line
- single-result and tuple-result action signatures
- duplicate and unresolved name checks

Every declaration outside the supported shape is recorded as a violation;
the full report is raised once at the end of extraction.
"""

from __future__ import annotations

import ast
import logging

from .config import GeneratorConfig
from .errors import Violation, ViolationKind, raise_for_violations
from .loader import SourceFile, load_sources
from .naming import is_client_identifier, wire_name
from .schema import ActionDefinition, FieldDefinition, Schema, StructDefinition
from .type_map import map_type

logger = logging.getLogger(__name__)

_RECORD_DECORATORS = {"dataclass"}
_RECORD_BASES = {"NamedTuple"}
_TUPLE_NAMES = {"tuple", "Tuple"}


def _describe(node: ast.AST | None) -> str:
    """Render an annotation back to source text for error messages."""
    if node is None:
        return "<missing>"
    return ast.unparse(node)


def _dotted_tail(node: ast.AST) -> str | None:
    """Return the last name of a Name/Attribute/Call chain ('a.b.c()' -> 'c')."""
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def annotation_name(node: ast.AST | None) -> str | None:
    """Return the type name of a simple annotation, or None.

    Only bare names qualify; 'Foo' as a string counts as the name Foo.
    """
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        text = node.value.strip()
        if text.isidentifier():
            return text
    return None


def _is_classvar(node: ast.AST) -> bool:
    """Check if an annotation is ClassVar or ClassVar[...]."""
    if isinstance(node, ast.Subscript):
        node = node.value
    return _dotted_tail(node) == "ClassVar"


def is_record_class(node: ast.ClassDef) -> bool:
    """Check if a class declares a flat record (dataclass or NamedTuple)."""
    if any(_dotted_tail(d) in _RECORD_DECORATORS for d in node.decorator_list):
        return True
    return any(_dotted_tail(b) in _RECORD_BASES for b in node.bases)


def leading_comments(source: SourceFile, node: ast.FunctionDef | ast.AsyncFunctionDef) -> list[str]:
    """Return the comment lines directly above a function and its decorators.

    Lines are returned nearest first; a blank or code line ends the block.
    """
    first = min([node.lineno] + [d.lineno for d in node.decorator_list])
    comments = []
    index = first - 2
    while 0 <= index < len(source.lines):
        line = source.lines[index].strip()
        if not line.startswith("#"):
            break
        comments.append(line)
        index -= 1
    return comments


def has_action_marker(
    source: SourceFile,
    node: ast.FunctionDef | ast.AsyncFunctionDef,
    config: GeneratorConfig,
) -> bool:
    """Check if a function is marked as an action.

    Any of:
    - a decorator named after the marker ('@action' -> action)
    - a '# @action' comment directly above the function or its decorators
    - a docstring line containing the marker token
    """
    if any(_dotted_tail(d) == config.marker_name for d in node.decorator_list):
        return True
    if any(config.marker in line for line in leading_comments(source, node)):
        return True
    doc = ast.get_docstring(node, clean=False)
    if not doc:
        return False
    return any(config.marker in line for line in doc.splitlines())

def parse_struct(
    source: SourceFile,
    node: ast.ClassDef,
    field_case: str,
    violations: list[Violation],
) -> StructDefinition | None:
    """Build a StructDefinition from a record class.

    Returns None (and records violations) if any field has a composite type
    or the class inherits from anything but NamedTuple.
    """
    fields: list[FieldDefinition] = []
    ok = True

    for base in node.bases:
        if _dotted_tail(base) in _RECORD_BASES | {"object"}:
            continue
        violations.append(Violation(
            ViolationKind.SHAPE,
            f"{source.locate(node)} {node.name}",
            f"base class {_describe(base)!r} is not supported"
            " (records must declare all of their fields themselves)",
        ))
        ok = False

    for stmt in node.body:
        if not isinstance(stmt, ast.AnnAssign):
            continue
        if not isinstance(stmt.target, ast.Name):
            continue
        if _is_classvar(stmt.annotation):
            continue

        field_name = stmt.target.id
        type_name = annotation_name(stmt.annotation)
        if type_name is None:
            violations.append(Violation(
                ViolationKind.SHAPE,
                f"{source.locate(stmt)} {node.name}.{field_name}",
                f"field type {_describe(stmt.annotation)!r} is not a simple type name"
                " (containers, optionals, unions and generics are not supported)",
            ))
            ok = False
            continue

        fields.append(FieldDefinition(
            name=field_name,
            type_name=type_name,
            client_type=map_type(type_name),
            wire_name=wire_name(field_name, field_case),
            has_default=stmt.value is not None,
        ))

    wire_names = [f.wire_name for f in fields]
    for f in fields:
        if wire_names.count(f.wire_name) > 1:
            violations.append(Violation(
                ViolationKind.DUPLICATE,
                f"{source.locate(node)} {node.name}.{f.name}",
                f"field wire name {f.wire_name!r} is used by more than one field",
            ))
            ok = False
            break

    if not ok:
        return None

    logger.debug("Found struct %s (%d fields) in %s", node.name, len(fields), source.relpath)
    return StructDefinition(
        name=node.name,
        fields=tuple(fields),
        module=source.module,
        location=source.locate(node),
    )


def _result_names(node: ast.AST | None) -> list[str] | None:
    """Return the declared result type names of a return annotation.

    'Resp' -> ['Resp'], 'tuple[Resp, Exception]' -> ['Resp', 'Exception'].
    """
    name = annotation_name(node)
    if name is not None:
        return [name]
    if not isinstance(node, ast.Subscript) or _dotted_tail(node.value) not in _TUPLE_NAMES:
        return None

    elements = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
    names = [annotation_name(e) for e in elements]
    if not names or any(n is None for n in names):
        return None
    return names  # type: ignore[return-value]


def parse_action(
    source: SourceFile,
    node: ast.FunctionDef | ast.AsyncFunctionDef,
    violations: list[Violation],
) -> ActionDefinition | None:
    """Build an ActionDefinition from a marked function.

    The function must take exactly one parameter and declare at least one
    result, all annotated with simple type names.
    """
    locator = f"{source.locate(node)} {node.name}"
    before = len(violations)

    if isinstance(node, ast.AsyncFunctionDef):
        violations.append(Violation(
            ViolationKind.SHAPE, locator, "async functions cannot be actions",
        ))

    if not is_client_identifier(node.name):
        violations.append(Violation(
            ViolationKind.RESERVED, locator,
            f"action name {node.name!r} is reserved in the client language",
        ))

    args = node.args
    params = args.posonlyargs + args.args
    if len(params) != 1 or args.vararg or args.kwarg or args.kwonlyargs:
        violations.append(Violation(
            ViolationKind.ARITY, locator,
            f"an action takes exactly one parameter, found ({_describe(args)})",
        ))
        request = None
    else:
        request = annotation_name(params[0].annotation)
        if request is None:
            violations.append(Violation(
                ViolationKind.SHAPE, locator,
                f"parameter type {_describe(params[0].annotation)!r} is not a simple type name",
            ))

    if node.returns is None:
        violations.append(Violation(
            ViolationKind.ARITY, locator, "an action must declare a return type",
        ))
        results = None
    else:
        results = _result_names(node.returns)
        if results is None:
            violations.append(Violation(
                ViolationKind.SHAPE, locator,
                f"return type {_describe(node.returns)!r} is not a simple type name"
                " or a tuple of simple type names",
            ))

    if len(violations) > before or request is None or results is None:
        return None

    logger.debug("Found action %s(%s) -> %s in %s", node.name, request, results[0], source.relpath)
    return ActionDefinition(
        name=node.name,
        request_type_name=request,
        result_type_names=tuple(results),
        module=source.module,
        location=source.locate(node),
    )


def _check_duplicates(
    kind: str,
    definitions: list[StructDefinition] | list[ActionDefinition],
    violations: list[Violation],
) -> None:
    """Report every name declared more than once."""
    seen: dict[str, str] = {}
    for definition in definitions:
        first = seen.get(definition.name)
        if first is None:
            seen[definition.name] = definition.location
            continue
        violations.append(Violation(
            ViolationKind.DUPLICATE,
            f"{definition.location} {definition.name}",
            f"{kind} {definition.name!r} is already defined at {first}",
        ))


def _check_references(
    schema: Schema,
    rejected: set[str],
    violations: list[Violation],
) -> None:
    """Report every field or action type that is neither scalar nor a struct.

    Structs already rejected for their shape are not reported a second time.
    """
    def known(type_name: str) -> bool:
        return schema.resolves(type_name) or type_name in rejected

    for struct in schema.ordered_structs():
        for f in struct.fields:
            if not known(f.type_name):
                violations.append(Violation(
                    ViolationKind.UNRESOLVED,
                    f"{struct.location} {struct.name}.{f.name}",
                    f"unknown type {f.type_name!r}",
                ))
    for action in schema.actions:
        for role, type_name in [("request", action.request_type_name)] + [
            ("result", name) for name in action.result_type_names
        ]:
            if not known(type_name):
                violations.append(Violation(
                    ViolationKind.UNRESOLVED,
                    f"{action.location} {action.name}",
                    f"unknown {role} type {type_name!r}",
                ))


def extract_schema(config: GeneratorConfig) -> Schema:
    """Build the schema for every declaration under config.source_root.

    Raises the most severe collected error if any declaration is invalid.
    """
    violations: list[Violation] = []
    sources = load_sources(config.source_root, config.package, violations)

    structs: list[StructDefinition] = []
    actions: list[ActionDefinition] = []
    rejected: set[str] = set()

    for source in sources:
        for node in source.tree.body:
            if isinstance(node, ast.ClassDef) and is_record_class(node):
                struct = parse_struct(source, node, config.field_case, violations)
                if struct is None:
                    rejected.add(node.name)
                else:
                    structs.append(struct)
            elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                if has_action_marker(source, node, config):
                    action = parse_action(source, node, violations)
                    if action is not None:
                        actions.append(action)

    _check_duplicates("struct", structs, violations)
    _check_duplicates("action", actions, violations)

    schema = Schema.build(actions, structs)
    _check_references(schema, rejected, violations)
    raise_for_violations(violations)

    logger.info(
        "Extracted %d actions and %d structs from %d files",
        len(schema.actions), len(schema.structs), len(sources),
    )
    return schema
