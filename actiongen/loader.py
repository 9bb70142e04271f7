"""Load and parse the declaration sources.

Walks the source root, reads every Python file and parses it into an AST.
Files are returned in a fixed order so repeated runs see the same input.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import IOFailure, Violation, ViolationKind

logger = logging.getLogger(__name__)

_SKIP_DIRS = {"__pycache__"}


@dataclass(frozen=True)
class SourceFile:
    path: Path
    relpath: str
    module: str
    tree: ast.Module
    lines: tuple[str, ...] = ()

    def locate(self, node: ast.AST) -> str:
        """Return a file:line locator for a node of this file."""
        return f"{self.relpath}:{getattr(node, 'lineno', 0)}"


def module_name_for(relpath: str, package: str) -> str:
    """Map a path relative to the source root to its import path.

    'users.py' -> 'actions.users', 'admin/__init__.py' -> 'actions.admin'.
    """
    parts = list(Path(relpath).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    prefix = [p for p in package.split(".") if p]
    return ".".join(prefix + parts)


def iter_source_files(root: Path) -> list[Path]:
    """Return every .py file under root, sorted by relative path."""
    if not root.exists():
        raise IOFailure(root, "source root does not exist")
    if not root.is_dir():
        raise IOFailure(root, "source root is not a directory")

    files = []
    for path in root.rglob("*.py"):
        rel_parts = path.relative_to(root).parts
        if any(p in _SKIP_DIRS or p.startswith(".") for p in rel_parts[:-1]):
            continue
        files.append(path)
    return sorted(files, key=lambda p: p.relative_to(root).as_posix())


def read_source(path: Path) -> str:
    """Read one source file as UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IOFailure(path, f"cannot read source file ({exc})") from exc


def load_sources(
    root: Path,
    package: str,
    violations: list[Violation],
) -> list[SourceFile]:
    """Read and parse all declaration files under root.

    Files that fail to parse are reported into ``violations`` and skipped so
    the rest of the tree can still be checked in the same run.
    """
    sources: list[SourceFile] = []
    for path in iter_source_files(root):
        relpath = path.relative_to(root).as_posix()
        text = read_source(path)
        try:
            tree = ast.parse(text, filename=relpath)
        except SyntaxError as exc:
            violations.append(Violation(
                ViolationKind.SYNTAX,
                f"{relpath}:{exc.lineno or 0}",
                f"invalid syntax: {exc.msg}",
            ))
            continue
        module = module_name_for(relpath, package)
        logger.debug("Parsed %s as module %s", relpath, module)
        sources.append(SourceFile(
            path=path,
            relpath=relpath,
            module=module,
            tree=tree,
            lines=tuple(text.splitlines()),
        ))
    return sources
