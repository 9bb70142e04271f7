"""Shared fixtures for actiongen tests.

Declaration trees are written under tmp_path as a uniquely named package so
generated dispatch modules can import them without clashing in sys.modules.
"""

from __future__ import annotations

import importlib.util
import sys
import textwrap
import uuid
from pathlib import Path
from types import ModuleType

import pytest

from actiongen.config import GeneratorConfig

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


# ---------------------------------------------------------------------------
# Sample declarations
# ---------------------------------------------------------------------------

USERS_SOURCE = '''
from __future__ import annotations

from dataclasses import dataclass

from actiongen import action


@dataclass
class GetUserRequest:
    id: int


@dataclass
class GetUserResponse:
    name: str
    email: str


@action
def get_user(req: GetUserRequest) -> tuple[GetUserResponse, Exception]:
    if req.id == 0:
        return GetUserResponse(name="", email=""), ValueError("invalid user id")
    return GetUserResponse(name=f"User-{req.id}", email="user@example.com"), None
'''


# ---------------------------------------------------------------------------
# Declaration tree factory
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Return a factory writing declaration files and returning a config.

    Usage::

        config = make_config({"users.py": USERS_SOURCE}, field_case="camel")
    """
    package = f"decl_{uuid.uuid4().hex[:8]}"
    src = tmp_path / "src"
    monkeypatch.syspath_prepend(str(src))

    def _make(files: dict[str, str], **overrides) -> GeneratorConfig:
        root = src / package
        root.mkdir(parents=True, exist_ok=True)
        (root / "__init__.py").write_text("")
        for relpath, text in files.items():
            path = root / relpath
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text))
        settings = {
            "source_root": root,
            "client_out_path": tmp_path / "out" / "actions.ts",
            "server_out_path": tmp_path / "out" / "router.py",
            "package": package,
        }
        settings.update(overrides)
        return GeneratorConfig(**settings)

    yield _make

    for name in [m for m in sys.modules if m == package or m.startswith(package + ".")]:
        sys.modules.pop(name, None)


@pytest.fixture
def import_generated():
    """Return a callable importing a generated dispatch module from a path."""
    loaded: list[str] = []

    def _import(path: Path) -> ModuleType:
        importlib.invalidate_caches()
        name = f"router_{uuid.uuid4().hex[:8]}"
        spec = importlib.util.spec_from_file_location(name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        loaded.append(name)
        return module

    yield _import

    for name in loaded:
        sys.modules.pop(name, None)


@pytest.fixture
def users_source() -> str:
    """Declarations for the get_user scenario (request, response, one action)."""
    return USERS_SOURCE


@pytest.fixture
def examples_root() -> Path:
    """The sample declaration package shipped in examples/actions."""
    return EXAMPLES_DIR / "actions"
