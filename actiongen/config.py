"""Generator configuration.

Paths are taken as given (relative paths resolve against the working
directory). The environment variables mirror the CLI options.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from .naming import FIELD_CASES

DEFAULT_SOURCE_ROOT = Path("actions")
DEFAULT_CLIENT_OUT = Path("generated") / "actions.ts"
DEFAULT_SERVER_OUT = Path("generated") / "router.py"
DEFAULT_ENDPOINT = "/api/actions"
DEFAULT_PACKAGE = "actions"
DEFAULT_MARKER = "@action"

_ENV_VARS: dict[str, str] = {
    "source_root": "ACTIONGEN_SOURCE_ROOT",
    "client_out_path": "ACTIONGEN_CLIENT_OUT",
    "server_out_path": "ACTIONGEN_SERVER_OUT",
    "endpoint": "ACTIONGEN_ENDPOINT",
    "package": "ACTIONGEN_PACKAGE",
    "field_case": "ACTIONGEN_FIELD_CASE",
    "marker": "ACTIONGEN_MARKER",
}

_PATH_SETTINGS = {"source_root", "client_out_path", "server_out_path"}


@dataclass(frozen=True)
class GeneratorConfig:
    """Everything one generation run needs to know.

    ``package`` is the dotted import path of ``source_root``; the generated
    server imports implementations as ``<package>.<module>``.
    """

    source_root: Path = DEFAULT_SOURCE_ROOT
    client_out_path: Path = DEFAULT_CLIENT_OUT
    server_out_path: Path = DEFAULT_SERVER_OUT
    endpoint: str = DEFAULT_ENDPOINT
    package: str = DEFAULT_PACKAGE
    field_case: str = "lower"
    marker: str = DEFAULT_MARKER

    def __post_init__(self) -> None:
        if self.field_case not in FIELD_CASES:
            raise ValueError(
                f"field_case must be one of {', '.join(FIELD_CASES)}, got {self.field_case!r}"
            )
        if not self.marker.strip("@"):
            raise ValueError("marker must contain a name, e.g. '@action'")
        for name in _PATH_SETTINGS:
            value = getattr(self, name)
            if not isinstance(value, Path):
                object.__setattr__(self, name, Path(value))

    @property
    def marker_name(self) -> str:
        """Decorator name matching the marker ('@action' -> 'action')."""
        return self.marker.lstrip("@")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GeneratorConfig:
        """Build a config from ACTIONGEN_* environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for setting, var in _ENV_VARS.items():
            raw = env.get(var)
            if raw:
                values[setting] = Path(raw) if setting in _PATH_SETTINGS else raw
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> GeneratorConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
