"""Render templates and write generated output.

Both artifacts are rendered in memory first; nothing touches the output
paths until the schema has been extracted, validated and fully rendered.
Both files are staged in full before either output path is replaced.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig
from .context_builder import build_client_context, build_server_context
from .errors import IOFailure
from .schema import Schema
from .schema_parser import extract_schema

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
CLIENT_TEMPLATE = "client.ts.j2"
SERVER_TEMPLATE = "server.py.j2"


@dataclass(frozen=True)
class GenerationResult:
    schema: Schema
    client_path: Path
    server_path: Path


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def _render(template_name: str, context: dict[str, Any]) -> str:
    template = _environment().get_template(template_name)
    return template.render(**context)


def render_client(schema: Schema, config: GeneratorConfig) -> str:
    """Render the TypeScript client bindings."""
    return _render(CLIENT_TEMPLATE, build_client_context(schema, config))


def render_server(schema: Schema, config: GeneratorConfig) -> str:
    """Render the Python dispatch module."""
    return _render(SERVER_TEMPLATE, build_server_context(schema, config))


def _stage(path: Path, text: str) -> Path:
    """Write text to a temporary file next to path and return its path."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    except OSError as exc:
        raise IOFailure(path, f"cannot write output ({exc})") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise IOFailure(path, f"cannot write output ({exc})") from exc
    return tmp_path


def write_outputs(outputs: list[tuple[Path, str]]) -> None:
    """Replace every path with its text, or none of them.

    All contents are staged in temporary files first. The final renames
    happen only once every file has been written in full.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for path, text in outputs:
            staged.append((_stage(path, text), path))
        for tmp_path, path in staged:
            try:
                os.replace(tmp_path, path)
            except OSError as exc:
                raise IOFailure(path, f"cannot write output ({exc})") from exc
    finally:
        for tmp_path, _ in staged:
            tmp_path.unlink(missing_ok=True)


def generate(schema: Schema, config: GeneratorConfig) -> GenerationResult:
    """Render both artifacts for a schema and write them together."""
    client = render_client(schema, config)
    server = render_server(schema, config)

    write_outputs([
        (config.client_out_path, client),
        (config.server_out_path, server),
    ])
    logger.info("Wrote %s and %s", config.client_out_path, config.server_out_path)

    return GenerationResult(
        schema=schema,
        client_path=config.client_out_path,
        server_path=config.server_out_path,
    )


def run(config: GeneratorConfig) -> GenerationResult:
    """Extract the schema under config.source_root and generate both artifacts."""
    schema = extract_schema(config)
    return generate(schema, config)
