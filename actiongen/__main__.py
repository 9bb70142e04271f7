"""Entry point: python -m actiongen

Reads the action declarations under the source root, generates the
TypeScript client bindings and the Python dispatch module.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .codegen import run
from .config import GeneratorConfig
from .errors import ActionGenError
from .naming import FIELD_CASES


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="Every option can also be set through its ACTIONGEN_* environment variable.",
)
@click.option(
    "--source-root", "source_root",
    type=click.Path(path_type=Path),
    help="Directory holding the action declarations. [env: ACTIONGEN_SOURCE_ROOT]",
)
@click.option(
    "--client-out", "client_out_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path of the generated TypeScript client. [env: ACTIONGEN_CLIENT_OUT]",
)
@click.option(
    "--server-out", "server_out_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Path of the generated Python dispatch module. [env: ACTIONGEN_SERVER_OUT]",
)
@click.option(
    "--endpoint",
    help="URL the client posts envelopes to. [env: ACTIONGEN_ENDPOINT]",
)
@click.option(
    "--package",
    help="Import path of the source root, used by the dispatch module. [env: ACTIONGEN_PACKAGE]",
)
@click.option(
    "--field-case", "field_case",
    type=click.Choice(FIELD_CASES),
    help="How record field names appear on the wire. [env: ACTIONGEN_FIELD_CASE]",
)
@click.option(
    "--marker",
    help="Token marking a function as an action. [env: ACTIONGEN_MARKER]",
)
@click.option("-v", "--verbose", count=True, help="Increase log output (-v, -vv).")
def main(
    source_root: Path | None,
    client_out_path: Path | None,
    server_out_path: Path | None,
    endpoint: str | None,
    package: str | None,
    field_case: str | None,
    marker: str | None,
    verbose: int,
) -> None:
    """Generate client bindings and server dispatch from @action declarations."""
    _setup_logging(verbose)
    try:
        config = GeneratorConfig.from_env().with_overrides(
            source_root=source_root,
            client_out_path=client_out_path,
            server_out_path=server_out_path,
            endpoint=endpoint,
            package=package,
            field_case=field_case,
            marker=marker,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        result = run(config)
    except ActionGenError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    count = len(result.schema.actions)
    click.echo(f"Generated {result.client_path} ({count} actions)")
    click.echo(f"Generated {result.server_path} ({count} actions)")


if __name__ == "__main__":
    main()
