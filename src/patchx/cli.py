"""Command line interface for patchx."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from ._settings import settings
from .errors import JsonPatchError
from .jsonpatch import apply_patch
from .types import UNDEFINED
from .version import __version__

logger = logging.getLogger(__name__)


def _load(path: Path) -> Any:
    try:
        text = sys.stdin.read() if str(path) == "-" else path.read_text()
    except OSError as e:
        typer.secho(f"{path}: {e.strerror}", err=True, fg="red")
        raise typer.Exit(code=1)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        typer.secho(f"{path}: invalid JSON: {e}", err=True, fg="red")
        raise typer.Exit(code=1)


def _patch(document: Path, patch: Path) -> Any:
    try:
        return apply_patch(_load(document), _load(patch))
    except JsonPatchError as e:
        typer.secho(f"{e.kind}: {e}", err=True, fg="red")
        raise typer.Exit(code=1)


DocumentArgument = Annotated[
    Path, typer.Argument(help="The JSON document to patch, or - for stdin")
]
PatchArgument = Annotated[
    Path, typer.Argument(exists=True, help="The JSON Patch document to apply")
]

app = typer.Typer(help="Apply RFC 6902 JSON Patch documents")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--quiet", "-v/-q", help="Log every applied operation"),
    ] = False,
    version: Annotated[
        bool, typer.Option("--version", is_eager=True, help="Print the app version")
    ] = False,
):
    """Patchx Command Line Interface."""
    if version:
        typer.echo(f"patchx v{__version__}")
        raise typer.Exit()
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("apply")
def apply_command(
    document: DocumentArgument,
    patch: PatchArgument,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            writable=True,
            help="Write the patched document here instead of stdout",
        ),
    ] = None,
    indent: Annotated[
        int | None, typer.Option("--indent", help="Indentation of the output")
    ] = None,
):
    """Apply PATCH to DOCUMENT and print the result."""
    result = _patch(document, patch)
    # Removing the root leaves no document to print.
    text = (
        ""
        if result is UNDEFINED
        else json.dumps(
            result,
            indent=settings.indent if indent is None else indent,
            ensure_ascii=settings.ensure_ascii,
        )
    )
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text + "\n")
        logger.info("wrote patched document to %s", output)


@app.command("test")
def test_command(document: DocumentArgument, patch: PatchArgument):
    """Check that PATCH applies cleanly to DOCUMENT."""
    _patch(document, patch)
    typer.echo("ok")


if __name__ == "__main__":
    app()
