from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from mimetable.config import Settings
from mimetable.errors import MimeTableError
from mimetable.logconfig import configure_logging
from mimetable.lookup import ArtifactCache, MimeTypeLookup, default_artifact_path, get_location
from mimetable.updater import regenerate, update

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _fail(exc: MimeTableError) -> typer.Exit:
    typer.echo(f"error: {exc.message}", err=True)
    return typer.Exit(code=1)


def _lookup(artifact: Path | None) -> MimeTypeLookup:
    return MimeTypeLookup(ArtifactCache(artifact))


@app.callback()
def main(ctx: typer.Context) -> None:
    """Maintain and query the MIME type <-> extension table."""
    settings = Settings()
    configure_logging(settings)
    ctx.obj = settings


@app.command("update")
def update_cmd(ctx: typer.Context) -> None:
    """Fetch the registry and regenerate the bundled artifact."""
    settings: Settings = ctx.obj
    try:
        path = asyncio.run(update(settings))
    except MimeTableError as exc:
        raise _fail(exc) from exc
    typer.echo(f"The MIME types database has been updated ({path}).")


@app.command("generate")
def generate_cmd(
    registry: Path = typer.Argument(..., help="Local mime.types registry file"),
    output: Path | None = typer.Option(None, help="Artifact path (default: bundled location)"),
    keep_source: bool = typer.Option(False, help="Do not delete the registry file afterwards"),
) -> None:
    """Regenerate the artifact from a local registry file."""
    artifact = output if output is not None else default_artifact_path()
    try:
        indexes = regenerate(registry, artifact, discard_source=not keep_source)
    except MimeTableError as exc:
        raise _fail(exc) from exc
    typer.echo(
        f"Wrote {artifact} ({len(indexes.mime_types)} MIME types, "
        f"{len(indexes.extensions)} extensions)."
    )


@app.command("types")
def types_cmd(
    extension: str,
    artifact: Path | None = typer.Option(None, help="Artifact to query"),
) -> None:
    """Print the MIME types registered for EXTENSION."""
    try:
        mime_types = _lookup(artifact).types_for_extension(extension, fallback=None)
    except MimeTableError as exc:
        raise _fail(exc) from exc
    if mime_types is None:
        typer.echo(f"unknown extension: {extension}", err=True)
        raise typer.Exit(code=1)
    for mime_type in mime_types:
        typer.echo(mime_type)


@app.command("extensions")
def extensions_cmd(
    mime_type: str,
    artifact: Path | None = typer.Option(None, help="Artifact to query"),
) -> None:
    """Print the extensions registered for MIME_TYPE."""
    try:
        extensions = _lookup(artifact).extensions_for_type(mime_type, fallback=None)
    except MimeTableError as exc:
        raise _fail(exc) from exc
    if extensions is None:
        typer.echo(f"unknown MIME type: {mime_type}", err=True)
        raise typer.Exit(code=1)
    for extension in extensions:
        typer.echo(extension)


@app.command("location")
def location_cmd(
    structured: bool = typer.Option(False, help="Print folder and filename separately"),
) -> None:
    """Print where the data files live (without suffix)."""
    if structured:
        location = get_location(structured=True)
        typer.echo(f"folder: {location.folder}")
        typer.echo(f"filename: {location.filename}")
    else:
        typer.echo(str(get_location()))
