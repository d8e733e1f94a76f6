"""Typer CLI entrypoint for formsmith."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from apps.cli.io import dump_json, load_input_values, write_markup_atomic
from formsmith.forms.definition import build_form, load_form_definition
from formsmith.forms.report import ValidationReport
from formsmith.templates.loader import load_registry
from formsmith.templates.registry import FIELD_KINDS, TemplateRegistry
from formsmith.utils.errors import ConfigurationError, ValidationFailure

app = typer.Typer(help="Form rendering and validation CLI", rich_markup_mode=None)

EXIT_VALIDATION_FAILED = 2
EXIT_CONFIGURATION_ERROR = 3


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep subcommands explicit."""


@app.command("render")
def render_command(
    form: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    templates: Annotated[
        Path | None,
        typer.Option(help="Template YAML; defaults to the bundled Bootstrap formats."),
    ] = None,
    plain: Annotated[
        bool, typer.Option("--plain", help="Use compiled-in field formats only.")
    ] = False,
    element: Annotated[str | None, typer.Option(help="Render a single field by name.")] = None,
    out: Annotated[Path | None, typer.Option(help="Write markup to a file.")] = None,
) -> None:
    """Render a form definition to HTML."""

    try:
        registry = None if plain else load_registry(templates)
        builder = build_form(load_form_definition(form), registry=registry)
        markup = builder.element(element) if element else builder.render()
    except ConfigurationError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_CONFIGURATION_ERROR) from exc

    if out is None:
        typer.echo(markup)
        return

    write_markup_atomic(out, markup)
    typer.echo(f"INFO: wrote {out}")


@app.command("validate")
def validate_command(
    form: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    input: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
) -> None:
    """Validate submitted values against the rules of a form definition."""

    try:
        builder = build_form(load_form_definition(form))
        values = load_input_values(input)
        builder.validate(values)
    except ConfigurationError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_CONFIGURATION_ERROR) from exc
    except ValidationFailure as exc:
        typer.echo(dump_json(ValidationReport.from_failure(exc).model_dump(mode="json")))
        raise typer.Exit(code=EXIT_VALIDATION_FAILED) from exc

    typer.echo(dump_json(ValidationReport.success().model_dump(mode="json")))


@app.command("templates")
def templates_command(
    templates: Annotated[Path | None, typer.Option()] = None,
) -> None:
    """List the field formats available in a template file."""

    try:
        registry = load_registry(templates)
    except ConfigurationError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=EXIT_CONFIGURATION_ERROR) from exc

    typer.echo(dump_json(_registry_summary(registry)))


@app.command("serve")
def serve_command(
    host: Annotated[str, typer.Option()] = "127.0.0.1",
    port: Annotated[int, typer.Option()] = 8000,
) -> None:
    """Serve the example form over HTTP."""

    import uvicorn

    uvicorn.run("apps.api.main:app", host=host, port=port)


def _registry_summary(registry: TemplateRegistry) -> dict[str, object]:
    summary: dict[str, object] = {"input": registry.input_variants()}
    for kind in FIELD_KINDS:
        if kind != "input":
            summary[kind] = registry.resolve(kind) is not None
    return summary


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
