"""CLI entrypoint (Typer)."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import httpx
import typer
from openai import OpenAIError
from pydantic import ValidationError
from rich.console import Console

from adapters.json_exporter import export_search_json
from cli import doctor
from cli.ui_components import build_error_panel, build_results_table, print_banner
from core.config import AppSettings
from core.domain.errors import SearchPipelineError
from core.logging_setup import configure_logging
from core.services.search_orchestrator import build_search_orchestrator

app = typer.Typer(no_args_is_help=True, help="Natural-language restaurant search over Foursquare Places.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def search(
    message: str = typer.Argument(..., help='Free-text request, e.g. "cheap sushi in Lisbon open now".'),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the JSON result to this file."),
) -> None:
    """Translate MESSAGE into a search command and run it."""

    settings = AppSettings()
    configure_logging(settings)
    orchestrator = build_search_orchestrator(settings)

    try:
        result = asyncio.run(orchestrator.execute(message))
    except (SearchPipelineError, httpx.HTTPError, OpenAIError, ValidationError, json.JSONDecodeError) as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    if output is not None:
        export_search_json(result=result, output_path=output)

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return

    print_banner(_console)
    _console.print(build_results_table(result.response))
    if output is not None:
        _console.print(f"[green]Saved:[/green] {output}")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to FORKFINDER_HOST)."),
    port: int | None = typer.Option(None, help="Port (defaults to FORKFINDER_PORT)."),
    reload: bool = typer.Option(False, help="Auto-reload on code changes (development)."),
) -> None:
    """Run the HTTP API with uvicorn."""

    import uvicorn  # noqa: PLC0415

    settings = AppSettings()
    configure_logging(settings)
    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
