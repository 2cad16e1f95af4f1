"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="forkfinder Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("AI key", "OK" if settings.ai_api_key else "MISSING", "FORKFINDER_AI_API_KEY")
    table.add_row("AI base_url", "OK", settings.ai_base_url)
    table.add_row("AI model", "OK", settings.ai_model)
    table.add_row("Foursquare key", "OK" if settings.fsq_api_key else "MISSING", "FORKFINDER_FSQ_API_KEY")
    table.add_row("Foursquare base_url", "OK", settings.fsq_places_base_url)
    table.add_row(
        "Access code",
        "OK" if settings.endpoint_secret_code else "MISSING",
        "Without it /api/v1/execute rejects every request",
    )

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings, settings.fsq_places_base_url))
    table.add_row("Foursquare connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores keys in the user config .env)."""

    ai_key = typer.prompt("OpenAI API key", hide_input=True, default="", show_default=False).strip()
    model = typer.prompt("AI model", default="gpt-4o-mini", show_default=True).strip()
    fsq_key = typer.prompt("Foursquare API key", hide_input=True, default="", show_default=False).strip()
    code = typer.prompt("Endpoint access code", hide_input=True, default="", show_default=False).strip()

    if not model:
        raise typer.BadParameter("model is required")

    env_path = write_user_env_vars(
        {
            "FORKFINDER_AI_API_KEY": ai_key,
            "FORKFINDER_AI_MODEL": model,
            "FORKFINDER_FSQ_API_KEY": fsq_key,
            "FORKFINDER_ENDPOINT_SECRET_CODE": code,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
