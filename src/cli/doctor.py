"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.fcm_batch_import import batch_import_url
from adapters.http_client import build_async_client
from cli.ui_components import mask_secret
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Configuration diagnostics and setup.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run(
    network: bool = typer.Option(False, "--network", help="Also probe the provider host."),
) -> None:
    """Show the resolved configuration and what is missing."""

    settings = AppSettings()

    table = Table(title="FCM APNs Bridge Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.app_bundle_id:
        table.add_row("Bundle id", "OK", settings.app_bundle_id)
    else:
        mode = "strict -> calls fail" if settings.strict else "lenient -> calls return []"
        table.add_row("Bundle id", "MISSING", f"FCM_APP_BUNDLE_ID not set ({mode})")

    if settings.server_key:
        table.add_row("Server key", "OK", mask_secret(settings.server_key))
    else:
        table.add_row("Server key", "OPTIONAL", "Must be passed explicitly on every call")

    table.add_row("Endpoint", "OK", batch_import_url(settings.iid_url))
    table.add_row("Mode", "OK", "strict" if settings.strict else "lenient")
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    if network:
        ok_http, detail_http = asyncio.run(_check_http(settings.iid_url, settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    bundle_id = typer.prompt("App bundle id (e.g. com.example.app)").strip()
    server_key = typer.prompt("FCM server key", hide_input=True, confirmation_prompt=False).strip()

    if not bundle_id:
        raise typer.BadParameter("bundle id is required")

    env_path = write_user_env_vars(
        {
            "FCM_APP_BUNDLE_ID": bundle_id,
            "FCM_SERVER_KEY": server_key or None,
        }
    )

    _console.print(f"[green]Saved FCM config to:[/green] {env_path}")
