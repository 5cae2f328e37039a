"""CLI (Typer): registra tokens APNs en FCM desde la terminal.

Comandos:
- `register`: llama a `batchImport` y muestra el resultado (tabla o JSON).
- `doctor run` / `doctor setup`: diagnóstico y configuración.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor
from cli.ui_components import build_results_table, print_banner
from core.config import AppSettings
from core.domain.errors import FCMError
from core.domain.models import FCMConfiguration
from core.services.token_registration import APNSTokenRegistrar

app = typer.Typer(no_args_is_help=True, help="Register APNs device tokens in Firebase Cloud Messaging.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def read_tokens_file(path: Path) -> list[str]:
    """Un token por línea; ignora líneas vacías y comentarios (#)."""

    tokens: list[str] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line and not line.startswith("#"):
            tokens.append(line)
    return tokens


def build_registrar(settings: AppSettings, *, bundle_id: Optional[str], strict: bool) -> APNSTokenRegistrar:
    configuration = FCMConfiguration.from_settings(settings)
    if configuration is None and bundle_id:
        configuration = FCMConfiguration(
            app_bundle_id=bundle_id,
            server_key=settings.server_key or None,
            sandbox=settings.sandbox,
        )
    return APNSTokenRegistrar(settings, configuration=configuration, strict=strict)


@app.command()
def register(
    tokens: Optional[List[str]] = typer.Argument(None, help="APNs device tokens."),
    tokens_file: Optional[Path] = typer.Option(
        None,
        "--tokens-file",
        "-f",
        exists=True,
        dir_okay=False,
        help="File with one APNs token per line.",
    ),
    bundle_id: Optional[str] = typer.Option(None, "--bundle-id", "-b", help="iOS app bundle id."),
    server_key: Optional[str] = typer.Option(None, "--server-key", help="FCM server key."),
    sandbox: bool = typer.Option(False, "--sandbox", help="Tokens come from the APNs sandbox."),
    batches: bool = typer.Option(False, "--batches", help="Split more than 100 tokens into several calls."),
    lenient: bool = typer.Option(False, "--lenient", help="Return no results instead of failing when FCM is not configured."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Register APNs tokens and print the FCM registration tokens."""

    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)

    all_tokens = list(tokens or [])
    if tokens_file is not None:
        all_tokens.extend(read_tokens_file(tokens_file))

    strict = settings.strict and not lenient
    registrar = build_registrar(settings, bundle_id=bundle_id, strict=strict)
    call = registrar.register_in_batches if batches else registrar.register_tokens

    try:
        results = asyncio.run(call(bundle_id, all_tokens, server_key=server_key, sandbox=sandbox))
    except FCMError as exc:
        _err_console.print(f"[red]Error:[/red] {exc.reason}")
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        _err_console.print(f"[red]Transport error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return

    print_banner(_console)
    _console.print(build_results_table(results))
    registered = sum(1 for r in results if r.is_registered)
    _console.print(f"{registered}/{len(results)} registered")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
