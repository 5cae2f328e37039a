"""Componentes de UI para CLI (Rich): banner y tablas de resultados."""

from __future__ import annotations

from collections.abc import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import TokenMappingResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("FCM APNs Bridge", style="bold cyan")
    subtitle = Text("APNs tokens • Firebase batchImport", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def mask_secret(value: str | None, *, visible: int = 4) -> str:
    if not value:
        return "-"
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


def build_results_table(results: Iterable[TokenMappingResult]) -> Table:
    """Tabla Rich con un resultado por token."""

    table = Table(title="APNs -> FCM")
    table.add_column("APNs token", style="cyan", no_wrap=True)
    table.add_column("FCM token", style="magenta")
    table.add_column("Registered", style="green")
    for result in results:
        registered = "yes" if result.is_registered else "[red]no[/red]"
        table.add_row(result.native_token, result.provider_token, registered)
    return table
