"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import RestaurantResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("forkfinder", style="bold cyan")
    subtitle = Text("Lenguaje natural • Foursquare Places", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_results_table(results: list[RestaurantResult], *, title: str = "Restaurants") -> Table:
    table = Table(title=f"{title} ({len(results)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Cuisine", style="green")
    table.add_column("Address", style="white")
    table.add_column("FSQ id", style="magenta", no_wrap=True)
    for idx, r in enumerate(results, start=1):
        table.add_row(str(idx), r.name, r.cuisine, r.address or "-", r.fsq_place_id)
    return table


def build_error_panel(exc: Exception) -> Panel:
    body = Text(str(exc) or type(exc).__name__)
    return Panel(body, title=Text(type(exc).__name__, style="bold red"), border_style="red")
