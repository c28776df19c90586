"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles y el handler de logging en varios comandos.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from directus_sdk.core.domain.models import ServerInfo


def configure_logging(console: Console, *, verbose: bool = False) -> None:
    """Enruta el logging del SDK a Rich (el SDK en sí no instala handlers)."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def print_banner(console: Console, base_url: str) -> None:
    title = Text("directus-sdk", style="bold cyan")
    subtitle = Text(base_url, style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_checks_table(title: str = "Directus Doctor") -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def build_server_panel(info: ServerInfo) -> Panel:
    """Panel con el bloque `project` de `/server/info`."""

    project = info.project
    body = Text()
    if project is None:
        body.append("No project information exposed by the server.", style="dim")
    else:
        body.append(f"Name: {project.project_name or 'N/A'}\n")
        if project.project_descriptor:
            body.append(f"Descriptor: {project.project_descriptor}\n")
        if project.project_color:
            body.append(f"Color: {project.project_color}\n")
        registration = "enabled" if project.public_registration else "disabled"
        body.append(f"Public registration: {registration}")
    return Panel(body, title=Text("Server", style="bold yellow"), border_style="yellow")
