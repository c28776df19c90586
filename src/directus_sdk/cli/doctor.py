"""Doctor command for connectivity and configuration diagnostics."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import typer
from rich.console import Console

from directus_sdk.cli.ui_components import build_checks_table, build_server_panel, configure_logging, print_banner
from directus_sdk.client import DirectusClient
from directus_sdk.core.config import DirectusSettings, write_user_env_vars
from directus_sdk.core.domain.models import ServerInfo
from directus_sdk.core.exceptions import DirectusError

app = typer.Typer(no_args_is_help=True, help="Connectivity and configuration checks for a Directus instance.")

_console = Console()


@dataclass
class DoctorReport:
    """Result rows (check, status, details) plus the server info, if any."""

    rows: list[tuple[str, str, str]] = field(default_factory=list)
    server_info: ServerInfo | None = None

    @property
    def ok(self) -> bool:
        return all(status != "FAIL" for _, status, _ in self.rows)


async def collect_report(client: DirectusClient) -> DoctorReport:
    report = DoctorReport()
    settings = client.settings

    report.rows.append(("Base URL", "OK", client.base_url))

    healthy = await client.utils.health_check()
    report.rows.append(("Health", "OK" if healthy else "FAIL", "/server/health"))

    try:
        report.server_info = await client.utils.get_server_info()
        name = report.server_info.project.project_name if report.server_info.project else None
        report.rows.append(("Server info", "OK", name or "N/A"))
    except DirectusError as exc:
        report.rows.append(("Server info", "FAIL", exc.message))

    if await client.auth.is_authenticated():
        try:
            me = await client.users.get_me()
            report.rows.append(("Static token", "OK", (me.email if me else None) or "token accepted"))
        except DirectusError as exc:
            report.rows.append(("Static token", "FAIL", exc.message))
    else:
        report.rows.append(("Static token", "OPTIONAL", "No token set -> public access only"))

    if settings.email and settings.password:
        try:
            await client.auth.login(settings.email, settings.password)
            await client.auth.logout()
            report.rows.append(("Login", "OK", settings.email))
        except DirectusError as exc:
            report.rows.append(("Login", "FAIL", exc.message))
    else:
        report.rows.append(("Login", "SKIPPED", "Set DIRECTUS_EMAIL and DIRECTUS_PASSWORD to test"))

    return report


async def _run(settings: DirectusSettings, url: str | None) -> DoctorReport:
    async with DirectusClient(url, settings=settings) as client:
        return await collect_report(client)


@app.command()
def run(
    url: str | None = typer.Option(None, "--url", help="Directus base URL (defaults to DIRECTUS_URL)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show SDK debug logs."),
) -> None:
    """Run baseline diagnostics against the configured instance."""

    configure_logging(_console, verbose=verbose)
    settings = DirectusSettings()
    print_banner(_console, (url or settings.url).rstrip("/"))

    report = asyncio.run(_run(settings, url))

    table = build_checks_table()
    for check, status, details in report.rows:
        table.add_row(check, status, details)
    _console.print(table)

    if report.server_info is not None:
        _console.print(build_server_panel(report.server_info))

    if not report.ok:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    url = typer.prompt("Directus URL", default=DirectusSettings().url, show_default=True).strip()
    token = typer.prompt(
        "Static token (leave empty to skip)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    if not url.startswith(("http://", "https://")):
        raise typer.BadParameter("URL must start with http:// or https://")

    env_path = write_user_env_vars(
        {
            "DIRECTUS_URL": url.rstrip("/"),
            "DIRECTUS_STATIC_TOKEN": token or None,
        }
    )

    _console.print(f"[green]Saved Directus config to:[/green] {env_path}")
