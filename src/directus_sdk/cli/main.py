"""Entry point de la CLI (`directus-sdk`)."""

from __future__ import annotations

import typer

from directus_sdk.cli import doctor

app = typer.Typer(no_args_is_help=True, help="Directus SDK command-line tools.")
app.add_typer(doctor.app, name="doctor")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
