# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from idletrack import configuration
from idletrack.repository.configuration import (
    CONFIGURATION_REPO,
)
from idletrack.terminal.custom_typer import AliasedTyperGroup

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "auto_idle_enabled",
        "✓ Enabled" if config["auto_idle_enabled"] else "✗ Disabled",
    )
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("log_level", config["log_level"])
    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s")
def set(
    auto_idle: Annotated[
        Optional[bool],
        typer.Option(
            "--auto-idle/--no-auto-idle",
            help="track idle time automatically when nothing is running",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="directory holding daily_tasks.yaml"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="go back to the default data path"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=", ".join(LOG_LEVELS)),
    ] = None,
) -> None:
    """Update configuration settings."""
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"log level must be one of {', '.join(LOG_LEVELS)}")

    CONFIGURATION_REPO.update_config(
        auto_idle_enabled=auto_idle,
        show_header=show_header,
        data_path=data_path,
        remove_data_path=remove_data_path,
        log_level=log_level,
    )
    logger.debug("configuration updated")

    view()
