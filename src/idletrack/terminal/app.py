# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from idletrack.terminal import configuration, task, view
from idletrack.terminal.custom_typer import OrderedAliasedTyperGroup
from idletrack.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="idletrack - daily task time tracking with automatic idle time",
    no_args_is_help=True,
)
app.command(name="add, a", no_args_is_help=True)(task.add)
app.command(name="toggle, t", no_args_is_help=True)(task.toggle)
app.command(name="edit, e", no_args_is_help=True)(task.edit)
app.command(name="delete, d", no_args_is_help=True)(task.delete)
app.command(name="clear")(task.clear)
app.command(name="show, s")(view.show)
app.command(name="watch, w")(view.watch)
app.command(name="tags, tg")(view.tags)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    idletrack - daily task time tracking with automatic idle time

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
