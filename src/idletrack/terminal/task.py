# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from idletrack.service.day import get_day
from idletrack.terminal.completion import complete_tag
from idletrack.terminal.parse import parse_date
from idletrack.terminal.session import (
    exit_on_rejection,
    open_session,
    resolve_task_number,
    store_session,
)
from idletrack.view.views.day import day_report

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"

DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
]


def add(
    name: str,
    estimate: Annotated[
        float,
        typer.Option("--estimate", "-e", help="estimated minutes, greater than 0"),
    ],
    tags: Annotated[
        Optional[list[str]],
        typer.Option(
            "--tag",
            "-t",
            help="accepts multiple tag options",
            autocompletion=complete_tag,
        ),
    ] = None,
    date: DateOption = None,
) -> None:
    """
    add a task to a day
    """
    session = open_session(date)
    day_view = session.add_task(name, estimate, tags)
    store_session()
    exit_on_rejection(session)

    all_tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    day_report(day_view, all_tasks, "add task")


def toggle(
    number: int,
    date: DateOption = None,
) -> None:
    """
    start or stop tracking a task; starting one stops any other
    """
    session = open_session(date)
    task_id = resolve_task_number(session, number)
    day_view = session.toggle_task(task_id)
    store_session()

    all_tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    day_report(day_view, all_tasks, "toggle task")


def edit(
    number: int,
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    estimate: Annotated[
        Optional[float],
        typer.Option("--estimate", "-e", help="estimated minutes, greater than 0"),
    ] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option(
            "--tag",
            "-t",
            help="replaces the tags; accepts multiple tag options",
            autocompletion=complete_tag,
        ),
    ] = None,
    remove_tags: Annotated[bool, typer.Option("--remove-tags", "-rts")] = False,
    date: DateOption = None,
) -> None:
    """
    edit the name, estimate or tags of a task
    """
    session = open_session(date)
    task_id = resolve_task_number(session, number)
    task = [
        task
        for task in get_day(session.daily_tasks, session.selected_date)["tasks"]
        if task["id"] == task_id
    ][0]

    updated_tags = task["tags"]
    if tags is not None:
        updated_tags = tags
    if remove_tags:
        updated_tags = []

    day_view = session.edit_task(
        task_id,
        name if name is not None else task["name"],
        estimate if estimate is not None else task["estimated_minutes"],
        updated_tags,
    )
    store_session()
    exit_on_rejection(session)

    all_tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    day_report(day_view, all_tasks, "edit task")


def delete(
    number: int,
    date: DateOption = None,
) -> None:
    """
    delete a task and its tracked time
    """
    session = open_session(date)
    task_id = resolve_task_number(session, number)
    day_view = session.delete_task(task_id)
    store_session()

    all_tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    day_report(day_view, all_tasks, "delete task")


def clear(
    date: DateOption = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """
    remove every task from a day
    """
    session = open_session(date)
    if not yes:
        typer.confirm(f"Remove all tasks on {session.selected_date}?", abort=True)
    day_view = session.clear_day()
    store_session()

    day_report(day_view, [], "clear day")
