# SPDX-License-Identifier: MIT

from time import sleep
from typing import Annotated, Optional

import typer
from rich.console import Console, RenderableType
from rich.live import Live

from idletrack.repository.daily_tasks import DAILY_TASKS_REPO
from idletrack.service.day import get_day
from idletrack.service.session import TrackerSession
from idletrack.terminal.completion import complete_tag
from idletrack.terminal.session import open_session
from idletrack.terminal.task import DateOption
from idletrack.view.views.day import day_renderable, day_report, tags_report

TICK_SECONDS = 1

TagOption = Annotated[
    Optional[str],
    typer.Option(
        "--tag",
        "-t",
        help="only list tasks carrying this tag",
        autocompletion=complete_tag,
    ),
]


def show(
    date: DateOption = None,
    tag: TagOption = None,
) -> None:
    """
    show the tasks, timeline and totals of a day
    """
    session = open_session(date, read_only=True)
    day_view = session.select_tag_filter(tag)

    all_tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    day_report(day_view, all_tasks, "day")


def __watch_renderable(session: TrackerSession) -> RenderableType:
    day_view = session.view()
    all_tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    return day_renderable(day_view, all_tasks, "watch")


def watch(
    date: DateOption = None,
    tag: TagOption = None,
) -> None:
    """
    show a day and refresh running durations every second (ctrl-c to quit)
    """
    session = open_session(date, read_only=True)
    session.select_tag_filter(tag)

    console = Console()
    with Live(
        __watch_renderable(session),
        console=console,
        refresh_per_second=1,
        screen=False,
    ) as live:
        try:
            while True:
                sleep(TICK_SECONDS)
                # Re-read the file so changes from other commands show up
                DAILY_TASKS_REPO.reload()
                session.refresh()
                live.update(__watch_renderable(session))
        except KeyboardInterrupt:
            pass


def tags(
    date: DateOption = None,
) -> None:
    """
    show tracked time per tag for a day
    """
    session = open_session(date, read_only=True)
    tags_report(session.view())
