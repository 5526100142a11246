# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import typer
from rich.console import Console

from idletrack.model.day import DailyTasks
from idletrack.model.entity_id import EntityId
from idletrack.repository.configuration import CONFIGURATION_REPO
from idletrack.repository.daily_tasks import DAILY_TASKS_REPO
from idletrack.service.day import get_day
from idletrack.service.session import TrackerSession
from idletrack.terminal.parse import resolve_date

logger = logging.getLogger(__name__)

console = Console(stderr=True)


class ReadOnlyGateway:
    """Reads the stored record but keeps every change in memory."""

    def load(self) -> DailyTasks:
        return DAILY_TASKS_REPO.load()

    def save(self, daily_tasks: DailyTasks) -> None:
        logger.debug("not storing changes made by a read-only command")


def open_session(date: Optional[str], read_only: bool = False) -> TrackerSession:
    config = CONFIGURATION_REPO.get_config()
    session = TrackerSession(
        ReadOnlyGateway() if read_only else DAILY_TASKS_REPO,
        date=resolve_date(date),
        auto_idle_enabled=config["auto_idle_enabled"],
    )
    if DAILY_TASKS_REPO.load_error is not None:
        console.print(f"[yellow]warning:[/yellow] {DAILY_TASKS_REPO.load_error}")
    return session


def store_session() -> None:
    """Write the record now instead of waiting for exit."""
    if DAILY_TASKS_REPO.is_dirty and not DAILY_TASKS_REPO.flush():
        console.print(
            "[red]error:[/red] the change could not be stored; see the log above"
        )
        raise typer.Exit(code=1)


def resolve_task_number(session: TrackerSession, number: int) -> EntityId:
    """Map a 1-based row number from the day listing to a task id."""
    tasks = get_day(session.daily_tasks, session.selected_date)["tasks"]
    if number < 1 or number > len(tasks):
        raise typer.BadParameter(
            f"no task #{number} on {session.selected_date}"
            f" (there are {len(tasks)})"
        )
    return tasks[number - 1]["id"]


def exit_on_rejection(session: TrackerSession) -> None:
    if session.last_error is not None:
        raise typer.BadParameter(session.last_error)
