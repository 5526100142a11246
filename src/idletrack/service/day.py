# SPDX-License-Identifier: MIT

import math
from copy import deepcopy
from typing import Any, Optional

from idletrack.model.day import DailyTasks, Day
from idletrack.model.entity_id import IDLE_TASK_ID, EntityId
from idletrack.model.task import Task
from idletrack.template.day import get_day_template
from idletrack.template.task import get_idle_task_template, get_task_template


class TaskValidationError(Exception):
    """Raised when a task name or estimate is not acceptable."""

    pass


def validate_task_input(name: Any, estimated_minutes: Any) -> tuple[str, float]:
    """
    Check add/edit input and return the cleaned (name, estimated_minutes).

    The name must be a non-blank string and the estimate a positive finite
    number.
    """
    if not isinstance(name, str) or name.strip() == "":
        raise TaskValidationError("Task name cannot be empty")
    if isinstance(estimated_minutes, bool) or not isinstance(
        estimated_minutes, (int, float)
    ):
        raise TaskValidationError("Estimated minutes must be a number")
    if not math.isfinite(estimated_minutes) or estimated_minutes <= 0:
        raise TaskValidationError("Estimated minutes must be greater than 0")
    return name.strip(), estimated_minutes


def get_day(daily_tasks: DailyTasks, date: str) -> Day:
    day = daily_tasks.get(date)
    if day is None:
        return get_day_template()
    return day


def ensure_idle_task(daily_tasks: DailyTasks, date: str) -> DailyTasks:
    """Return a record whose ``date`` has an idle task, adding one if needed."""
    day = daily_tasks.get(date)
    if day is not None and day["idle"] is not None:
        return daily_tasks

    new_day = deepcopy(day) if day is not None else get_day_template()
    new_day["idle"] = get_idle_task_template()
    return {**daily_tasks, date: new_day}


def replace_day(daily_tasks: DailyTasks, date: str, day: Day) -> DailyTasks:
    return {**daily_tasks, date: day}


def find_task(day: Day, task_id: EntityId) -> Optional[Task]:
    for task in day["tasks"]:
        if task["id"] == task_id:
            return task
    return None


def add_task(
    daily_tasks: DailyTasks,
    date: str,
    name: str,
    estimated_minutes: float,
    tags: Optional[list[str]] = None,
) -> tuple[DailyTasks, Task]:
    clean_name, clean_estimate = validate_task_input(name, estimated_minutes)

    task = get_task_template()
    task["name"] = clean_name
    task["estimated_minutes"] = clean_estimate
    # Deduplicate tags
    task["tags"] = list(dict.fromkeys(tags)) if tags is not None else []

    new_day = deepcopy(get_day(daily_tasks, date))
    new_day["tasks"].append(task)
    return replace_day(daily_tasks, date, new_day), deepcopy(task)


def edit_task(
    daily_tasks: DailyTasks,
    date: str,
    task_id: EntityId,
    name: str,
    estimated_minutes: float,
    tags: Optional[list[str]] = None,
) -> DailyTasks:
    """Replace name, estimate and tags of a task. Intervals are kept as they are."""
    clean_name, clean_estimate = validate_task_input(name, estimated_minutes)

    day = daily_tasks.get(date)
    if day is None or find_task(day, task_id) is None:
        return daily_tasks

    new_day = deepcopy(day)
    for task in new_day["tasks"]:
        if task["id"] == task_id:
            task["name"] = clean_name
            task["estimated_minutes"] = clean_estimate
            task["tags"] = list(dict.fromkeys(tags)) if tags is not None else []
    return replace_day(daily_tasks, date, new_day)


def delete_task(daily_tasks: DailyTasks, date: str, task_id: EntityId) -> DailyTasks:
    """
    Remove a task from a day.

    A running task disappears together with its open interval; the idle task
    is not touched, so no idle time is started on its behalf.
    """
    day = daily_tasks.get(date)
    if day is None or task_id == IDLE_TASK_ID or find_task(day, task_id) is None:
        return daily_tasks

    new_day = deepcopy(day)
    new_day["tasks"] = [task for task in new_day["tasks"] if task["id"] != task_id]
    return replace_day(daily_tasks, date, new_day)


def clear_day(daily_tasks: DailyTasks, date: str) -> DailyTasks:
    """Empty a day, idle task included. Idle comes back on the next access."""
    return replace_day(daily_tasks, date, get_day_template())
