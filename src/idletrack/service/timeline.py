# SPDX-License-Identifier: MIT

from idletrack.model.day import DailyTasks
from idletrack.model.task import Task
from idletrack.model.timeline import TimelineEntry
from idletrack.service.duration import exceeded


def __task_entries(task: Task, now: int, is_idle: bool) -> list[TimelineEntry]:
    # Flag is computed once from the whole task, not per interval
    task_exceeded = None if is_idle else exceeded(task, now)
    return [
        {
            "task_id": task["id"],
            "task_name": task["name"],
            "start": interval["start"],
            "end": interval["end"] if interval["end"] is not None else now,
            "is_idle": is_idle,
            "exceeded": task_exceeded,
        }
        for interval in task["intervals"]
    ]


def timeline(daily_tasks: DailyTasks, date: str, now: int) -> list[TimelineEntry]:
    """
    Build the chronological activity log for a day.

    One entry per interval across every task of the day, idle included.
    Entries are ordered by start, then end, then task id so that equal
    start times always come out in the same order.
    """
    day = daily_tasks.get(date)
    if day is None:
        return []

    entries: list[TimelineEntry] = []
    for task in day["tasks"]:
        entries.extend(__task_entries(task, now, is_idle=False))
    if day["idle"] is not None:
        entries.extend(__task_entries(day["idle"], now, is_idle=True))

    entries.sort(key=lambda entry: (entry["start"], entry["end"], entry["task_id"]))
    return entries
