# SPDX-License-Identifier: MIT

from typing import Optional

from idletrack.model.entity_id import IDLE_TASK_ID
from idletrack.model.interval import Interval
from idletrack.model.task import Task

MS_PER_MINUTE = 60_000


def duration(intervals: list[Interval], now: int) -> int:
    """Sum of interval lengths in ms. Open intervals are charged up to ``now``."""
    return sum(
        (interval["end"] if interval["end"] is not None else now) - interval["start"]
        for interval in intervals
    )


def is_active(task: Task) -> bool:
    if len(task["intervals"]) == 0:
        return False
    return task["intervals"][-1]["end"] is None


def exceeded(task: Task, now: int) -> Optional[bool]:
    """Whether tracked time has passed the estimate. None for the idle task."""
    if task["id"] == IDLE_TASK_ID:
        return None
    return duration(task["intervals"], now) / MS_PER_MINUTE > task["estimated_minutes"]


def get_active_task(tasks: list[Task]) -> Optional[Task]:
    for task in tasks:
        if is_active(task):
            return task
    return None
