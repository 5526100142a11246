# SPDX-License-Identifier: MIT

from idletrack.model.day import DailyTasks
from idletrack.model.entity_id import IDLE_TASK_ID
from idletrack.model.task import Task
from idletrack.service.duration import duration


def total_tracked(tasks: list[Task], now: int) -> int:
    """
    Total time covered by any non-idle task, in ms.

    Intervals from all tasks are merged before summing, so time during which
    two tasks overlap (imported or hand-edited data) is only counted once.
    """
    spans = [
        (
            interval["start"],
            interval["end"] if interval["end"] is not None else now,
        )
        for task in tasks
        if task["id"] != IDLE_TASK_ID
        for interval in task["intervals"]
    ]
    spans.sort(key=lambda span: span[0])

    merged: list[list[int]] = []
    for start, end in spans:
        if len(merged) == 0 or start > merged[-1][1]:
            merged.append([start, end])
        else:
            merged[-1][1] = max(merged[-1][1], end)

    return sum(end - start for start, end in merged)


def total_idle(daily_tasks: DailyTasks, date: str, now: int) -> int:
    day = daily_tasks.get(date)
    if day is None or day["idle"] is None:
        return 0
    return duration(day["idle"]["intervals"], now)
