# SPDX-License-Identifier: MIT

from typing import Optional

from idletrack.model.task import Task
from idletrack.service.duration import duration


def all_tags(tasks: list[Task]) -> list[str]:
    """Union of every task's tags, in the order they are first seen."""
    tags: dict[str, None] = {}
    for task in tasks:
        for tag in task["tags"]:
            tags.setdefault(tag, None)
    return list(tags)


def total_time_for_tag(tasks: list[Task], tag: str, now: int) -> int:
    # Plain sum per task; tasks sharing a tag are not merged against each other
    return sum(duration(task["intervals"], now) for task in tasks if tag in task["tags"])


def filter_by_tag(tasks: list[Task], tag: Optional[str]) -> list[Task]:
    if tag is None:
        return tasks
    return [task for task in tasks if tag in task["tags"]]


def tag_totals(tasks: list[Task], now: int) -> dict[str, int]:
    return {tag: total_time_for_tag(tasks, tag, now) for tag in all_tags(tasks)}
