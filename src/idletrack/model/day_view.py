# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from idletrack.model.entity_id import EntityId
from idletrack.model.task import Task
from idletrack.model.timeline import TimelineEntry


class DayView(TypedDict):
    date: str
    tasks: list[Task]
    timeline: list[TimelineEntry]
    total_tracked: int
    total_idle: int
    tags: list[str]
    tag_totals: dict[str, int]
    selected_tag: Optional[str]
    auto_idle_enabled: bool
    active_task_id: Optional[EntityId]
    now: int
