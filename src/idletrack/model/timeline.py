# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from idletrack.model.entity_id import EntityId


class TimelineEntry(TypedDict):
    task_id: EntityId
    task_name: str
    start: int
    end: int
    is_idle: bool
    exceeded: Optional[bool]
