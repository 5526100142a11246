# SPDX-License-Identifier: MIT

from typing import TypedDict

from idletrack.model.entity_id import EntityId
from idletrack.model.interval import Interval


class Task(TypedDict):
    id: EntityId
    name: str
    intervals: list[Interval]
    estimated_minutes: float
    tags: list[str]
