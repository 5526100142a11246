# SPDX-License-Identifier: MIT

from idletrack.model.entity_id import IDLE_TASK_ID, generate_entity_id
from idletrack.model.task import Task


def get_task_template() -> Task:
    return {
        "id": generate_entity_id(),
        "name": "",
        "intervals": [],
        "estimated_minutes": 0,
        "tags": [],
    }


def get_idle_task_template() -> Task:
    return {
        "id": IDLE_TASK_ID,
        "name": "Idle",
        "intervals": [],
        "estimated_minutes": 0,
        "tags": [],
    }
