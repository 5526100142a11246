# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

EntityId: TypeAlias = str

IDLE_TASK_ID: EntityId = "__idle__"


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())
