# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy

from idletrack.model.day import Day
from idletrack.model.entity_id import EntityId
from idletrack.model.task import Task
from idletrack.service.duration import is_active
from idletrack.template.task import get_idle_task_template

logger = logging.getLogger(__name__)


def __close_last_interval(task: Task, now: int) -> None:
    task["intervals"][-1]["end"] = now


def toggle(
    day: Day, target_task_id: EntityId, now: int, auto_idle_enabled: bool
) -> Day:
    """
    Start or stop a task and return the resulting day.

    Every running task is stopped at ``now``. If the target was not one of
    them it gets a new open interval, so starting a task always stops the
    previous one. Afterwards the idle task is closed when real work started,
    or opened when auto idle tracking is on and nothing is running anymore.

    The input day is left untouched. An unknown ``target_task_id`` only
    stops whatever was running.
    """
    new_day = deepcopy(day)
    if new_day["idle"] is None:
        new_day["idle"] = get_idle_task_template()
    idle = new_day["idle"]

    idle_was_running = is_active(idle)
    toggled_active = False

    for task in new_day["tasks"]:
        if is_active(task):
            __close_last_interval(task, now)
            logger.debug("stopped task %s at %d", task["id"], now)
        elif task["id"] == target_task_id:
            task["intervals"].append({"start": now, "end": None})
            toggled_active = True
            logger.debug("started task %s at %d", task["id"], now)

    if idle_was_running and toggled_active:
        __close_last_interval(idle, now)
        logger.debug("closed idle at %d", now)
    elif (
        not idle_was_running
        and not toggled_active
        and auto_idle_enabled
        and not any(is_active(task) for task in new_day["tasks"])
    ):
        idle["intervals"].append({"start": now, "end": None})
        logger.debug("opened idle at %d", now)

    return new_day
