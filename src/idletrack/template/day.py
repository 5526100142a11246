# SPDX-License-Identifier: MIT

from idletrack.model.day import Day


def get_day_template() -> Day:
    return {
        "tasks": [],
        "idle": None,
    }
