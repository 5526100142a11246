# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias, TypedDict

from idletrack.model.task import Task


class Day(TypedDict):
    # idle is None until the day is first accessed through the session
    tasks: list[Task]
    idle: Optional[Task]


# Keyed by local calendar date, "YYYY-MM-DD"
DailyTasks: TypeAlias = dict[str, Day]
