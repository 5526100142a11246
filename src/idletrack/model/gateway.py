# SPDX-License-Identifier: MIT

from typing import Protocol

from idletrack.model.day import DailyTasks


class PersistenceGateway(Protocol):
    def load(self) -> DailyTasks: ...

    def save(self, daily_tasks: DailyTasks) -> None: ...
