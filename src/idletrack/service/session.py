# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

from idletrack.model.day import DailyTasks
from idletrack.model.day_view import DayView
from idletrack.model.entity_id import IDLE_TASK_ID, EntityId
from idletrack.model.gateway import PersistenceGateway
from idletrack.service import day as day_service
from idletrack.service.duration import get_active_task
from idletrack.service.tag import all_tags, filter_by_tag, tag_totals
from idletrack.service.timeline import timeline
from idletrack.service.toggle import toggle
from idletrack.service.total import total_idle, total_tracked
from idletrack.time import now_ms, today_date_key

logger = logging.getLogger(__name__)


class TrackerSession:
    """
    In-memory owner of the daily record and the user's current selections.

    Every command runs to completion, swaps in a new record value and hands
    it to the gateway, then returns the freshly derived view of the selected
    day. Rejected input leaves the record untouched and sets ``last_error``.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        date: Optional[str] = None,
        auto_idle_enabled: bool = True,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self.daily_tasks: DailyTasks = gateway.load()
        self.selected_date = date if date is not None else today_date_key()
        self.auto_idle_enabled = auto_idle_enabled
        self.selected_tag: Optional[str] = None
        self.last_error: Optional[str] = None
        self.__commit(day_service.ensure_idle_task(self.daily_tasks, self.selected_date))

    def __commit(self, daily_tasks: DailyTasks) -> None:
        if daily_tasks is self.daily_tasks:
            return
        self.daily_tasks = daily_tasks
        if len(daily_tasks) > 0:
            self._gateway.save(daily_tasks)

    def __reject(self, message: str) -> DayView:
        logger.debug("rejected command: %s", message)
        self.last_error = message
        return self.view()

    def view(self, now: Optional[int] = None) -> DayView:
        now = now if now is not None else self._clock()
        day = day_service.get_day(self.daily_tasks, self.selected_date)
        active_task = get_active_task(day["tasks"])
        return {
            "date": self.selected_date,
            "tasks": filter_by_tag(day["tasks"], self.selected_tag),
            "timeline": timeline(self.daily_tasks, self.selected_date, now),
            "total_tracked": total_tracked(day["tasks"], now),
            "total_idle": total_idle(self.daily_tasks, self.selected_date, now),
            "tags": all_tags(day["tasks"]),
            "tag_totals": tag_totals(day["tasks"], now),
            "selected_tag": self.selected_tag,
            "auto_idle_enabled": self.auto_idle_enabled,
            "active_task_id": active_task["id"] if active_task is not None else None,
            "now": now,
        }

    def refresh(self) -> DayView:
        """Pick up the record the gateway holds now, without storing anything."""
        self.daily_tasks = day_service.ensure_idle_task(
            self._gateway.load(), self.selected_date
        )
        return self.view()

    def select_date(self, date: str) -> DayView:
        self.last_error = None
        self.selected_date = date
        self.__commit(day_service.ensure_idle_task(self.daily_tasks, date))
        return self.view()

    def add_task(
        self, name: str, estimated_minutes: float, tags: Optional[list[str]] = None
    ) -> DayView:
        self.last_error = None
        try:
            daily_tasks, task = day_service.add_task(
                self.daily_tasks, self.selected_date, name, estimated_minutes, tags
            )
        except day_service.TaskValidationError as e:
            return self.__reject(str(e))
        logger.debug("added task %s on %s", task["id"], self.selected_date)
        self.__commit(daily_tasks)
        return self.view()

    def toggle_task(self, task_id: EntityId) -> DayView:
        self.last_error = None
        if task_id == IDLE_TASK_ID:
            return self.__reject("The idle task cannot be toggled directly")

        daily_tasks = day_service.ensure_idle_task(self.daily_tasks, self.selected_date)
        new_day = toggle(
            daily_tasks[self.selected_date],
            task_id,
            self._clock(),
            self.auto_idle_enabled,
        )
        self.__commit(day_service.replace_day(daily_tasks, self.selected_date, new_day))
        return self.view()

    def edit_task(
        self,
        task_id: EntityId,
        name: str,
        estimated_minutes: float,
        tags: Optional[list[str]] = None,
    ) -> DayView:
        self.last_error = None
        try:
            daily_tasks = day_service.edit_task(
                self.daily_tasks,
                self.selected_date,
                task_id,
                name,
                estimated_minutes,
                tags,
            )
        except day_service.TaskValidationError as e:
            return self.__reject(str(e))
        self.__commit(daily_tasks)
        return self.view()

    def delete_task(self, task_id: EntityId) -> DayView:
        self.last_error = None
        self.__commit(
            day_service.delete_task(self.daily_tasks, self.selected_date, task_id)
        )
        return self.view()

    def clear_day(self) -> DayView:
        self.last_error = None
        self.__commit(day_service.clear_day(self.daily_tasks, self.selected_date))
        return self.view()

    def set_auto_idle_enabled(self, enabled: bool) -> DayView:
        # Only affects future toggles; a running idle interval stays open
        self.last_error = None
        self.auto_idle_enabled = enabled
        return self.view()

    def select_tag_filter(self, tag: Optional[str]) -> DayView:
        self.last_error = None
        self.selected_tag = tag
        return self.view()
