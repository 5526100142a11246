# SPDX-License-Identifier: MIT

import datetime
import hashlib
import logging
import shutil
from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from idletrack import configuration, time
from idletrack.model.day import DailyTasks, Day
from idletrack.model.entity_id import IDLE_TASK_ID
from idletrack.model.interval import Interval
from idletrack.model.task import Task

logger = logging.getLogger(__name__)


class MalformedDataError(ValueError):
    pass


class DailyTasksRepository:
    """
    YAML-file persistence gateway for the full multi-day record.

    The record is read lazily on first access. save() only swaps in the
    latest snapshot and marks the repository dirty; flush() writes whatever
    snapshot is current, so a burst of mutations costs one write. A file
    that changed on disk since it was read is never overwritten.
    """

    def __init__(self) -> None:
        self._daily_tasks: Optional[DailyTasks] = None
        self.is_dirty = False
        self.load_error: Optional[str] = None
        # Digest of the file contents last read or written, None when absent
        self._read_digest: Optional[str] = None
        self._backup_failed = False

    @property
    def daily_tasks(self) -> DailyTasks:
        if self._daily_tasks is None:
            self.__load_data()
        if self._daily_tasks is None:
            raise ValueError()
        return self._daily_tasks

    def reload(self) -> None:
        """Drop the cached record so the next access reads the file again."""
        if self.is_dirty:
            self.flush()
        self._daily_tasks = None
        self.is_dirty = False
        self.load_error = None
        self._read_digest = None
        self._backup_failed = False

    def __load_data(self) -> None:
        self._daily_tasks = {}
        path = configuration.DATA_DAILY_TASKS_PATH
        if not path.is_file():
            return

        try:
            raw_bytes = path.read_bytes()
        except OSError as e:
            logger.error("could not read %s: %s", path, e)
            self.load_error = f"could not read {path}: {e}"
            return
        self._read_digest = hashlib.sha1(raw_bytes).hexdigest()

        try:
            raw_data = load(raw_bytes.decode("utf-8"), Loader=Loader)
            self._daily_tasks = self.__convert_daily_tasks_for_deserialization(
                raw_data
            )
        except (
            YAMLError,
            MalformedDataError,
            AttributeError,
            KeyError,
            TypeError,
            ValueError,
        ) as e:
            backup_path = path.with_name(path.name + ".corrupt")
            logger.warning(
                "ignoring unreadable data in %s (%s); copy kept at %s",
                path,
                e,
                backup_path,
            )
            self.load_error = f"stored data in {path} was unreadable and was ignored"
            self._daily_tasks = {}
            try:
                shutil.copyfile(path, backup_path)
            except OSError as copy_error:
                logger.error("could not back up %s: %s", path, copy_error)
                self._backup_failed = True

    def __current_digest(self) -> Optional[str]:
        path = configuration.DATA_DAILY_TASKS_PATH
        if not path.is_file():
            return None
        return hashlib.sha1(path.read_bytes()).hexdigest()

    def __save_data(self, daily_tasks: DailyTasks) -> None:
        serializable = self.__convert_daily_tasks_for_serialization(
            deepcopy(daily_tasks)
        )
        raw_bytes = dump(serializable, Dumper=Dumper).encode("utf-8")
        path = configuration.DATA_DAILY_TASKS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(raw_bytes)
        self._read_digest = hashlib.sha1(raw_bytes).hexdigest()

    def flush(self) -> bool:
        if self._daily_tasks is None or not self.is_dirty:
            return False
        if len(self._daily_tasks) == 0:
            # An empty record is never written over existing data
            self.is_dirty = False
            return False

        path = configuration.DATA_DAILY_TASKS_PATH
        if self._backup_failed:
            logger.error(
                "not overwriting %s: its unreadable contents have no backup", path
            )
            return False
        try:
            if self.__current_digest() != self._read_digest:
                logger.error(
                    "not overwriting %s: it changed on disk after it was read", path
                )
                return False
            self.__save_data(self._daily_tasks)
        except OSError as e:
            logger.error(
                "could not write %s: %s", configuration.DATA_DAILY_TASKS_PATH, e
            )
            return False
        self.is_dirty = False
        logger.debug("saved %d day(s)", len(self._daily_tasks))
        return True

    def load(self) -> DailyTasks:
        return deepcopy(self.daily_tasks)

    def save(self, daily_tasks: DailyTasks) -> None:
        self._daily_tasks = deepcopy(daily_tasks)
        self.is_dirty = True

    def __convert_daily_tasks_for_serialization(
        self, daily_tasks: DailyTasks
    ) -> dict[str, Any]:
        serializable_days: dict[str, Any] = {}
        for date_key, day in daily_tasks.items():
            serializable_days[date_key] = {
                "tasks": [
                    self.__convert_task_for_serialization(task)
                    for task in day["tasks"]
                ],
                "idle": (
                    self.__convert_task_for_serialization(day["idle"])
                    if day["idle"] is not None
                    else None
                ),
            }
        return {"daily_tasks": serializable_days}

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["intervals"] = [
            {
                "start": time.ms_to_iso_str(interval["start"]),
                "end": time.ms_to_iso_str_optional(interval["end"]),
            }
            for interval in task["intervals"]
        ]
        return serializable_task

    def __convert_daily_tasks_for_deserialization(self, raw_data: Any) -> DailyTasks:
        if raw_data is None:
            return {}
        if not isinstance(raw_data, dict):
            raise MalformedDataError("top level is not a mapping")

        # Older exports keep the dates at the top level
        raw_days = raw_data.get("daily_tasks", raw_data)
        if raw_days is None:
            return {}
        if not isinstance(raw_days, dict):
            raise MalformedDataError("daily_tasks is not a mapping")

        daily_tasks: DailyTasks = {}
        for raw_date_key, raw_day in raw_days.items():
            date_key = (
                raw_date_key.isoformat()
                if isinstance(raw_date_key, datetime.date)
                else str(raw_date_key)
            )
            daily_tasks[date_key] = self.__convert_day_for_deserialization(raw_day)
        return daily_tasks

    def __convert_day_for_deserialization(self, raw_day: Any) -> Day:
        if raw_day is None:
            return {"tasks": [], "idle": None}

        # Legacy layout: a flat list with the idle task mixed in by id
        if isinstance(raw_day, list):
            tasks = [self.__convert_task_for_deserialization(t) for t in raw_day]
            idle_tasks = [task for task in tasks if task["id"] == IDLE_TASK_ID]
            return {
                "tasks": [task for task in tasks if task["id"] != IDLE_TASK_ID],
                "idle": idle_tasks[0] if len(idle_tasks) > 0 else None,
            }

        if not isinstance(raw_day, dict):
            raise MalformedDataError(f"unexpected day entry: {raw_day!r}")

        raw_idle = raw_day.get("idle")
        return {
            "tasks": [
                self.__convert_task_for_deserialization(raw_task)
                for raw_task in raw_day.get("tasks") or []
            ],
            "idle": (
                self.__convert_task_for_deserialization(raw_idle)
                if raw_idle is not None
                else None
            ),
        }

    def __convert_task_for_deserialization(self, raw_task: dict[str, Any]) -> Task:
        estimated_minutes = raw_task.get(
            "estimated_minutes", raw_task.get("estimatedMinutes", 0)
        )
        if isinstance(estimated_minutes, bool) or not isinstance(
            estimated_minutes, (int, float)
        ):
            raise MalformedDataError(f"bad estimate for task {raw_task['id']}")
        if estimated_minutes < 0:
            raise MalformedDataError(f"negative estimate for task {raw_task['id']}")

        intervals: list[Interval] = []
        for raw_interval in raw_task.get("intervals") or []:
            start = self.__convert_timestamp_for_deserialization(raw_interval["start"])
            end = self.__convert_timestamp_for_deserialization(raw_interval.get("end"))
            if start is None:
                raise MalformedDataError(f"interval without start: {raw_interval!r}")
            if end is not None and end < start:
                raise MalformedDataError(f"interval ends before it starts: {raw_interval!r}")
            intervals.append({"start": start, "end": end})

        return {
            "id": str(raw_task["id"]),
            "name": str(raw_task["name"]),
            "intervals": intervals,
            "estimated_minutes": estimated_minutes,
            # Deduplicate tags
            "tags": list(dict.fromkeys(str(tag) for tag in raw_task.get("tags") or [])),
        }

    def __convert_timestamp_for_deserialization(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool):
            raise MalformedDataError(f"bad timestamp: {value!r}")
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, datetime.datetime):
            return time.datetime_to_ms(pendulum.instance(value, tz="UTC"))
        return time.ms_from_iso_str(str(value))


DAILY_TASKS_REPO = DailyTasksRepository()
