"""Pytest configuration and shared fixtures."""
from copy import deepcopy
from typing import Optional

import pytest

from idletrack import configuration
from idletrack.model.day import DailyTasks, Day
from idletrack.model.interval import Interval
from idletrack.model.task import Task
from idletrack.repository.configuration import CONFIGURATION_REPO
from idletrack.repository.daily_tasks import DAILY_TASKS_REPO
from idletrack.template.task import get_idle_task_template

MINUTE = 60_000


def make_task(
    id: str,
    name: Optional[str] = None,
    intervals: Optional[list[tuple[int, Optional[int]]]] = None,
    estimated_minutes: float = 30,
    tags: Optional[list[str]] = None,
) -> Task:
    interval_list: list[Interval] = [
        {"start": start, "end": end} for start, end in (intervals or [])
    ]
    return {
        "id": id,
        "name": name if name is not None else id,
        "intervals": interval_list,
        "estimated_minutes": estimated_minutes,
        "tags": tags or [],
    }


def make_idle(intervals: Optional[list[tuple[int, Optional[int]]]] = None) -> Task:
    idle = get_idle_task_template()
    idle["intervals"] = [{"start": start, "end": end} for start, end in (intervals or [])]
    return idle


def make_day(tasks: list[Task], idle: Optional[Task] = None) -> Day:
    return {"tasks": tasks, "idle": idle if idle is not None else make_idle()}


class FakeClock:
    """Callable clock returning a settable time in ms."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class MemoryGateway:
    """Persistence gateway keeping every saved snapshot in memory."""

    def __init__(self, daily_tasks: Optional[DailyTasks] = None) -> None:
        self.stored: DailyTasks = deepcopy(daily_tasks) if daily_tasks else {}
        self.saves: list[DailyTasks] = []

    def load(self) -> DailyTasks:
        return deepcopy(self.stored)

    def save(self, daily_tasks: DailyTasks) -> None:
        self.stored = deepcopy(daily_tasks)
        self.saves.append(deepcopy(daily_tasks))


@pytest.fixture
def clock():
    """Fixture providing a clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def gateway():
    """Fixture providing an empty in-memory gateway."""
    return MemoryGateway()


@pytest.fixture
def data_paths(tmp_path, monkeypatch):
    """Point config and data files at a temporary directory."""
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"
    config_path.mkdir()
    data_path.mkdir()
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(
        configuration, "DATA_DAILY_TASKS_PATH", data_path / "daily_tasks.yaml"
    )
    return tmp_path


@pytest.fixture
def fresh_repos(data_paths, monkeypatch):
    """Reset the module-level repositories so nothing leaks between tests."""
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    monkeypatch.setattr(DAILY_TASKS_REPO, "_daily_tasks", None)
    monkeypatch.setattr(DAILY_TASKS_REPO, "is_dirty", False)
    monkeypatch.setattr(DAILY_TASKS_REPO, "load_error", None)
    monkeypatch.setattr(DAILY_TASKS_REPO, "_read_digest", None)
    monkeypatch.setattr(DAILY_TASKS_REPO, "_backup_failed", False)
    return data_paths
