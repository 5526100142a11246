# SPDX-License-Identifier: MIT

from idletrack.repository.daily_tasks import DAILY_TASKS_REPO


def complete_tag(incomplete: str) -> list[str]:
    """Return list of tags used on any day for shell completion."""
    tags: set[str] = set()
    for day in DAILY_TASKS_REPO.load().values():
        for task in day["tasks"]:
            tags.update(task["tags"])
    return sorted(tag for tag in tags if tag.startswith(incomplete))
