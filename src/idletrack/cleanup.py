# SPDX-License-Identifier: MIT

import atexit

from idletrack.repository.configuration import CONFIGURATION_REPO
from idletrack.repository.daily_tasks import DAILY_TASKS_REPO


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    DAILY_TASKS_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
