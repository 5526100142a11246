# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class Interval(TypedDict):
    """A span of active time in epoch milliseconds. ``end`` is None while open."""

    start: int
    end: Optional[int]
