# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_ms(datetime: pendulum.DateTime) -> int:
    return int(round(datetime.timestamp() * 1000))


def ms_to_datetime(ms: int) -> pendulum.DateTime:
    return pendulum.from_timestamp(ms / 1000, tz="UTC")


def now_ms() -> int:
    return datetime_to_ms(now_utc())


def ms_to_iso_str(ms: int) -> str:
    return ms_to_datetime(ms).isoformat()


def ms_to_iso_str_optional(ms: Optional[int]) -> Optional[str]:
    if ms is None:
        return None
    return ms_to_iso_str(ms)


def ms_from_iso_str(datetime: str) -> int:
    return datetime_to_ms(cast(pendulum.DateTime, pendulum.parse(datetime)))


def ms_from_iso_str_optional(datetime: Optional[str]) -> Optional[int]:
    if datetime is None:
        return None
    return ms_from_iso_str(datetime)


def datetime_to_local_date_str(datetime: pendulum.DateTime) -> str:
    """Convert a pendulum.DateTime to a local date string in 'YYYY-MM-DD' format."""
    return datetime.in_tz("local").format("YYYY-MM-DD")


def today_date_key() -> str:
    return datetime_to_local_date_str(now_utc())


def date_key_from_str(date_str: str) -> str:
    """
    Resolve user date input to a 'YYYY-MM-DD' key.

    Accepts YYYY-MM-DD, today/t, yesterday/y, tomorrow/o, or a day offset
    like 1, -1. Raises ValueError for anything else.
    """
    if re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        parsed = pendulum.parse(date_str, tz="local")
        return cast(pendulum.DateTime, parsed).format("YYYY-MM-DD")

    if re.match(r"^-?\d+$", date_str):
        return pendulum.today("local").add(days=int(date_str)).format("YYYY-MM-DD")

    if date_str in ("today", "t"):
        return pendulum.today("local").format("YYYY-MM-DD")
    if date_str in ("yesterday", "y"):
        return pendulum.yesterday("local").format("YYYY-MM-DD")
    if date_str in ("tomorrow", "o"):
        return pendulum.tomorrow("local").format("YYYY-MM-DD")
    raise ValueError(f"Incorrect date format: {date_str}")


def ms_to_display_local_time_str(ms: int) -> str:
    return ms_to_datetime(ms).in_tz("local").format("HH:mm:ss")


def format_duration(ms: int) -> str:
    """Format milliseconds as MM:SS, or HH:MM:SS once an hour is reached."""
    total_seconds = max(ms, 0) // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
