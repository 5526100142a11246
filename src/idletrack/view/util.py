# SPDX-License-Identifier: MIT

from typing import Optional


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_estimate(estimated_minutes: float) -> str:
    if float(estimated_minutes).is_integer():
        return f"{int(estimated_minutes)}m"
    return f"{estimated_minutes:g}m"
