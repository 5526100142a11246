# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from idletrack.time import date_key_from_str, today_date_key


def parse_date(date_param: Optional[str | int]) -> Optional[str]:
    if date_param is None:
        return None
    try:
        return date_key_from_str(str(date_param))
    except ValueError:
        raise typer.BadParameter(
            "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"
        )


def resolve_date(date_param: Optional[str]) -> str:
    return date_param if date_param is not None else today_date_key()

