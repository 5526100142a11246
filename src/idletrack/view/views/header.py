# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Group, RenderableType
from rich.padding import Padding

from idletrack.view.state import get_show_header


def header(date: str, sub_header: Optional[str] = None) -> RenderableType:
    """Build the application header for the selected date.

    Args:
        date: The selected date key
        sub_header: Optional sub-header text to display
    """
    # Check if headers should be shown
    if not get_show_header():
        return Group()

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"

    return Group(
        Padding("[dark_orange]idletrack[/dark_orange]", (1, 0, 0, 1)),
        Padding(additional, (0, 1)),
        Padding(f"[plum1]{date}[/plum1]", (0, 1)),
    )
