# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console, Group, RenderableType
from rich.table import Table

from idletrack.model.day_view import DayView
from idletrack.model.task import Task
from idletrack.service.duration import duration, exceeded, is_active
from idletrack.time import format_duration, ms_to_display_local_time_str
from idletrack.view.util import format_estimate, format_tags
from idletrack.view.views.header import header


def tasks_table(day_view: DayView, numbers: dict[str, int]) -> Table:
    now = day_view["now"]
    table = Table(box=box.SIMPLE, title="tasks", title_justify="left")
    for column in ["#", "name", "tracked", "estimate", "tags"]:
        table.add_column(column)

    for task in day_view["tasks"]:
        tracked = format_duration(duration(task["intervals"], now))
        if exceeded(task, now):
            tracked = f"[red]{tracked}[/red]"

        row = [
            str(numbers[task["id"]]),
            task["name"],
            tracked,
            format_estimate(task["estimated_minutes"]),
            format_tags(task["tags"]),
        ]

        # Underline the running task
        if is_active(task):
            row = [f"[underline]{value}[/underline]" for value in row]
        table.add_row(*row)

    return table


def timeline_table(day_view: DayView) -> Table:
    table = Table(box=box.SIMPLE, title="timeline", title_justify="left")
    for column in ["start", "end", "task", "duration"]:
        table.add_column(column)

    for entry in day_view["timeline"]:
        row = [
            ms_to_display_local_time_str(entry["start"]),
            ms_to_display_local_time_str(entry["end"]),
            entry["task_name"],
            format_duration(entry["end"] - entry["start"]),
        ]
        if entry["is_idle"]:
            row = [f"[dim]{value}[/dim]" for value in row]
        elif entry["exceeded"]:
            row = [f"[red]{value}[/red]" for value in row]
        table.add_row(*row)

    return table


def totals_table(day_view: DayView) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("property")
    table.add_column("value")

    table.add_row("tracked", format_duration(day_view["total_tracked"]))
    table.add_row("idle", format_duration(day_view["total_idle"]))
    table.add_row(
        "auto idle", "✓ Enabled" if day_view["auto_idle_enabled"] else "✗ Disabled"
    )
    if day_view["selected_tag"] is not None:
        table.add_row("tag filter", day_view["selected_tag"])
    return table


def tags_table(day_view: DayView) -> Table:
    table = Table(box=box.SIMPLE, title="tags", title_justify="left")
    table.add_column("tag")
    table.add_column("tracked")
    for tag in day_view["tags"]:
        tag_name = tag
        if tag == day_view["selected_tag"]:
            tag_name = f"[bold]{tag}[/bold]"
        table.add_row(tag_name, format_duration(day_view["tag_totals"][tag]))
    return table


def day_renderable(
    day_view: DayView,
    all_tasks: list[Task],
    title: str = "day",
) -> RenderableType:
    # Row numbers follow the unfiltered listing so they stay stable under a tag filter
    numbers = {task["id"]: index + 1 for index, task in enumerate(all_tasks)}

    parts: list[RenderableType] = [
        header(day_view["date"], title),
        tasks_table(day_view, numbers),
        timeline_table(day_view),
    ]
    if len(day_view["tags"]) > 0:
        parts.append(tags_table(day_view))
    parts.append(totals_table(day_view))
    return Group(*parts)


def day_report(
    day_view: DayView,
    all_tasks: list[Task],
    title: str = "day",
    console: Optional[Console] = None,
) -> None:
    console = console if console is not None else Console()
    console.print(day_renderable(day_view, all_tasks, title))


def tags_report(day_view: DayView, console: Optional[Console] = None) -> None:
    console = console if console is not None else Console()
    console.print(header(day_view["date"], "tags"))
    if len(day_view["tags"]) == 0:
        console.print("no tags")
        return
    console.print(tags_table(day_view))
