"""Tests for total tracked and idle time."""
from conftest import make_day, make_idle, make_task

from idletrack.service.total import total_idle, total_tracked

DATE = "2024-03-01"


class TestTotalTracked:
    """Test the merged total of real work."""

    def test_no_tasks(self):
        assert total_tracked([], 100) == 0

    def test_overlap_is_counted_once(self):
        """[0,100] and [50,150] cover 150, not 200."""
        tasks = [
            make_task("a", intervals=[(0, 100)]),
            make_task("b", intervals=[(50, 150)]),
        ]
        assert total_tracked(tasks, 1_000) == 150

    def test_disjoint_intervals_are_summed(self):
        tasks = [
            make_task("a", intervals=[(0, 100)]),
            make_task("b", intervals=[(200, 250)]),
        ]
        assert total_tracked(tasks, 1_000) == 150

    def test_contained_interval(self):
        """An interval inside another adds nothing."""
        tasks = [
            make_task("a", intervals=[(0, 300)]),
            make_task("b", intervals=[(100, 200)]),
        ]
        assert total_tracked(tasks, 1_000) == 300

    def test_adjacent_intervals_merge(self):
        tasks = [
            make_task("a", intervals=[(0, 100)]),
            make_task("b", intervals=[(100, 200)]),
        ]
        assert total_tracked(tasks, 1_000) == 200

    def test_unsorted_input(self):
        """Intervals are sorted before merging."""
        tasks = [
            make_task("a", intervals=[(500, 600), (0, 100)]),
            make_task("b", intervals=[(50, 120)]),
        ]
        assert total_tracked(tasks, 1_000) == 220

    def test_open_interval_uses_now(self):
        tasks = [make_task("a", intervals=[(0, 100), (200, None)])]
        assert total_tracked(tasks, 450) == 350

    def test_idle_is_ignored(self):
        """Idle time never counts as tracked work."""
        assert total_tracked([make_idle([(0, 500)])], 1_000) == 0


class TestTotalIdle:
    """Test total idle time for a date."""

    def test_sums_idle_intervals(self):
        day = make_day([], make_idle([(0, 100), (300, None)]))
        assert total_idle({DATE: day}, DATE, 400) == 200

    def test_missing_date(self):
        assert total_idle({}, DATE, 400) == 0

    def test_missing_idle(self):
        assert total_idle({DATE: {"tasks": [], "idle": None}}, DATE, 400) == 0
