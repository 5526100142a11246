"""Tests for the YAML persistence gateway."""
import json
import shutil

from conftest import make_day, make_idle, make_task

from idletrack import configuration
from idletrack.repository.daily_tasks import DailyTasksRepository

DATE = "2024-03-01"


def sample_record():
    return {
        DATE: make_day(
            [make_task("a", intervals=[(1_500, 61_500)], estimated_minutes=25, tags=["work"])],
            make_idle([(61_500, None)]),
        ),
        "2024-03-02": {"tasks": [], "idle": None},
    }


def one_task_record(intervals, estimated_minutes):
    return {
        "daily_tasks": {
            DATE: {
                "tasks": [
                    {
                        "id": "a",
                        "name": "A",
                        "intervals": intervals,
                        "estimated_minutes": estimated_minutes,
                        "tags": [],
                    }
                ],
                "idle": None,
            }
        }
    }


class TestLoad:
    """Test reading the stored record."""

    def test_missing_file_is_empty(self, data_paths):
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is None

    def test_saved_record_reads_back(self, data_paths):
        """A flushed record is read back unchanged by a new repository."""
        repository = DailyTasksRepository()
        repository.save(sample_record())
        assert repository.flush() is True

        assert DailyTasksRepository().load() == sample_record()

    def test_timestamps_are_written_as_iso_strings(self, data_paths):
        repository = DailyTasksRepository()
        repository.save(sample_record())
        repository.flush()
        text = configuration.DATA_DAILY_TASKS_PATH.read_text()
        assert "1970-01-01T00:00:01.500000+00:00" in text

    def test_invalid_yaml_is_ignored_and_backed_up(self, data_paths):
        configuration.DATA_DAILY_TASKS_PATH.write_text("daily_tasks: [unclosed")
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is not None
        backup = configuration.DATA_DAILY_TASKS_PATH.with_name("daily_tasks.yaml.corrupt")
        assert backup.read_text() == "daily_tasks: [unclosed"

    def test_non_utf8_file_is_ignored_and_backed_up(self, data_paths):
        raw = b"daily_tasks: {\xff\xfe\x00bad"
        configuration.DATA_DAILY_TASKS_PATH.write_bytes(raw)
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is not None
        backup = configuration.DATA_DAILY_TASKS_PATH.with_name("daily_tasks.yaml.corrupt")
        assert backup.read_bytes() == raw

    def test_interval_ending_before_start_is_ignored(self, data_paths):
        configuration.DATA_DAILY_TASKS_PATH.write_text(
            json.dumps(one_task_record([{"start": 5_000, "end": 1_000}], 10))
        )
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is not None

    def test_negative_estimate_is_ignored(self, data_paths):
        configuration.DATA_DAILY_TASKS_PATH.write_text(
            json.dumps(one_task_record([{"start": 0, "end": 1_000}], -5))
        )
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is not None

    def test_non_mapping_is_ignored(self, data_paths):
        configuration.DATA_DAILY_TASKS_PATH.write_text("- one\n- two\n")
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is not None

    def test_wrong_task_shape_is_ignored(self, data_paths):
        configuration.DATA_DAILY_TASKS_PATH.write_text(
            "daily_tasks:\n  '2024-03-01':\n    tasks:\n    - name: no id\n"
        )
        repository = DailyTasksRepository()
        assert repository.load() == {}
        assert repository.load_error is not None

    def test_legacy_json_export(self, data_paths):
        """Date-keyed lists with the idle task mixed in are split on load."""
        legacy = {
            DATE: [
                {
                    "id": "1700000000000",
                    "name": "Write",
                    "intervals": [{"start": 0, "end": 1_000}],
                    "estimatedMinutes": 25,
                    "tags": ["work"],
                },
                {
                    "id": "__idle__",
                    "name": "Idle",
                    "intervals": [{"start": 1_000}],
                    "estimatedMinutes": 0,
                    "tags": [],
                },
            ]
        }
        configuration.DATA_DAILY_TASKS_PATH.write_text(json.dumps(legacy))

        record = DailyTasksRepository().load()
        day = record[DATE]
        assert [task["name"] for task in day["tasks"]] == ["Write"]
        assert day["tasks"][0]["estimated_minutes"] == 25
        assert day["tasks"][0]["intervals"] == [{"start": 0, "end": 1_000}]
        assert day["idle"] is not None
        assert day["idle"]["intervals"] == [{"start": 1_000, "end": None}]

    def test_load_returns_a_copy(self, data_paths):
        repository = DailyTasksRepository()
        repository.save(sample_record())
        loaded = repository.load()
        loaded[DATE]["tasks"].clear()
        assert len(repository.load()[DATE]["tasks"]) == 1


class TestFlush:
    """Test coalesced writes."""

    def test_nothing_to_flush(self, data_paths):
        repository = DailyTasksRepository()
        assert repository.flush() is False
        assert not configuration.DATA_DAILY_TASKS_PATH.exists()

    def test_only_latest_snapshot_is_written(self, data_paths):
        repository = DailyTasksRepository()
        first = sample_record()
        second = sample_record()
        second[DATE]["tasks"][0]["name"] = "renamed"
        repository.save(first)
        repository.save(second)

        assert repository.flush() is True
        assert repository.flush() is False
        assert DailyTasksRepository().load()[DATE]["tasks"][0]["name"] == "renamed"

    def test_empty_record_is_not_written(self, data_paths):
        repository = DailyTasksRepository()
        repository.save({})
        assert repository.flush() is False
        assert not configuration.DATA_DAILY_TASKS_PATH.exists()

    def test_write_failure_is_logged_not_raised(self, data_paths, monkeypatch, caplog):
        blocker = data_paths / "not-a-directory"
        blocker.write_text("")
        monkeypatch.setattr(
            configuration, "DATA_DAILY_TASKS_PATH", blocker / "daily_tasks.yaml"
        )
        repository = DailyTasksRepository()
        repository.save(sample_record())

        assert repository.flush() is False
        assert repository.is_dirty is True
        assert "could not write" in caplog.text

    def test_unbacked_corrupt_file_is_not_overwritten(self, data_paths, monkeypatch):
        def failing_copy(source, target):
            raise OSError("disk full")

        monkeypatch.setattr(shutil, "copyfile", failing_copy)
        configuration.DATA_DAILY_TASKS_PATH.write_text("daily_tasks: [unclosed")
        repository = DailyTasksRepository()
        assert repository.load() == {}
        repository.save(sample_record())

        assert repository.flush() is False
        assert configuration.DATA_DAILY_TASKS_PATH.read_text() == "daily_tasks: [unclosed"


class TestConcurrentWriters:
    """Test two repositories sharing one data file."""

    def test_stale_snapshot_does_not_overwrite_newer_file(self, data_paths):
        stale = DailyTasksRepository()
        stale.load()

        fresh = DailyTasksRepository()
        fresh.save({DATE: make_day([make_task("w", "Write")])})
        assert fresh.flush() is True

        stale.save({DATE: make_day([])})
        assert stale.flush() is False
        assert stale.is_dirty is True
        tasks = DailyTasksRepository().load()[DATE]["tasks"]
        assert [task["name"] for task in tasks] == ["Write"]

    def test_reload_picks_up_newer_file(self, data_paths):
        first = DailyTasksRepository()
        first.load()

        second = DailyTasksRepository()
        second.save({DATE: make_day([make_task("w", "Write")])})
        second.flush()

        first.reload()
        assert [task["name"] for task in first.load()[DATE]["tasks"]] == ["Write"]

    def test_own_writes_can_be_followed_by_more_writes(self, data_paths):
        repository = DailyTasksRepository()
        repository.load()
        repository.save(sample_record())
        assert repository.flush() is True

        record = sample_record()
        record[DATE]["tasks"][0]["name"] = "renamed"
        repository.save(record)
        assert repository.flush() is True
