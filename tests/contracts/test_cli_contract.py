"""CLI Contract Tests

Behavioral tests for the daytally command groups, run against the in-memory
test store.
"""

import json
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from daytally.cli.main import app, router
from daytally.infra.uow import session
from daytally.usecases import settings_update

MONDAY = "2024-03-04"


class TestCliRouting:
    def test_all_groups_registered(self):
        assert router.list_registered_groups() == ["tag", "schedule", "entry", "day", "settings", "reminder"]
        assert router.get_registered_groups()["entry"]["help"] == "Manual slot entry operations"


class TestTagContract:
    def setup_method(self):
        self.runner = CliRunner()

    def test_tag_list_json(self):
        result = self.runner.invoke(app, ["tag", "list", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["status"] == "ok"
        assert payload["total"] == 5

    def test_tag_add_human(self):
        result = self.runner.invoke(app, ["tag", "add", "--name", "Reading", "--id", "reading"])
        assert result.exit_code == 0
        assert "Tag created:" in result.stdout
        assert "ID: reading" in result.stdout

    def test_tag_add_duplicate_json(self):
        result = self.runner.invoke(app, ["tag", "add", "--name", "Work", "--id", "work", "--json"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["status"] == "error"
        assert payload["code"] == "DUPLICATE"

    def test_tag_delete_unknown_human(self):
        result = self.runner.invoke(app, ["tag", "delete", "nope", "--yes"])
        assert result.exit_code == 1
        assert "Error: Tag 'nope' not found" in result.stderr

    def test_tag_delete_json_skips_confirmation(self):
        result = self.runner.invoke(app, ["tag", "delete", "break", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["deleted"]["id"] == "break"

    def test_tag_add_uses_session_and_usecase(self):
        with patch("daytally.cli.commands.tag.session") as mock_session, patch(
            "daytally.usecases.tag_add.add_tag"
        ) as mock_uc:
            mock_db = MagicMock()
            mock_session.return_value.__enter__.return_value = mock_db
            mock_uc.return_value = {"id": "x", "name": "X", "color": "#000000"}

            result = self.runner.invoke(app, ["tag", "add", "--name", "X", "--json"])

            assert result.exit_code == 0
            mock_uc.assert_called_once_with(mock_db, name="X", color=None, tag_id=None)


class TestScheduleAndDayContract:
    def setup_method(self):
        self.runner = CliRunner()

    def _add_sleep(self):
        return self.runner.invoke(
            app,
            [
                "schedule",
                "add",
                "--tag",
                "sleep",
                "--start",
                "22:00",
                "--end",
                "06:00",
                "--starts-on",
                "2024-01-01",
                "--json",
            ],
        )

    def test_schedule_add_json(self):
        result = self._add_sleep()
        assert result.exit_code == 0
        schedule = json.loads(result.stdout)["schedule"]
        assert schedule["overnight"] is True
        assert schedule["days"] == ["SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"]

    def test_schedule_add_bad_time(self):
        result = self.runner.invoke(
            app, ["schedule", "add", "--tag", "work", "--start", "9am", "--end", "17:00", "--json"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout)["code"] == "INVALID_TIME_FORMAT"

    def test_schedule_add_off_quarter_hour(self):
        result = self.runner.invoke(
            app, ["schedule", "add", "--tag", "work", "--start", "09:10", "--end", "17:00"]
        )
        assert result.exit_code == 1
        assert "not on a quarter hour" in result.stderr

    def test_schedule_list_human(self):
        self._add_sleep()
        result = self.runner.invoke(app, ["schedule", "list"])
        assert result.exit_code == 0
        assert "22:00-06:00" in result.stdout
        assert "Total: 1 schedules" in result.stdout

    def test_schedule_update_and_delete(self):
        schedule_id = json.loads(self._add_sleep().stdout)["schedule"]["id"]

        result = self.runner.invoke(app, ["schedule", "update", schedule_id, "--end", "07:00", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["schedule"]["end_minute"] == 420

        result = self.runner.invoke(app, ["schedule", "delete", schedule_id, "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["deleted"]["remaining"] == 0

    def test_day_show_after_entries(self):
        self._add_sleep()
        result = self.runner.invoke(
            app, ["entry", "set", "--date", MONDAY, "--slot", "0,1", "--slot", "20", "--clear", "--json"]
        )
        assert result.exit_code == 0
        states = {s["slot"]: s["override"] for s in json.loads(result.stdout)["slots"]}
        assert states == {0: "cleared", 1: "cleared", 20: "none"}

        result = self.runner.invoke(app, ["day", "show", "--date", MONDAY, "--json"])
        payload = json.loads(result.stdout)
        assert payload["count"] == 14
        assert payload["slots"][0]["slot"] == 2

    def test_day_show_human_empty(self):
        result = self.runner.invoke(app, ["day", "show", "--date", MONDAY])
        assert result.exit_code == 0
        assert "Nothing logged" in result.stdout

    def test_day_stats_json(self):
        self.runner.invoke(app, ["entry", "set", "--date", MONDAY, "-s", "18", "-s", "19", "--tag", "work"])
        result = self.runner.invoke(app, ["day", "stats", "--date", MONDAY, "--json"])
        payload = json.loads(result.stdout)
        assert payload["stats"] == [
            {"tag_id": "work", "name": "Work", "color": "#4A90D9", "minutes": 60, "duration": "1h"}
        ]


class TestEntryContract:
    def setup_method(self):
        self.runner = CliRunner()

    def test_entry_set_requires_tag_or_clear(self):
        result = self.runner.invoke(app, ["entry", "set", "--slot", "3"])
        assert result.exit_code == 1
        assert "Provide exactly one of --tag or --clear" in result.stderr

    def test_entry_set_rejects_both(self):
        result = self.runner.invoke(app, ["entry", "set", "--slot", "3", "--tag", "work", "--clear", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["code"] == "VALIDATION_ERROR"

    def test_entry_set_slot_out_of_range(self):
        result = self.runner.invoke(app, ["entry", "set", "--date", MONDAY, "--slot", "48", "--tag", "work", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["code"] == "OUT_OF_RANGE"

    def test_entry_set_non_numeric_slot(self):
        result = self.runner.invoke(app, ["entry", "set", "--date", MONDAY, "--slot", "ten", "--tag", "work"])
        assert result.exit_code == 1
        assert "Invalid slot 'ten'" in result.stderr

    def test_entry_set_blank_tag(self):
        result = self.runner.invoke(app, ["entry", "set", "--date", MONDAY, "--slot", "3", "--tag", " ", "--json"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["code"] == "VALIDATION_ERROR"
        assert "Tag id cannot be empty" in payload["message"]

    def test_entry_set_bad_date(self):
        result = self.runner.invoke(app, ["entry", "set", "--date", "04/03/2024", "--slot", "1", "--tag", "work", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["code"] == "INVALID_DATE_FORMAT"


class TestSettingsAndInitContract:
    def setup_method(self):
        self.runner = CliRunner()

    def test_settings_update_and_show(self):
        result = self.runner.invoke(app, ["settings", "update", "--interval", "15", "--clock-format", "12"])
        assert result.exit_code == 0
        assert "96 slots/day" in result.stdout

        payload = json.loads(self.runner.invoke(app, ["settings", "show", "--json"]).stdout)
        assert payload["settings"]["interval"] == 15
        assert payload["settings"]["clock_format"] == 12

    def test_settings_update_invalid_mode(self):
        result = self.runner.invoke(app, ["settings", "update", "--notifications", "email", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["status"] == "error"

    def test_init_on_seeded_store(self):
        result = self.runner.invoke(app, ["init", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"status": "ok", "seeded": False}


class TestReminderContract:
    def setup_method(self):
        self.runner = CliRunner()

    def test_reminder_check_logged(self):
        with patch("daytally.cli.commands.reminder._uc_day_show.previous_slot_status") as mock_status:
            mock_status.return_value = {
                "date": MONDAY,
                "current_slot": 21,
                "previous_slot": 20,
                "previous_slot_logged": True,
                "notification_mode": "browser",
            }
            result = self.runner.invoke(app, ["reminder", "check"])
        assert result.exit_code == 0
        assert "Slot 20 is logged" in result.stdout

    def test_reminder_check_unlogged_exits_two(self):
        with patch("daytally.cli.commands.reminder._uc_day_show.previous_slot_status") as mock_status:
            mock_status.return_value = {
                "date": MONDAY,
                "current_slot": 21,
                "previous_slot": 20,
                "previous_slot_logged": False,
                "notification_mode": "browser",
            }
            result = self.runner.invoke(app, ["reminder", "check", "--json"])
        assert result.exit_code == 2
        assert json.loads(result.stdout)["previous_slot_logged"] is False

    def test_reminder_watch_stops_after_polls(self):
        with patch("daytally.cli.commands.reminder.time.sleep") as mock_sleep:
            result = self.runner.invoke(app, ["reminder", "watch", "--polls", "2", "--poll-seconds", "0"])
        assert result.exit_code == 0
        assert mock_sleep.call_count == 2
        assert "Watching 30-minute slots (mode: browser)" in result.stdout

    def test_reminder_watch_picks_up_settings_changes(self):
        def change_settings(_seconds):
            with session() as db:
                settings_update.update_settings(db, interval=15, notification_mode="sound")

        with patch("daytally.cli.commands.reminder.time.sleep", side_effect=change_settings):
            result = self.runner.invoke(app, ["reminder", "watch", "--polls", "2", "--poll-seconds", "0"])
        assert result.exit_code == 0
        assert "Watching 30-minute slots (mode: browser)" in result.stdout
        assert result.stdout.count("Watching 15-minute slots (mode: sound)") == 1
