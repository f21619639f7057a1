"""
Tests for QuestService.

Tests cover:
1. Goal creation and event recording through the session
2. Points flowing into the gamification engine
3. Saving and loading, including failure handling
"""
import os
import stat
from unittest.mock import patch

import pytest

from eternal_quest.constants import DEFAULT_SAVE_FILENAME
from eternal_quest.exceptions import PersistenceException
from eternal_quest.services.quest_service import QuestService, resolve_path
from eternal_quest.tests.conftest import make_goal_data, write_save_file


class TestCreateAndRecord:
    """Tests for create_goal and record_event_at"""

    def test_unknown_type_reports_failure(self, service):
        result = service.create_goal(make_goal_data(goal_type="Bogus"))

        assert result.success is False
        assert "Bogus" in result.message
        assert service.list_goals() == []

    def test_points_reach_engine(self, service):
        service.create_goal(make_goal_data(points=120))

        result = service.record_event_at(1)

        assert result.success is True
        assert result.points_earned == 120
        assert result.leveled_up is True
        assert result.level == 2
        assert result.new_badges == ["100+ points"]
        assert service.get_engine_status().score == 120

    def test_completed_goal_earns_nothing(self, service):
        service.create_goal(make_goal_data(points=10))
        service.record_event_at(1)

        result = service.record_event_at(1)

        assert result.success is True
        assert result.points_earned == 0
        assert service.get_engine_status().score == 10

    @pytest.mark.parametrize("index", [0, 2])
    def test_out_of_range_fails_without_points(self, service, index):
        service.create_goal(make_goal_data(points=10))

        result = service.record_event_at(index)

        assert result.success is False
        assert result.points_earned == 0
        assert service.get_engine_status().score == 0


class TestSaveAndLoad:
    """Tests for save_to_path and load_from_path"""

    def test_round_trip(self, service, save_path):
        service.create_goal(make_goal_data(title="Run", points=50))
        service.create_goal(make_goal_data(goal_type="Eternal", title="Read", points=10))
        service.create_goal(make_goal_data(
            goal_type="Checklist", title="Temple", points=5, target_count=3, bonus_on_completion=20
        ))
        service.record_event_at(1)
        service.record_event_at(2)
        service.record_event_at(3)

        assert service.save_to_path(save_path).success is True

        restored = QuestService()
        result = restored.load_from_path(save_path)

        assert result.success is True
        assert result.goals_loaded == 3
        assert restored.get_engine_status().score == 65
        assert [item.status for item in restored.list_goals()] == [
            item.status for item in service.list_goals()
        ]

    def test_saved_file_layout(self, service, save_path):
        service.create_goal(make_goal_data(title="Run", description="Marathon", points=50))
        service.save_to_path(save_path)

        with open(save_path, encoding="utf-8") as f:
            assert f.read() == "0\nSimple|Run|Marathon|50|False\n"

    def test_load_replaces_state(self, service, save_path):
        write_save_file(save_path, ["300", "Eternal|Read|Scriptures|100|2"])
        service.create_goal(make_goal_data(title="Old"))

        service.load_from_path(save_path)

        assert [item.title for item in service.list_goals()] == ["Read"]
        assert service.get_engine_status().level == 4

    def test_malformed_line_dropped_but_load_succeeds(self, service, save_path):
        write_save_file(save_path, [
            "40",
            "Simple|Run|Marathon|1000|False",
            "Checklist|Temple|Attend|50|10",
            "Eternal|Read|Scriptures|100|2",
        ])

        result = service.load_from_path(save_path)

        assert result.success is True
        assert result.goals_loaded == 2
        assert result.records_dropped == 1
        assert [item.title for item in service.list_goals()] == ["Run", "Read"]

    def test_missing_file_leaves_state_untouched(self, service, tmp_path):
        service.create_goal(make_goal_data(points=10))
        service.record_event_at(1)

        result = service.load_from_path(str(tmp_path / "missing.txt"))

        assert result.success is False
        assert "not found" in result.message
        assert len(service.list_goals()) == 1
        assert service.get_engine_status().score == 10

    def test_empty_file_reported(self, service, save_path):
        open(save_path, "w").close()

        result = service.load_from_path(save_path)

        assert result.success is False
        assert "empty" in result.message

    def test_read_failure_leaves_state_untouched(self, service, save_path):
        service.create_goal(make_goal_data())
        write_save_file(save_path, ["0"])

        with patch.object(service.file_repo, "read_lines", side_effect=PersistenceException("read", "boom")):
            result = service.load_from_path(save_path)

        assert result.success is False
        assert "boom" in result.message
        assert len(service.list_goals()) == 1

    def test_save_failure_reported(self, service, tmp_path):
        target = str(tmp_path / "no_such_dir" / "quest.txt")

        result = service.save_to_path(target)

        assert result.success is False
        assert result.message.startswith("Failed to save")
        assert not os.path.exists(target)

    def test_failed_replace_keeps_previous_save(self, service, save_path, tmp_path):
        """A save that fails midway should leave the old file and no temp file behind"""
        write_save_file(save_path, ["40", "Eternal|Read|Scriptures|100|2"])
        service.create_goal(make_goal_data(title="New"))

        with patch("eternal_quest.repositories.save_file_repository.os.replace",
                   side_effect=OSError("disk full")):
            result = service.save_to_path(save_path)

        assert result.success is False
        assert "disk full" in result.message
        with open(save_path, encoding="utf-8") as f:
            assert f.read() == "40\nEternal|Read|Scriptures|100|2\n"
        assert [p.name for p in tmp_path.iterdir()] == ["quest.txt"]

    def test_unicode_line_separators_round_trip(self, service, save_path):
        """Only \\n, \\r and \\r\\n end a record; other separators stay in the text"""
        title = "Read\u2028daily\u2029"
        description = "Page\x0cbreak\x85here\x1e"
        service.create_goal(make_goal_data(goal_type="Eternal", title=title, description=description, points=10))
        service.save_to_path(save_path)

        restored = QuestService()
        result = restored.load_from_path(save_path)

        assert result.records_dropped == 0
        assert [(item.title, item.description) for item in restored.list_goals()] == [
            (title, description)
        ]

    def test_crlf_line_endings_accepted(self, service, save_path):
        with open(save_path, "w", encoding="utf-8", newline="") as f:
            f.write("20\r\nEternal|Read|Scriptures|100|2\r\n")

        result = service.load_from_path(save_path)

        assert result.goals_loaded == 1
        assert service.get_engine_status().score == 20

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_save_keeps_existing_permissions(self, service, save_path):
        write_save_file(save_path, ["0"])
        os.chmod(save_path, 0o644)

        service.save_to_path(save_path)

        assert stat.S_IMODE(os.stat(save_path).st_mode) == 0o644

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
    def test_new_save_uses_umask_default(self, service, save_path):
        old_mask = os.umask(0o022)
        try:
            service.save_to_path(save_path)
        finally:
            os.umask(old_mask)

        assert stat.S_IMODE(os.stat(save_path).st_mode) == 0o644

    def test_default_filename(self, service, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = service.save_to_path("  ")

        assert result.path == DEFAULT_SAVE_FILENAME
        assert (tmp_path / DEFAULT_SAVE_FILENAME).exists()
        assert service.load_from_path().success is True


@pytest.mark.parametrize("path, expected", [
    (None, DEFAULT_SAVE_FILENAME),
    ("", DEFAULT_SAVE_FILENAME),
    (" quest.txt ", "quest.txt"),
])
def test_resolve_path(path, expected):
    assert resolve_path(path) == expected
