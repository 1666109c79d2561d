"""
Tests for tasklog CLI commands.

Commands are called through the TaskLogCLI facade with argparse namespaces,
the interactive editor is mocked where a note is written.
"""

import argparse
import json
from datetime import timedelta
from unittest.mock import patch

import pytest

from tasklog.cli.cmd_edit import build_edit_events
from tasklog.core.exceptions import AbortedByUser, ConflictingEdit
from tasklog.core.metadata import split_metadata, tokenize
from tasklog.core.models import NoteAdded, Priority, Status, StatusChanged, utc_now
from tasklog.store import TaskStore
from tasklog.support.config import Config
from tasklog.cli import TaskLogCLI


def _add_args(*content, start=False, done=False, note=False) -> argparse.Namespace:
    """Construct argparse namespace for the add command."""
    return argparse.Namespace(content=list(content), start=start, done=done, note=note)


def _edit_args(uid, *content, untag=None, no_project=False) -> argparse.Namespace:
    return argparse.Namespace(
        uid=uid, content=list(content), untag=untag or [], no_project=no_project
    )


def _list_args(*filters, **flags) -> argparse.Namespace:
    values = dict(
        filter=list(filters),
        todo=False,
        start=False,
        done=False,
        cancelled=False,
        all=False,
        case_sensitive=False,
        json=False,
    )
    values.update(flags)
    return argparse.Namespace(**values)


def _uid_args(uid) -> argparse.Namespace:
    return argparse.Namespace(uid=uid)


def _projected(cli, uid):
    return cli.repository.load().get(uid).project()


class TestAddCommand:
    """Test task creation."""

    def test_add_with_metadata(self, cli, capsys):
        result = cli.cmd_add(_add_args("@work", "+h", "#bug", "fix", "#ui", "the", "login"))
        assert result == 0

        task = _projected(cli, 1)
        assert task.name == "fix the login"
        assert task.project == "work"
        assert task.priority is Priority.HIGH
        assert task.tags == frozenset({"bug", "ui"})
        assert task.status is Status.TODO

        out = capsys.readouterr().out
        assert out.startswith("UID")
        assert "@work" in out
        assert "#bug, #ui" in out
        assert "fix the login" in out

    def test_add_quoted_content(self, cli):
        assert cli.cmd_add(_add_args("@home water the plants")) == 0
        assert _projected(cli, 1).name == "water the plants"

    def test_add_default_priority(self, cli):
        cli.cmd_add(_add_args("something"))
        assert _projected(cli, 1).priority is Priority.LOW

    def test_add_without_description(self, cli, capsys):
        assert cli.cmd_add(_add_args("@work", "#bug")) == 1
        assert "a task needs a description" in capsys.readouterr().err
        assert not cli.repository.tasks_file.exists()

    def test_add_ambiguous(self, cli, capsys):
        assert cli.cmd_add(_add_args("@a", "@b", "task")) == 1
        assert "too many projects: 2" in capsys.readouterr().err

    def test_add_started(self, cli):
        cli.cmd_add(_add_args("task", start=True))
        assert _projected(cli, 1).status is Status.WIP

    def test_add_done(self, cli):
        cli.cmd_add(_add_args("task", done=True))
        task = _projected(cli, 1)
        assert task.status is Status.DONE
        assert task.spent.total_seconds() == 0

    def test_uids_increment(self, cli):
        cli.cmd_add(_add_args("one"))
        cli.cmd_add(_add_args("two"))
        assert [t.uid for t in cli.repository.load().all()] == [1, 2]

    def test_add_with_note(self, cli, capsys):
        with patch("tasklog.cli.cmd_note.edit_note", return_value="details\n") as mock_edit:
            assert cli.cmd_add(_add_args("task", note=True)) == 0

        assert mock_edit.call_args.args[3] is False
        task = _projected(cli, 1)
        assert [n.text for n in task.notes] == ["details\n"]
        assert "Note 1 added to task 1" in capsys.readouterr().out


class TestEditCommand:
    """Test task edition."""

    @pytest.fixture(autouse=True)
    def existing_task(self, cli):
        cli.cmd_add(_add_args("@work", "+l", "#a", "#b", "original"))

    def test_rename_and_retag(self, cli):
        assert cli.cmd_edit(_edit_args(1, "+c", "#c", "new", "name", untag=["#a"])) == 0
        task = _projected(cli, 1)
        assert task.name == "new name"
        assert task.priority is Priority.CRITICAL
        assert task.tags == frozenset({"b", "c"})
        assert task.project == "work"

    def test_untag_without_hash(self, cli):
        cli.cmd_edit(_edit_args(1, untag=["b"]))
        assert _projected(cli, 1).tags == frozenset({"a"})

    def test_metadata_only_keeps_name(self, cli):
        cli.cmd_edit(_edit_args(1, "@home"))
        task = _projected(cli, 1)
        assert task.name == "original"
        assert task.project == "home"

    def test_remove_project(self, cli):
        cli.cmd_edit(_edit_args(1, no_project=True))
        assert _projected(cli, 1).project is None

    def test_set_and_remove_project(self, cli, capsys):
        assert cli.cmd_edit(_edit_args(1, "@home", no_project=True)) == 1
        assert "cannot set and remove the project" in capsys.readouterr().err
        assert len(cli.repository.load().get(1).history) == 1

    def test_conflicting_edit_error(self):
        summary = split_metadata(tokenize("@home"))
        with pytest.raises(ConflictingEdit) as exc_info:
            build_edit_events(summary, [], clear_project=True)
        assert exc_info.value.field == "project"

    def test_nothing_to_change(self, cli, capsys):
        capsys.readouterr()
        assert cli.cmd_edit(_edit_args(1)) == 0
        assert "Nothing to change for task 1" in capsys.readouterr().out
        assert len(cli.repository.load().get(1).history) == 1

    def test_missing_task(self, cli, capsys):
        assert cli.cmd_edit(_edit_args(5, "x")) == 1
        assert "task 5 doesn't exist" in capsys.readouterr().err


class TestTransitionCommands:
    """Test status changes."""

    @pytest.fixture(autouse=True)
    def existing_task(self, cli):
        cli.cmd_add(_add_args("write tests"))

    def test_start_then_done(self, cli, capsys):
        capsys.readouterr()
        assert cli.cmd_start(_uid_args(1)) == 0
        assert "Task 1 is now WIP: write tests" in capsys.readouterr().out
        assert cli.cmd_done(_uid_args(1)) == 0
        assert "Task 1 is now DONE" in capsys.readouterr().out

        task = _projected(cli, 1)
        assert task.status is Status.DONE
        assert task.completion_duration is not None

    def test_cancel_and_back_to_todo(self, cli):
        cli.cmd_cancel(_uid_args(1))
        assert _projected(cli, 1).status is Status.CANCELLED
        cli.cmd_todo(_uid_args(1))
        assert _projected(cli, 1).status is Status.TODO

    def test_self_transition_recorded_by_default(self, cli):
        cli.cmd_todo(_uid_args(1))
        history = cli.repository.load().get(1).history
        assert history[-1].new_status is Status.TODO
        assert len(history) == 2

    def test_self_transition_skipped_when_disabled(self, config, cli, capsys):
        config.record_self_transitions = False
        capsys.readouterr()
        assert cli.cmd_todo(_uid_args(1)) == 0
        assert "already TODO" in capsys.readouterr().out
        assert len(cli.repository.load().get(1).history) == 1

    def test_alias_from_configuration(self, config, cli, capsys):
        config.wip_alias = "DOING"
        capsys.readouterr()
        cli.cmd_start(_uid_args(1))
        assert "is now DOING" in capsys.readouterr().out

    def test_done_reports_spent_time(self, cli, capsys):
        store = cli.repository.load()
        now = utc_now()
        store.append_event(1, StatusChanged(at=now - timedelta(days=2), new_status=Status.WIP))
        cli.repository.save(store)
        capsys.readouterr()

        cli.cmd_done(_uid_args(1))
        assert "(spent " in capsys.readouterr().out

    def test_missing_task(self, cli, capsys):
        assert cli.cmd_start(_uid_args(3)) == 1
        assert "task 3 doesn't exist" in capsys.readouterr().err


class TestShowAndHistoryCommands:
    """Test task details and history display."""

    def test_show(self, cli, capsys):
        cli.cmd_add(_add_args("@work", "+m", "#x", "read", "docs"))
        store = cli.repository.load()
        store.append_event(1, NoteAdded(at=utc_now(), note_uid=1, text="a note\n"))
        cli.repository.save(store)
        capsys.readouterr()

        assert cli.cmd_show(_uid_args(1)) == 0
        out = capsys.readouterr().out
        assert " Description: read docs" in out
        assert " UID: 1" in out
        assert " Spent: not started yet" in out
        assert " Prio: MED" in out
        assert " Project: work" in out
        assert " Tags: #x" in out
        assert " Status: TODO" in out
        assert " Note #1, on " in out
        assert "a note" in out

    def test_show_missing(self, cli, capsys):
        assert cli.cmd_show(_uid_args(9)) == 1
        assert "task 9 doesn't exist" in capsys.readouterr().err

    def test_history(self, cli, capsys):
        cli.cmd_add(_add_args("+h", "task"))
        cli.cmd_start(_uid_args(1))
        cli.cmd_edit(_edit_args(1, "#t"))
        capsys.readouterr()

        assert cli.cmd_history(_uid_args(1)) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert lines[0].endswith("Task created with uid 1: task (HIGH)")
        assert lines[1].endswith("Status changed to WIP")
        assert lines[2].endswith("Tags changed: +#t")


class TestListCommand:
    """Test task listing."""

    @pytest.fixture(autouse=True)
    def tasks(self, cli, capsys):
        cli.cmd_add(_add_args("@work", "+h", "Fix", "login"))
        cli.cmd_add(_add_args("@home", "water", "plants"))
        cli.cmd_add(_add_args("@work", "fix", "logout", done=True))
        capsys.readouterr()

    def test_default_lists_active(self, cli, capsys):
        assert cli.cmd_list(_list_args()) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("UID")
        assert len(lines) == 3
        assert "Fix login" in lines[1]
        assert "water plants" in lines[2]

    def test_filter_summary_and_match(self, cli, capsys):
        assert cli.cmd_list(_list_args("@work", "fix")) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "[ @work ] [ contains: fix ]"
        assert len(lines) == 3
        assert "Fix login" in lines[2]

    def test_case_sensitive_flag(self, cli, capsys):
        cli.cmd_list(_list_args("fix", case_sensitive=True, all=True))
        out = capsys.readouterr().out
        assert "fix logout" in out
        assert "Fix login" not in out

    def test_case_sensitive_from_configuration(self, config, cli, capsys):
        config.case_insensitive_search = False
        cli.cmd_list(_list_args("Fix"))
        out = capsys.readouterr().out
        assert "Fix login" in out

    def test_done_flag(self, cli, capsys):
        cli.cmd_list(_list_args(done=True))
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert "fix logout" in lines[1]

    def test_json_output(self, cli, capsys):
        assert cli.cmd_list(_list_args(all=True, json=True)) == 0
        rows = json.loads(capsys.readouterr().out)
        assert [row["uid"] for row in rows] == [1, 2, 3]
        assert rows[0]["priority"] == "high"
        assert rows[2]["status"] == "done"

    def test_nothing_matches(self, cli, capsys):
        assert cli.cmd_list(_list_args("#nothing")) == 0
        assert capsys.readouterr().out == "[ #nothing ]\n"

    def test_ambiguous_filter(self, cli, capsys):
        assert cli.cmd_list(_list_args("+h", "+l")) == 1
        assert "too many priorities" in capsys.readouterr().err


class TestNoteCommands:
    """Test note add and edit with a mocked editor."""

    @pytest.fixture(autouse=True)
    def existing_task(self, cli):
        cli.cmd_add(_add_args("task"))

    def _note_args(self, uid=1, note_uid=None, no_history=False):
        return argparse.Namespace(uid=uid, note_uid=note_uid, no_history=no_history)

    def test_add_notes(self, cli, capsys):
        with patch("tasklog.cli.cmd_note.edit_note", side_effect=["one\n", "two\n"]) as mock_edit:
            assert cli.cmd_note_add(self._note_args()) == 0
            assert cli.cmd_note_add(self._note_args(no_history=True)) == 0

        assert mock_edit.call_args_list[0].args[3] is True
        assert mock_edit.call_args_list[1].args[3] is False
        notes = _projected(cli, 1).notes
        assert [(n.uid, n.text) for n in notes] == [(1, "one\n"), (2, "two\n")]
        assert "Note 2 added to task 1" in capsys.readouterr().out

    def test_history_disabled_by_configuration(self, config, cli):
        config.previous_notes_help = False
        with patch("tasklog.cli.cmd_note.edit_note", return_value="x\n") as mock_edit:
            cli.cmd_note_add(self._note_args())
        assert mock_edit.call_args.args[3] is False

    def test_add_aborted(self, cli, capsys):
        with patch("tasklog.cli.cmd_note.edit_note", side_effect=AbortedByUser()):
            assert cli.cmd_note_add(self._note_args()) == 0
        assert "nothing added" in capsys.readouterr().out
        assert _projected(cli, 1).notes == ()

    def test_add_without_editor(self, cli, capsys):
        assert cli.cmd_note_add(self._note_args()) == 1
        assert "no interactive editor" in capsys.readouterr().err

    def test_add_missing_task(self, cli, capsys):
        assert cli.cmd_note_add(self._note_args(uid=4)) == 1
        assert "task 4 doesn't exist" in capsys.readouterr().err

    def test_edit_note(self, cli, capsys):
        with patch("tasklog.cli.cmd_note.edit_note", return_value="first\n"):
            cli.cmd_note_add(self._note_args())
        with patch("tasklog.cli.cmd_note.edit_note", return_value="changed\n") as mock_edit:
            assert cli.cmd_note_edit(self._note_args(note_uid=1)) == 0

        assert mock_edit.call_args.args[2] == "first\n"
        note = _projected(cli, 1).notes[0]
        assert note.text == "changed\n"
        assert note.edited
        assert "Note 1 of task 1 updated" in capsys.readouterr().out

    def test_edit_unchanged(self, cli, capsys):
        with patch("tasklog.cli.cmd_note.edit_note", return_value="same\n"):
            cli.cmd_note_add(self._note_args())
            assert cli.cmd_note_edit(self._note_args(note_uid=1)) == 0

        assert "unchanged" in capsys.readouterr().out
        assert len(cli.repository.load().get(1).history) == 2

    def test_edit_missing_note(self, cli, capsys):
        assert cli.cmd_note_edit(self._note_args(note_uid=3)) == 1
        assert "note 3 doesn't exist on task 1" in capsys.readouterr().err

    def test_note_uid_allocated_by_store(self, cli, capsys):
        with patch.object(TaskStore, "next_note_uid", return_value=7) as mock_next, patch(
            "tasklog.cli.cmd_note.edit_note", return_value="x\n"
        ):
            assert cli.cmd_note_add(self._note_args()) == 0

        mock_next.assert_called_once_with(1)
        assert [n.uid for n in _projected(cli, 1).notes] == [7]
        assert "Note 7 added to task 1" in capsys.readouterr().out


class TestProjectRenameCommand:
    """Test project renaming."""

    def test_rename(self, cli, capsys):
        cli.cmd_add(_add_args("@old", "a"))
        cli.cmd_add(_add_args("@old", "b"))
        cli.cmd_add(_add_args("@other", "c"))
        capsys.readouterr()

        args = argparse.Namespace(current_project="@old", new_project="new")
        assert cli.cmd_project_rename(args) == 0
        assert "Updated 2 task(s)" in capsys.readouterr().out
        projects = [t.project().project for t in cli.repository.load().all()]
        assert projects == ["new", "new", "other"]

    def test_rename_unknown(self, cli, capsys):
        args = argparse.Namespace(current_project="ghost", new_project="new")
        assert cli.cmd_project_rename(args) == 0
        assert "No task for project ghost" in capsys.readouterr().out

    def test_rename_to_empty(self, cli, capsys):
        args = argparse.Namespace(current_project="old", new_project="@")
        assert cli.cmd_project_rename(args) == 1


class TestConfigInitCommand:
    """Test writing the default configuration."""

    def test_init(self, cli, config, capsys):
        assert cli.cmd_config_init(argparse.Namespace(force=False)) == 0
        assert config.config_path.exists()
        assert "Configuration written" in capsys.readouterr().out

    def test_init_existing_needs_force(self, cli, config, capsys):
        Config(root=config.root, done_alias="OK").save()
        assert cli.cmd_config_init(argparse.Namespace(force=False)) == 1
        assert "already exists" in capsys.readouterr().err
        assert cli.cmd_config_init(argparse.Namespace(force=True)) == 0
        assert "OK" not in config.config_path.read_text(encoding="utf-8")


def test_cli_uses_configured_tasks_file(tmp_path):
    """The repository follows the tasks_file setting."""
    cli = TaskLogCLI(Config(root=tmp_path, tasks_file="other.jsonl"))
    assert cli.repository.tasks_file == tmp_path / "other.jsonl"
