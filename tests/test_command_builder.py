"""Tests for Taskwarrior command construction."""

from datetime import datetime
from pathlib import Path

import pytest

from taskwarrior_api.models.task_change import TaskCreate, TaskModify
from taskwarrior_api.models.task_filter import TaskFilter
from taskwarrior_api.services.command_builder import CommandBuilder, expand_home
from tests.fakes import OTHER_UUID, TASK_UUID

PREFIX = ["task", "rc.data.location=/data/tasks"]


@pytest.fixture
def builder():
    return CommandBuilder("/data/tasks")


class TestBase:
    """Tests for the shared command prefix."""

    def test_prefix_pins_data_location(self, builder):
        assert builder.base() == PREFIX

    def test_tilde_expanded(self):
        builder = CommandBuilder("~/.task")
        assert builder.base()[1] == f"rc.data.location={Path.home()}/.task"

    def test_bare_tilde_expanded(self):
        assert expand_home("~") == str(Path.home())

    def test_other_paths_untouched(self):
        assert expand_home("/var/lib/task") == "/var/lib/task"
        assert expand_home("~other/.task") == "~other/.task"

    def test_custom_binary(self):
        assert CommandBuilder("/d", binary="/usr/local/bin/task").base()[0] == "/usr/local/bin/task"

    def test_every_command_starts_with_prefix(self, builder):
        commands = [
            builder.export(),
            builder.add(TaskCreate(description="x")),
            builder.modify(TASK_UUID, TaskModify(project="p")),
            builder.delete(TASK_UUID),
            builder.done(TASK_UUID),
            builder.start(TASK_UUID),
            builder.stop(TASK_UUID),
        ]
        for args in commands:
            assert args[:2] == PREFIX


class TestFilters:
    """Tests for filter tokens."""

    def test_no_filter(self, builder):
        assert builder.filter_tokens(None) == []
        assert builder.export() == [*PREFIX, "export"]

    def test_one_token_per_condition(self, builder):
        task_filter = TaskFilter(status="pending", project="Home", tags=["a", "b", "c"])
        tokens = builder.filter_tokens(task_filter)
        assert tokens == ["status:pending", "project:Home", "+a", "+b", "+c"]

    @pytest.mark.parametrize(
        "task_filter,expected_count",
        [
            (TaskFilter(), 0),
            (TaskFilter(status="pending"), 1),
            (TaskFilter(project="Home"), 1),
            (TaskFilter(tags=["x"]), 1),
            (TaskFilter(status="completed", project="Home"), 2),
            (TaskFilter(status="pending", project="Home", tags=["x", "y"]), 4),
            (TaskFilter(uuid=TASK_UUID), 1),
            (TaskFilter(task_id=7), 1),
        ],
    )
    def test_token_count(self, builder, task_filter, expected_count):
        """Each condition yields exactly one token."""
        assert len(builder.filter_tokens(task_filter)) == expected_count

    def test_project_with_spaces_stays_one_token(self, builder):
        tokens = builder.filter_tokens(TaskFilter(project="Home Repairs"))
        assert tokens == ["project:Home Repairs"]

    def test_project_filter_sanitized(self, builder):
        tokens = builder.filter_tokens(TaskFilter(project="--Home;"))
        assert tokens == ["project:Home"]

    def test_uuid_filter(self, builder):
        assert builder.export(TaskFilter(uuid=TASK_UUID)) == [*PREFIX, f"uuid:{TASK_UUID}", "export"]

    def test_task_id_filter(self, builder):
        assert builder.export(TaskFilter(task_id=12)) == [*PREFIX, "12", "export"]

    @pytest.mark.parametrize("task_id", [0, -1, "12", "1 or 2"])
    def test_invalid_task_id(self, builder, task_id):
        with pytest.raises(ValueError):
            builder.filter_tokens(TaskFilter(task_id=task_id))

    def test_invalid_status(self, builder):
        with pytest.raises(ValueError):
            builder.filter_tokens(TaskFilter(status="pending or"))

    def test_invalid_tag(self, builder):
        with pytest.raises(ValueError):
            builder.filter_tokens(TaskFilter(tags=["two words"]))

    def test_invalid_uuid(self, builder):
        with pytest.raises(ValueError):
            builder.filter_tokens(TaskFilter(uuid="1"))

    def test_report(self, builder):
        args = builder.export(TaskFilter(status="pending"), report="next")
        assert args == [*PREFIX, "status:pending", "export", "next"]

    def test_invalid_report(self, builder):
        with pytest.raises(ValueError):
            builder.export(report="next; rm")


class TestAdd:
    """Tests for creation commands."""

    def test_minimal(self, builder):
        args = builder.add(TaskCreate(description="Buy milk"))
        assert args == [*PREFIX, "rc.verbose=new-id", "add", "--", "Buy milk"]

    def test_all_attributes(self, builder):
        task = TaskCreate(
            description="Plan trip",
            project="Travel",
            priority="H",
            due=datetime(2026, 1, 10, 17, 0, 0),
            wait=datetime(2026, 1, 5, 9, 0, 0),
            scheduled=datetime(2026, 1, 8, 9, 0, 0),
            until=datetime(2026, 2, 1, 0, 0, 0),
            recur="weekly",
            tags=["fun", "family"],
            depends=[OTHER_UUID],
        )
        args = builder.add(task)

        assert args == [
            *PREFIX,
            "rc.verbose=new-id",
            "add",
            "project:Travel",
            "priority:H",
            "recur:weekly",
            "due:2026-01-10T17:00:00",
            "wait:2026-01-05T09:00:00",
            "scheduled:2026-01-08T09:00:00",
            "until:2026-02-01T00:00:00",
            "+fun",
            "+family",
            f"depends:{OTHER_UUID}",
            "--",
            "Plan trip",
        ]

    @pytest.mark.parametrize(
        "fields,extra_tokens",
        [
            ({}, 0),
            ({"project": "P"}, 1),
            ({"priority": "L"}, 1),
            ({"due": "2026-01-01T00:00:00"}, 1),
            ({"tags": ["a", "b"]}, 2),
            ({"depends": [TASK_UUID, OTHER_UUID]}, 2),
            ({"project": "P", "tags": ["a"], "depends": [TASK_UUID]}, 3),
        ],
    )
    def test_token_count(self, builder, fields, extra_tokens):
        """Optional attributes add exactly one token each, lists one per element."""
        args = builder.add(TaskCreate(description="x", **fields))
        base_len = len(PREFIX) + len(["rc.verbose=new-id", "add", "--", "x"])
        assert len(args) == base_len + extra_tokens

    def test_description_is_single_token_after_terminator(self, builder):
        """Text that looks like attributes stays inside the description."""
        args = builder.add(TaskCreate(description="fix project:Other +tag due:now"))
        assert args[-2:] == ["--", "fix project:Other +tag due:now"]
        assert "project:Other" not in args

    def test_description_with_shell_characters(self, builder):
        args = builder.add(TaskCreate(description="hello; rm -rf / && echo $HOME"))
        assert args[-1] == "hello rm -rf /  echo HOME"

    def test_leading_dash_removed(self, builder):
        args = builder.add(TaskCreate(description="-rc.confirmation=off"))
        assert args[-1] == "rc.confirmation=off"

    def test_aware_due_sent_as_utc(self, builder):
        args = builder.add(TaskCreate(description="x", due="2026-01-10T17:00:00+02:00"))
        assert "due:2026-01-10T15:00:00Z" in args


class TestModify:
    """Tests for update commands."""

    def test_project_cleared(self, builder):
        """An empty project produces a clearing token."""
        args = builder.modify(TASK_UUID, TaskModify.model_validate({"project": ""}))
        assert args == [*PREFIX, TASK_UUID, "modify", "project:"]

    def test_project_unset(self, builder):
        """An absent project produces no project token at all."""
        args = builder.modify(TASK_UUID, TaskModify.model_validate({"priority": "M"}))
        assert args == [*PREFIX, TASK_UUID, "modify", "priority:M"]
        assert not any(token.startswith("project") for token in args)

    def test_project_set(self, builder):
        args = builder.modify(TASK_UUID, TaskModify(project="Work"))
        assert args[-1] == "project:Work"

    def test_project_set_is_never_a_clearing_token(self, builder):
        args = builder.modify(TASK_UUID, TaskModify(project="--Work;"))
        assert args[-1] == "project:Work"

    def test_unusable_project_rejected(self, builder):
        changes = TaskModify.model_construct(project=";")
        with pytest.raises(ValueError):
            builder.modify(TASK_UUID, changes)

    @pytest.mark.parametrize("name", ["priority", "due", "wait", "scheduled", "until", "recur"])
    def test_each_attribute_can_be_cleared(self, builder, name):
        args = builder.modify(TASK_UUID, TaskModify.model_validate({name: ""}))
        assert args[-1] == f"{name}:"

    def test_times_set(self, builder):
        changes = TaskModify.model_validate({"due": "2026-04-01T09:00:00", "wait": ""})
        args = builder.modify(TASK_UUID, changes)
        assert args[3:] == ["modify", "due:2026-04-01T09:00:00", "wait:"]

    def test_tags(self, builder):
        changes = TaskModify(tags=["new"], remove_tags=["old"])
        args = builder.modify(TASK_UUID, changes)
        assert args[-2:] == ["+new", "-old"]

    def test_tags_cleared(self, builder):
        args = builder.modify(TASK_UUID, TaskModify(tags=[]))
        assert args[-1] == "tags:"

    def test_depends(self, builder):
        args = builder.modify(TASK_UUID, TaskModify(depends=[OTHER_UUID]))
        assert args[-1] == f"depends:{OTHER_UUID}"
        args = builder.modify(TASK_UUID, TaskModify(depends=[]))
        assert args[-1] == "depends:"

    def test_description_after_terminator(self, builder):
        args = builder.modify(TASK_UUID, TaskModify(description="New text", project="P"))
        assert args[3:] == ["modify", "project:P", "--", "New text"]

    def test_nothing_changed(self, builder):
        assert builder.modify(TASK_UUID, TaskModify()) == [*PREFIX, TASK_UUID, "modify"]

    def test_invalid_uuid(self, builder):
        with pytest.raises(ValueError):
            builder.modify("1", TaskModify(project="P"))


class TestTransitions:
    """Tests for done/start/stop/delete commands."""

    def test_done(self, builder):
        assert builder.done(TASK_UUID) == [*PREFIX, TASK_UUID, "done"]

    def test_start(self, builder):
        assert builder.start(TASK_UUID) == [*PREFIX, TASK_UUID, "start"]

    def test_stop(self, builder):
        assert builder.stop(TASK_UUID) == [*PREFIX, TASK_UUID, "stop"]

    def test_delete_disables_confirmation(self, builder):
        assert builder.delete(TASK_UUID) == [*PREFIX, "rc.confirmation=off", TASK_UUID, "delete"]

    @pytest.mark.parametrize("operation", ["done", "start", "stop", "delete"])
    def test_rejects_non_uuid(self, builder, operation):
        with pytest.raises(ValueError):
            getattr(builder, operation)("1 or 2")
