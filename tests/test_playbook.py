"""Tests for the task model and the playbook registry."""

import pytest
from pydantic import ValidationError

from wizard import ConfigurationError, Playbook, Task


def noop():
    pass


def test_task_decorators_bind_actions():
    """Test do/when/undo decorators bind and return the function."""
    task = Task(name="configure")

    def action():
        pass

    assert task.do(action) is action
    task.when(lambda: True)
    task.undo(noop)

    assert task.action is action
    assert task.predicate is not None
    assert task.inverse is noop
    assert task.runnable is True


def test_task_without_do_is_not_runnable():
    task = Task(name="configure", undo=noop)
    assert task.runnable is False
    assert task.inverse is noop


def test_task_accepts_action_keywords():
    """Test do/when/undo keywords populate the action attributes."""

    def check():
        return True

    task = Task(name="configure", do=noop, when=check, undo=noop)

    assert task.action is noop
    assert task.predicate is check
    assert task.inverse is noop
    assert task.runnable is True


def test_task_accepts_attribute_names():
    task = Task(name="configure", action=noop)
    assert task.action is noop


def test_task_rejects_unknown_keywords():
    with pytest.raises(ValidationError):
        Task(name="configure", doo=noop)


def test_task_binding_twice_is_an_error():
    task = Task(name="configure", do=noop)

    with pytest.raises(ConfigurationError, match="configure.do"):
        task.do(noop)

    task.undo(noop)
    with pytest.raises(ConfigurationError, match="configure.undo"):
        task.undo(noop)


def test_playbook_keeps_declaration_order():
    """Test tasks are listed in the order they are declared."""
    playbook = Playbook()
    for name in ("c", "a", "b"):
        playbook.task(name, do=noop)

    assert playbook.names() == ["c", "a", "b"]
    assert [t.name for t in playbook] == ["c", "a", "b"]
    assert len(playbook) == 3
    assert "a" in playbook
    assert playbook["a"].name == "a"


def test_playbook_orders_by_do_declaration():
    """Test a task takes its position when its do action is declared."""
    playbook = Playbook()
    first = playbook.task("first")
    playbook.task("second", do=noop)

    first.do(noop)

    assert playbook.names() == ["second", "first"]


def test_playbook_task_without_do_is_not_listed():
    """Test tasks missing a do action only show up when asked for."""
    playbook = Playbook()
    playbook.task("a", do=noop)
    playbook.task("broken", undo=noop)
    playbook.task("c", do=noop)

    assert playbook.names() == ["a", "c"]
    assert [t.name for t in playbook.tasks(include_incomplete=True)] == ["a", "broken", "c"]


def test_playbook_duplicate_name_is_an_error():
    playbook = Playbook()
    playbook.task("a", do=noop)

    with pytest.raises(ConfigurationError, match="more than once"):
        playbook.task("a", do=noop)


def test_playbook_add_existing_tasks():
    """Test add() registers built tasks and is chainable."""
    playbook = Playbook("demo")
    result = playbook.add(Task(name="x", do=noop), Task(name="y", do=noop))

    assert result is playbook
    assert playbook.names() == ["x", "y"]
    assert playbook["x"].action is noop
    assert playbook["x"].position < playbook["y"].position


def test_playbook_add_rejects_non_tasks():
    with pytest.raises(TypeError):
        Playbook().add("not a task")


def test_task_cannot_join_two_playbooks():
    task = Task(name="shared", do=noop)
    Playbook().add(task)

    with pytest.raises(ConfigurationError, match="another playbook"):
        Playbook().add(task)
