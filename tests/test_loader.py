"""Tests for playbook loading and task discovery."""

import pytest

from wizard import ConfigurationError, Playbook, discover_tasks, load_playbook


def test_load_playbook_returns_declared_playbook(write_playbook):
    path = write_playbook(
        """
        from wizard import Playbook

        playbook = Playbook("demo")
        playbook.task("first", do=lambda: None)
        """
    )

    playbook = load_playbook(path)

    assert isinstance(playbook, Playbook)
    assert playbook.name == "demo"
    assert playbook.names() == ["first"]


def test_discover_tasks_follows_do_declaration_order(write_playbook):
    """Test discovery order matches where each do action is declared."""
    path = write_playbook(
        """
        from wizard import Playbook

        playbook = Playbook()

        zeta = playbook.task("zeta")
        alpha = playbook.task("alpha")

        @alpha.do
        def _():
            pass

        @zeta.when
        def _():
            return True

        @zeta.do
        def _():
            pass

        playbook.task("middle", do=lambda: None)
        """
    )

    assert [t.name for t in discover_tasks(path)] == ["alpha", "zeta", "middle"]


def test_load_playbook_aliases_count_once(write_playbook):
    path = write_playbook(
        """
        from wizard import Playbook

        playbook = Playbook()
        default = playbook
        """
    )

    assert load_playbook(path) is not None


def test_load_playbook_missing_file(temp_dir):
    with pytest.raises(ConfigurationError, match="not found"):
        load_playbook(temp_dir / "missing.py")


def test_load_playbook_without_playbook(write_playbook):
    path = write_playbook("x = 1\n")

    with pytest.raises(ConfigurationError, match="No playbook"):
        load_playbook(path)


def test_load_playbook_with_two_playbooks(write_playbook):
    path = write_playbook(
        """
        from wizard import Playbook

        one = Playbook("one")
        two = Playbook("two")
        """
    )

    with pytest.raises(ConfigurationError, match="More than one"):
        load_playbook(path)


def test_load_playbook_duplicate_task_names(write_playbook):
    path = write_playbook(
        """
        from wizard import Playbook

        playbook = Playbook()
        playbook.task("same", do=lambda: None)
        playbook.task("same", do=lambda: None)
        """
    )

    with pytest.raises(ConfigurationError, match="same"):
        load_playbook(path)


def test_discover_tasks_leaves_out_tasks_without_do(write_playbook):
    path = write_playbook(
        """
        from wizard import Playbook

        playbook = Playbook()
        playbook.task("complete", do=lambda: None)
        playbook.task("undo_only", undo=lambda: None)
        """
    )

    assert [t.name for t in discover_tasks(path)] == ["complete"]
    assert [t.name for t in discover_tasks(path, include_incomplete=True)] == [
        "complete",
        "undo_only",
    ]
