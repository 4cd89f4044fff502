"""Playbook - the ordered registry of tasks."""

import itertools
import logging
from collections.abc import Iterator

from .errors import ConfigurationError
from .task import Action, Task

logger = logging.getLogger(__name__)


class Playbook:
    """Append-only, ordered collection of tasks.

    Tasks are ordered by the declaration of their ``do`` action: a task
    declared with ``do=`` takes its position immediately, a task whose
    ``do`` is bound later with the decorator takes its position at that
    binding.

    Only tasks with a ``do`` action are listed and rolled back. A task that
    never gets one keeps the position at which it was declared and is only
    returned with ``include_incomplete=True``, which ``apply`` uses to report
    it as a configuration error instead of silently ignoring it.

    Example:
        >>> playbook = Playbook("dev-machine")
        >>> configure = playbook.task("configure_something")
        >>>
        >>> @configure.do
        ... def _():
        ...     Path("~/test").expanduser().write_text("test")
        >>>
        >>> playbook.names()
        ['configure_something']
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self._tasks: dict[str, Task] = {}
        self._sequence = itertools.count()

    def task(
        self,
        name: str,
        *,
        do: Action | None = None,
        when: Action | None = None,
        undo: Action | None = None,
        description: str | None = None,
    ) -> Task:
        """Declare a task and return it so actions can be bound to it.

        Raises:
            ConfigurationError: If a task with the same name already exists
        """
        task = Task(
            name=name,
            description=description,
            do=do,
            when=when,
            undo=undo,
        )
        self.add(task)
        return task

    def add(self, *tasks: Task) -> "Playbook":
        """Register already-built tasks, in the given order. Chainable."""
        for task in tasks:
            if not isinstance(task, Task):
                raise TypeError(f"Can only add Task objects, got {type(task).__name__}")
            if task.name in self._tasks:
                raise ConfigurationError(f"Task '{task.name}' is declared more than once")
            if task._playbook is not None and task._playbook is not self:
                raise ConfigurationError(f"Task '{task.name}' already belongs to another playbook")

            task._playbook = self
            task._position = next(self._sequence)
            self._tasks[task.name] = task
            logger.debug(f"Declared task: {task.name} (position {task._position})")
        return self

    def _action_declared(self, task: Task) -> None:
        # Called by Task.do(): the task moves to where its action is declared.
        task._position = next(self._sequence)
        logger.debug(f"Declared {task.name}.do() (position {task._position})")

    def tasks(self, include_incomplete: bool = False) -> list[Task]:
        """Return tasks in declaration order.

        Args:
            include_incomplete: Also return tasks without a ``do`` action
        """
        tasks = sorted(self._tasks.values(), key=lambda t: t._position)
        if include_incomplete:
            return tasks
        return [task for task in tasks if task.runnable]

    def names(self) -> list[str]:
        return [task.name for task in self.tasks()]

    def __getitem__(self, name: str) -> Task:
        return self._tasks[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks())

    def __len__(self) -> int:
        return len(self._tasks)

    def __repr__(self) -> str:
        return f"Playbook({self.name!r}, tasks={self.names()})"
