"""
Wizard Executor - runs tasks in declaration order.

Apply: start → checking → (skipped | running) → done
Rollback: start → (warned | running) → done

Execution is strictly sequential. Any failure aborts the whole run: later
tasks are never attempted, nothing is retried and already applied tasks are
left as they are.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from rich.console import Console
from rich.markup import escape

from .errors import ConfigurationError, TaskFailedError
from .shell import ActionContext, action_context
from .task import Action, Task

logger = logging.getLogger(__name__)

INDENT = "    "


class RunMode(str, Enum):
    """Executor modes."""
    APPLY = "apply"
    ROLLBACK = "rollback"


class TaskState(str, Enum):
    """Per-task lifecycle states."""
    START = "start"
    CHECKING = "checking"
    SKIPPED = "skipped"
    RUNNING = "running"
    DONE = "done"
    WARNED = "warned"      # Rollback without an undo action
    FAILED = "failed"


@dataclass
class TaskResult:
    """Outcome of a single task."""
    name: str
    state: TaskState = TaskState.START
    error: str | None = None


@dataclass
class RunReport:
    """Outcome of a whole run, in execution order."""
    mode: RunMode
    results: list[TaskResult] = field(default_factory=list)

    def _names(self, state: TaskState) -> list[str]:
        return [r.name for r in self.results if r.state == state]

    @property
    def succeeded(self) -> list[str]:
        return self._names(TaskState.DONE)

    @property
    def skipped(self) -> list[str]:
        return self._names(TaskState.SKIPPED)

    @property
    def warned(self) -> list[str]:
        return self._names(TaskState.WARNED)


class Executor:
    """Drives each task through its lifecycle and reports progress."""

    def __init__(self, console: Console | None = None, debug: bool = False):
        """
        Initialize the executor.

        Args:
            console: Rich console for status output (defaults to stdout)
            debug: Trace the commands run by actions
        """
        self.console = console or Console()
        self.debug = debug

    def apply(self, tasks: Iterable[Task]) -> RunReport:
        """
        Apply all tasks in order, honoring each task's ``when`` predicate.

        Returns:
            RunReport with one result per task

        Raises:
            ConfigurationError: If a task has no ``do`` action
            TaskFailedError: If a ``when`` or ``do`` action raises
        """
        report = RunReport(mode=RunMode.APPLY)
        for task in tasks:
            result = TaskResult(name=task.name)
            report.results.append(result)
            self._apply_task(task, result)
            self.console.print()

        self.console.print("🎉 apply successful!")
        logger.info(f"Apply complete: {len(report.succeeded)} ran, {len(report.skipped)} skipped")
        return report

    def rollback(self, tasks: Iterable[Task]) -> RunReport:
        """
        Run every task's ``undo`` action in declaration order.

        Tasks without ``undo`` produce a warning and do not stop the run.

        Raises:
            TaskFailedError: If an ``undo`` action raises
        """
        report = RunReport(mode=RunMode.ROLLBACK)
        for task in tasks:
            result = TaskResult(name=task.name)
            report.results.append(result)
            self._rollback_task(task, result)
            self.console.print()

        self.console.print("🎉 rollback successful!")
        logger.info(f"Rollback complete: {len(report.succeeded)} undone, {len(report.warned)} without undo")
        return report

    def _apply_task(self, task: Task, result: TaskResult) -> None:
        name = escape(task.name)

        if task.action is None:
            result.state = TaskState.FAILED
            result.error = f"{task.name}.do() is not implemented"
            self.console.print(f"[red]{name}.do() is not implemented[/red]")
            raise ConfigurationError(result.error)

        self.console.print(f"🎯 [bold]{name}[/bold]")

        if task.predicate is not None:
            result.state = TaskState.CHECKING
            self._step("checking if should be run")
            if not self._invoke(task, "when", task.predicate, result):
                result.state = TaskState.SKIPPED
                self._step("no need to be run")
                self._step("⏭️")
                return

        result.state = TaskState.RUNNING
        self._step("running")
        self._invoke(task, "do", task.action, result)
        result.state = TaskState.DONE
        self._step("✅")

    def _rollback_task(self, task: Task, result: TaskResult) -> None:
        name = escape(task.name)
        self.console.print(f"🎯 [bold]{name}[/bold]")

        if task.inverse is None:
            result.state = TaskState.WARNED
            self._step(f"[yellow]⚠️ {name}.undo() is not implemented[/yellow]")
            logger.info(f"{task.name}.undo() is not implemented, skipping")
            return

        result.state = TaskState.RUNNING
        self._step("rolling back")
        self._invoke(task, "undo", task.inverse, result)
        result.state = TaskState.DONE
        self._step("✅")

    def _invoke(self, task: Task, phase: str, func: Action, result: TaskResult):
        """Call one action inside an action context; wrap any failure."""
        logger.debug(f"Invoking {task.name}.{phase}()")
        try:
            with action_context(ActionContext(console=self.console, debug=self.debug)):
                return func()
        except Exception as e:
            result.state = TaskState.FAILED
            result.error = str(e) or type(e).__name__
            self._step(f"[red]❌ {escape(result.error)}[/red]")
            raise TaskFailedError(task.name, phase, result.error) from e

    def _step(self, message: str) -> None:
        self.console.print(f"{INDENT}> {message}")
