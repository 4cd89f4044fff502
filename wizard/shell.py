"""
Shell helpers for task actions.

Task bodies are plain Python callables, but most provisioning work is done by
running commands. ``run`` executes a command, echoes its output dimmed and,
when the executor runs in debug mode, traces the command line first:

    >>> @install_skaffold.do
    ... def _():
    ...     shell.run("curl -Lo /tmp/skaffold https://example.com/skaffold")
    ...     shell.run(["sudo", "mv", "/tmp/skaffold", "/usr/local/bin/skaffold"])
"""

import logging
import shlex
import shutil
import subprocess
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionContext:
    """Execution settings passed by the executor to the running action."""

    console: Console
    debug: bool = False


_current: ContextVar[ActionContext | None] = ContextVar("wizard_action_context", default=None)


@contextmanager
def action_context(context: ActionContext) -> Iterator[ActionContext]:
    """Make ``context`` visible to shell helpers for the duration of an action."""
    token = _current.set(context)
    try:
        yield context
    finally:
        _current.reset(token)


def current_context() -> ActionContext:
    """Return the context of the running action, or a quiet default outside one."""
    context = _current.get()
    if context is None:
        return ActionContext(console=Console())
    return context


def _display(command: str | Sequence[str]) -> str:
    if isinstance(command, str):
        return command
    return shlex.join(str(part) for part in command)


def run(
    command: str | Sequence[str],
    *,
    check: bool = True,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess:
    """Run a command, echoing its output line by line as it is produced.

    stderr is merged into stdout so both streams keep their interleaving.

    Args:
        command: A shell string (run through the shell) or an argument list
        check: Raise on non-zero exit status
        cwd: Working directory for the command
        env: Full environment for the command (defaults to the current one)

    Returns:
        The completed process, with the combined output in ``stdout``

    Raises:
        subprocess.CalledProcessError: If ``check`` is set and the command fails
    """
    context = current_context()
    display = _display(command)

    if context.debug:
        context.console.print(f"+ {escape(display)}", style="dim")
    logger.debug(f"Running command: {display}")

    process = subprocess.Popen(
        command,
        shell=isinstance(command, str),
        cwd=cwd,
        env=dict(env) if env is not None else None,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )

    lines = []
    with process:
        for line in process.stdout:
            lines.append(line)
            context.console.print(escape(line.rstrip("\n")), style="dim")

    output = "".join(lines)
    if check and process.returncode != 0:
        raise subprocess.CalledProcessError(process.returncode, command, output=output)
    return subprocess.CompletedProcess(
        args=command, returncode=process.returncode, stdout=output
    )


def command_exists(name: str) -> bool:
    """Check whether an executable is available on PATH."""
    return shutil.which(name) is not None
