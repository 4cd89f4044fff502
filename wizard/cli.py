"""
Wizard CLI - a very light task runner for idempotent provisioning tasks.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup

from .executor import Executor
from .loader import discover_tasks
from .settings import get_settings

logger = logging.getLogger(__name__)


class WizardGroup(TyperGroup):
    """Command group that reports usage errors with exit status 1.

    Unknown flags, unknown commands and extra arguments are raised as
    ``typer.TyperException`` subclasses while parsing, either for the group
    itself (make_context) or for the selected command (invoke).
    """

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except typer.TyperException as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except typer.TyperException as e:
            e.exit_code = 1
            raise


# Setup
app = typer.Typer(
    name="wizard",
    help="A very light task runner: apply, roll back or list the tasks of a playbook.",
    cls=WizardGroup,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@dataclass
class CliOptions:
    debug: bool
    playbook: Path


def configure_logging(debug: bool = False):
    """Configure logging based on settings."""
    settings = get_settings()
    level = logging.DEBUG if debug else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(level)


def _debug_option():
    return typer.Option(
        False, "--debug", help="Enable debug mode (eg. output tasks' commands)"
    )


def _file_option():
    return typer.Option(
        None, "--file", "-f", help="Playbook file (default: playbook.py, env: WIZARD_PLAYBOOK)"
    )


def _resolve_options(
    ctx: typer.Context, debug: bool, playbook_file: Path | None
) -> CliOptions:
    """Merge command options with the root options and the settings.

    Command-line flags win over settings; a flag given either before or
    after the command name counts.
    """
    root: CliOptions = ctx.obj
    options = CliOptions(
        debug=debug or root.debug,
        playbook=playbook_file or root.playbook,
    )
    if options.debug and not root.debug:
        configure_logging(debug=True)
    return options


def _handle_command_error(e: Exception, command_type: str) -> None:
    """Print a command failure and exit.

    Raises:
        SystemExit: Always exits with code 1
    """
    console.print(
        f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red] {escape(str(e))}"
    )
    raise typer.Exit(code=1)


def _run_command(mode: str, options: CliOptions) -> None:
    """Discover the playbook's tasks and drive them through the executor."""
    logger.info(f"Running {mode} with playbook {options.playbook}")
    try:
        # apply also gets tasks missing a do action, to report them as fatal
        tasks = discover_tasks(options.playbook, include_incomplete=mode == "apply")
        executor = Executor(console=console, debug=options.debug)
        getattr(executor, mode)(tasks)
    except Exception as e:
        _handle_command_error(e, mode)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    debug: bool = _debug_option(),
    playbook_file: Path | None = _file_option(),
):
    """A very light task runner: apply, roll back or list the tasks of a playbook."""
    settings = get_settings()
    ctx.obj = CliOptions(
        debug=debug or settings.debug,
        playbook=playbook_file or settings.playbook,
    )
    configure_logging(debug=ctx.obj.debug)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command()
def apply(
    ctx: typer.Context,
    debug: bool = _debug_option(),
    playbook_file: Path | None = _file_option(),
):
    """Execute all the tasks."""
    _run_command("apply", _resolve_options(ctx, debug, playbook_file))


@app.command()
def rollback(
    ctx: typer.Context,
    debug: bool = _debug_option(),
    playbook_file: Path | None = _file_option(),
):
    """Undo all the tasks."""
    _run_command("rollback", _resolve_options(ctx, debug, playbook_file))


@app.command(name="list")
def list_cmd(
    ctx: typer.Context,
    debug: bool = _debug_option(),
    playbook_file: Path | None = _file_option(),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show task descriptions"
    ),
):
    """List all the tasks."""
    options = _resolve_options(ctx, debug, playbook_file)
    try:
        tasks = discover_tasks(options.playbook)
    except Exception as e:
        _handle_command_error(e, "list")

    for task in tasks:
        if verbose and task.description:
            typer.echo(f"{task.name}\t{task.description}")
        else:
            typer.echo(task.name)


@app.command()
def version():
    """Show Wizard version."""
    from . import __version__

    console.print(f"Wizard version: [bold]{__version__}[/bold]")


def main():
    app()


if __name__ == "__main__":
    main()
