"""
Wizard - a very light task runner for idempotent provisioning tasks.

A playbook declares tasks, each made of:
- a required ``do`` action, idempotent if possible
- an optional ``when`` predicate, to decide whether ``do`` has to run
- an optional ``undo`` action, used by rollback

Tasks run in declaration order with ``wizard apply``, ``wizard rollback``
and ``wizard list``.
"""

from . import shell
from .errors import ConfigurationError, TaskFailedError, WizardError
from .executor import Executor, RunReport, TaskState
from .loader import discover_tasks, load_playbook
from .playbook import Playbook
from .settings import WizardSettings, get_settings, reload_settings
from .task import Task

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Executor",
    "Playbook",
    "RunReport",
    "Task",
    "TaskFailedError",
    "TaskState",
    "WizardError",
    "WizardSettings",
    "discover_tasks",
    "get_settings",
    "load_playbook",
    "reload_settings",
    "shell",
]
