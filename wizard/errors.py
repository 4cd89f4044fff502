"""
Wizard errors.
"""


class WizardError(Exception):
    """Base exception for all Wizard errors."""
    pass


class ConfigurationError(WizardError):
    """Errors in the playbook or in task definitions."""
    pass


class TaskFailedError(WizardError):
    """A task action raised while the run was in progress.

    Attributes:
        task: Name of the task that failed
        phase: Which action failed ("do", "when" or "undo")
    """

    def __init__(self, task: str, phase: str, message: str):
        super().__init__(f"{task}.{phase}() failed: {message}")
        self.task = task
        self.phase = phase
