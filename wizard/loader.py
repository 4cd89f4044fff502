"""
Task discovery - load a playbook file and recover its ordered tasks.
"""

import importlib.util
import logging
from pathlib import Path

from .errors import ConfigurationError
from .playbook import Playbook
from .task import Task

logger = logging.getLogger(__name__)


def load_playbook(path: Path) -> Playbook:
    """
    Load the playbook declared in a Python file by executing it.

    The file must define exactly one ``Playbook`` instance at module level.

    Args:
        path: Path to the playbook file

    Returns:
        The Playbook defined in the file

    Raises:
        ConfigurationError: If the file is missing, cannot be imported, or
            does not define exactly one Playbook
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Playbook not found: {path}")

    # Load the module dynamically
    spec = importlib.util.spec_from_file_location("wizard_playbook", path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Could not load {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    playbooks = []
    for name, obj in vars(module).items():
        if isinstance(obj, Playbook) and not any(obj is p for p in playbooks):
            playbooks.append(obj)
            logger.debug(f"Found playbook: {name} ({len(obj)} tasks)")

    if not playbooks:
        raise ConfigurationError(f"No playbook found in {path}")
    if len(playbooks) > 1:
        raise ConfigurationError(
            f"More than one playbook found in {path}: "
            + ", ".join(repr(p.name) for p in playbooks)
        )

    return playbooks[0]


def discover_tasks(path: Path, include_incomplete: bool = False) -> list[Task]:
    """Load a playbook file and return its tasks in declaration order.

    Tasks without a ``do`` action are left out unless ``include_incomplete``
    is set.
    """
    tasks = load_playbook(path).tasks(include_incomplete=include_incomplete)
    logger.info(f"Discovered {len(tasks)} tasks in {path}")
    return tasks
