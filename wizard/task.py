"""Task model - a named unit of provisioning work."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .playbook import Playbook

logger = logging.getLogger(__name__)

Action = Callable[[], Any]


class Task(BaseModel):
    """A provisioning task made of up to three zero-argument callables.

    The actions can be passed to the constructor or bound afterwards with the
    decorators of the same name, mirroring the ``name.do()`` /
    ``name.when()`` / ``name.undo()`` convention:

        >>> install_skaffold = playbook.task("install_skaffold")
        >>>
        >>> @install_skaffold.when
        ... def _():
        ...     return not shell.command_exists("skaffold")
        >>>
        >>> @install_skaffold.do
        ... def _():
        ...     shell.run("brew install skaffold")

    The constructor accepts the actions under their ``do``, ``when`` and
    ``undo`` names as well as the attribute names:

        >>> Task(name="configure", do=write_config, undo=remove_config)

    Attributes:
        name: Unique identifier within the playbook
        description: Optional human-readable description
        action: The ``do`` action, required for the task to be runnable
        predicate: The ``when`` check; a falsy result skips ``do``
        inverse: The ``undo`` action used by rollback
        _position: Declaration position assigned by the owning playbook
        _playbook: Back-reference to the owning playbook
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str
    description: str | None = None
    action: Action | None = Field(default=None, alias="do")
    predicate: Action | None = Field(default=None, alias="when")
    inverse: Action | None = Field(default=None, alias="undo")

    _position: int | None = PrivateAttr(default=None)
    _playbook: Optional["Playbook"] = PrivateAttr(default=None)

    def do(self, func: Action) -> Action:
        """Bind the ``do`` action. Usable as a decorator."""
        if self.action is not None:
            raise ConfigurationError(f"{self.name}.do() is declared more than once")
        self.action = func
        if self._playbook is not None:
            self._playbook._action_declared(self)
        return func

    def when(self, func: Action) -> Action:
        """Bind the ``when`` predicate. Usable as a decorator."""
        if self.predicate is not None:
            raise ConfigurationError(f"{self.name}.when() is declared more than once")
        self.predicate = func
        return func

    def undo(self, func: Action) -> Action:
        """Bind the ``undo`` action. Usable as a decorator."""
        if self.inverse is not None:
            raise ConfigurationError(f"{self.name}.undo() is declared more than once")
        self.inverse = func
        return func

    @property
    def runnable(self) -> bool:
        return self.action is not None

    @property
    def position(self) -> int | None:
        return self._position

    def __repr__(self) -> str:
        bound = [
            slot
            for slot, func in (
                ("do", self.action),
                ("when", self.predicate),
                ("undo", self.inverse),
            )
            if func is not None
        ]
        return f"Task({self.name!r}, actions={bound})"
