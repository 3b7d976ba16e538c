from __future__ import annotations

import logging
from typing import List

from torchlight.core.events import EventRegistration
from torchlight.server.commands import Command
from torchlight.server.universe import Universe

_LOGGER = logging.getLogger(__name__)


class Plugin:
    """
    Base class for server plugins. Override setup() to register commands
    and listeners; anything registered through the helpers below is
    removed again by shutdown().
    """

    name: str = "plugin"
    version: str = "0.0.0"

    def __init__(self, universe: Universe):
        self.universe = universe
        self._registrations: List[EventRegistration] = []
        self._commands: List[str] = []
        self.enabled = False

    def setup(self) -> None:
        pass

    def register_command(self, command: Command) -> None:
        self.universe.commands.register(command)
        self._commands.append(command.name)

    def listen(self, event_type, listener) -> EventRegistration:
        registration = self.universe.events.register(event_type, listener)
        self._registrations.append(registration)
        return registration

    def enable(self) -> None:
        if self.enabled:
            return
        _LOGGER.info("Setting up plugin %s %s", self.name, self.version)
        self.setup()
        self.enabled = True

    def shutdown(self) -> None:
        for registration in self._registrations:
            registration.unregister()
        self._registrations.clear()

        for name in self._commands:
            self.universe.commands.unregister(name)
        self._commands.clear()

        self.enabled = False
        _LOGGER.info("Plugin %s shut down", self.name)
