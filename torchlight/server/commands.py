from __future__ import annotations

import logging
import shlex
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from torchlight.errors import CommandError
from torchlight.server.session import GameMode, PlayerSession

if TYPE_CHECKING:
    from torchlight.server.universe import Universe

_LOGGER = logging.getLogger(__name__)


@dataclass
class CommandContext:
    universe: Universe
    sender: Optional[PlayerSession] = None  # None means the console
    console: List[str] = field(default_factory=list)

    def is_player(self) -> bool:
        return self.sender is not None

    def send_message(self, text: str) -> None:
        if self.sender is not None:
            self.sender.send_message(text)
        else:
            _LOGGER.info("[console] %s", text)
            self.console.append(text)


class Command:
    """
    Base class for chat commands.
    Subclasses implement execute(); raise CommandError for bad arguments.
    """

    name: str = ""
    description: str = ""
    usage: str = ""
    # Game mode a player needs; creative players may run everything.
    permission_group: Optional[GameMode] = None

    def can_run(self, ctx: CommandContext) -> bool:
        if self.permission_group is None or ctx.sender is None:
            return True
        return ctx.sender.game_mode in (self.permission_group, GameMode.CREATIVE)

    def execute(self, ctx: CommandContext, args: List[str]) -> None:
        raise NotImplementedError


class CommandRegistry:
    def __init__(self):
        self._commands: Dict[str, Command] = {}
        self._lock = threading.Lock()

    def register(self, command: Command) -> None:
        key = command.name.lower()
        with self._lock:
            if key in self._commands:
                raise ValueError(f"Command '{command.name}' is already registered.")
            self._commands[key] = command

    def unregister(self, name: str) -> Optional[Command]:
        with self._lock:
            return self._commands.pop(name.lower(), None)

    def get(self, name: str) -> Optional[Command]:
        with self._lock:
            return self._commands.get(name.lower())

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def dispatch(self, ctx: CommandContext, line: str) -> bool:
        """
        Runs a command line such as "/brightness 0.5".
        Returns False if nothing ran (unknown command, no permission, bad arguments).
        """
        try:
            tokens = shlex.split(line.strip().removeprefix("/"))
        except ValueError as e:
            ctx.send_message(f"Could not parse command: {e}")
            return False

        if not tokens:
            return False

        name, args = tokens[0], tokens[1:]
        command = self.get(name)
        if command is None:
            ctx.send_message(f"Unknown command: {name}")
            return False

        if not command.can_run(ctx):
            ctx.send_message("You do not have permission to use this command.")
            return False

        try:
            command.execute(ctx, args)
        except CommandError as e:
            ctx.send_message(str(e))
            if command.usage:
                ctx.send_message(f"Usage: {command.usage}")
            return False

        return True
