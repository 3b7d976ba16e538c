from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from typing import Dict, Optional

from torchlight.core.components import Inventory, Player, PlayerRef
from torchlight.core.events import EventRegistry, InventoryChanged, PlayerDisconnected
from torchlight.core.world import World
from torchlight.errors import PlayerUnavailable
from torchlight.server.commands import CommandContext, CommandRegistry
from torchlight.server.session import GameMode, PlayerSession
from torchlight.types import PlayerId, WorldId

_LOGGER = logging.getLogger(__name__)


class Universe:
    """
    Process-wide registry of worlds and connected players, plus the global
    event and command registries plugins hook into.
    """

    def __init__(self):
        self.events = EventRegistry()
        self.commands = CommandRegistry()
        self._worlds: Dict[WorldId, World] = {}
        self._sessions: Dict[PlayerId, PlayerSession] = {}
        self._lock = threading.Lock()

    # WORLDS
    def create_world(self, name: str) -> World:
        world = World(name)
        self.add_world(world)
        return world

    def add_world(self, world: World) -> None:
        with self._lock:
            self._worlds[world.world_id] = world

    def get_world(self, world_id: WorldId) -> Optional[World]:
        with self._lock:
            return self._worlds.get(world_id)

    # PLAYERS
    def get_player(self, player_id: PlayerId) -> Optional[PlayerSession]:
        with self._lock:
            return self._sessions.get(player_id)

    def connect(
        self,
        username: str,
        world: World,
        inventory: Inventory | None = None,
        game_mode: GameMode = GameMode.ADVENTURE,
        player_id: PlayerId | None = None,
    ) -> PlayerSession:
        """
        Registers a session and spawns its entity. The entity only exists
        once the world has run its pending tasks.
        """
        player_id = player_id or uuid.uuid4()
        session = PlayerSession(player_id, username, world.world_id, game_mode)

        with self._lock:
            if world.world_id not in self._worlds:
                raise KeyError(f"World {world.name} is not part of this universe.")
            self._sessions[player_id] = session

        player = Player(inventory or Inventory())
        world.execute(lambda: world.create_entity(PlayerRef(player_id, username), player))

        _LOGGER.info("%s joined world %s", username, world.name)
        return session

    def disconnect(self, player_id: PlayerId) -> None:
        with self._lock:
            session = self._sessions.pop(player_id, None)
        if session is None:
            return

        session.invalidate()
        world = self.get_world(session.world_id)
        if world is not None:
            world.execute(lambda: self._despawn(world, player_id))

        _LOGGER.info("%s left", session.username)
        self.events.dispatch(PlayerDisconnected(player_id))

    def set_inventory(self, player_id: PlayerId, inventory: Inventory) -> None:
        """
        Replaces a player's inventory on its world thread and fires
        InventoryChanged from there.
        """
        session = self.get_player(player_id)
        world = self.get_world(session.world_id) if session else None
        if world is None:
            raise PlayerUnavailable(player_id, "not connected")

        def apply() -> None:
            eid = world.entity_ref(player_id)
            if eid is None:
                return
            current = world.component(eid, Player) or Player()
            world.add_component(eid, replace(current, inventory=inventory))
            self.events.dispatch(InventoryChanged(world, eid))

        world.execute(apply)

    # COMMANDS
    def run_command(self, sender: PlayerSession | None, line: str) -> CommandContext:
        ctx = CommandContext(self, sender)
        self.commands.dispatch(ctx, line)
        return ctx

    def _despawn(self, world: World, player_id: PlayerId) -> None:
        eid = world.entity_ref(player_id)
        if eid is not None:
            world.delete_entity(eid)
