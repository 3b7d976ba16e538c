from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import List

from torchlight.types import PlayerId, WorldId

_LOGGER = logging.getLogger(__name__)


class GameMode(str, Enum):
    ADVENTURE = "adventure"
    CREATIVE = "creative"


class PlayerSession:
    """
    A connected player. The session outlives world changes but not the
    connection; once invalidated it silently drops messages.
    """

    def __init__(
        self,
        player_id: PlayerId,
        username: str,
        world_id: WorldId,
        game_mode: GameMode = GameMode.ADVENTURE,
    ):
        self.player_id = player_id
        self.username = username
        self.world_id = world_id
        self.game_mode = game_mode
        self._messages: List[str] = []
        self._lock = threading.Lock()
        self._valid = True

    def __repr__(self) -> str:
        return f"PlayerSession({self.username!r}, {self.player_id})"

    def is_valid(self) -> bool:
        return self._valid

    def invalidate(self) -> None:
        self._valid = False

    def send_message(self, text: str) -> None:
        if not self._valid:
            return
        _LOGGER.debug("-> %s: %s", self.username, text)
        with self._lock:
            self._messages.append(text)

    @property
    def messages(self) -> List[str]:
        with self._lock:
            return list(self._messages)

    def drain_messages(self) -> List[str]:
        with self._lock:
            drained, self._messages = self._messages, []
        return drained
