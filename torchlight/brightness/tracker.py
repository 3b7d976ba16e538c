from __future__ import annotations

import threading
from typing import Dict, Optional, Set

from torchlight.core.components import ColorLight
from torchlight.types import PlayerId


class ActiveBoostTracker:
    """
    Which players currently have the override installed, and the light
    they had right before it went on.
    """

    def __init__(self) -> None:
        self._active: Set[PlayerId] = set()
        self._baselines: Dict[PlayerId, ColorLight] = {}
        self._lock = threading.Lock()

    def is_active(self, player: PlayerId) -> bool:
        with self._lock:
            return player in self._active

    def baseline(self, player: PlayerId) -> Optional[ColorLight]:
        with self._lock:
            return self._baselines.get(player)

    def activate(self, player: PlayerId, baseline: Optional[ColorLight]) -> bool:
        """
        Marks the boost as installed. The baseline is only recorded on the
        first activation so later syncs cannot replace the real pre-boost
        light with the override. Returns True if the player was inactive.
        """
        with self._lock:
            if player in self._active:
                return False
            self._active.add(player)
            if baseline is not None:
                self._baselines[player] = baseline
            else:
                self._baselines.pop(player, None)
            return True

    def deactivate(self, player: PlayerId) -> Optional[ColorLight]:
        """Clears the flag and baseline, returning the baseline."""
        with self._lock:
            self._active.discard(player)
            return self._baselines.pop(player, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)
