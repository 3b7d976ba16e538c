from __future__ import annotations

import threading
from typing import Dict, Optional

from torchlight.brightness.light import clamp, clamp_rgb
from torchlight.types import PlayerId, Rgb


class DesiredStateTable:
    """
    What each player asked for: brightness, and at most one of tint or
    warmth. Setting one colour override removes the other in the same
    locked step. Safe to use from command and event threads at once.
    """

    def __init__(self) -> None:
        self._brightness: Dict[PlayerId, float] = {}
        self._tint: Dict[PlayerId, Rgb] = {}
        self._warmth: Dict[PlayerId, float] = {}
        self._lock = threading.Lock()

    def set_brightness(self, player: PlayerId, value: Optional[float]) -> None:
        """None clears the request, which reverts the player to the default light."""
        with self._lock:
            if value is None:
                self._brightness.pop(player, None)
            else:
                self._brightness[player] = float(value)

    def set_tint(self, player: PlayerId, rgb: Optional[Rgb]) -> None:
        with self._lock:
            if rgb is None:
                self._tint.pop(player, None)
                return
            self._warmth.pop(player, None)
            self._tint[player] = clamp_rgb(rgb)

    def set_warmth(self, player: PlayerId, warmth: Optional[float]) -> None:
        with self._lock:
            if warmth is None:
                self._warmth.pop(player, None)
                return
            self._tint.pop(player, None)
            self._warmth[player] = clamp(float(warmth), 0.0, 1.0)

    def brightness(self, player: PlayerId) -> Optional[float]:
        with self._lock:
            return self._brightness.get(player)

    def tint(self, player: PlayerId) -> Optional[Rgb]:
        with self._lock:
            return self._tint.get(player)

    def warmth(self, player: PlayerId) -> Optional[float]:
        with self._lock:
            return self._warmth.get(player)

    def has_brightness(self, player: PlayerId) -> bool:
        with self._lock:
            return player in self._brightness

    def contains(self, player: PlayerId) -> bool:
        """True if any attribute is stored for the player."""
        with self._lock:
            return player in self._brightness or player in self._tint or player in self._warmth

    def clear(self, player: PlayerId) -> None:
        with self._lock:
            self._brightness.pop(player, None)
            self._tint.pop(player, None)
            self._warmth.pop(player, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._brightness.keys() | self._tint.keys() | self._warmth.keys())
