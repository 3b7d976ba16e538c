from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from torchlight.constants import WORLD_TPS
from torchlight.core.timing import FixedStep
from torchlight.core.world import World

_LOGGER = logging.getLogger(__name__)


class WorldRunner:
    """
    Owns a world's thread: each fixed tick drains the world's task queue.
    """

    def __init__(self, world: World, tps: int = WORLD_TPS):
        self.world = world
        self.timer = FixedStep(target_tps=tps)
        self.ticks = 0
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name=f"World-{self.world.name}", daemon=True
        )
        self._thread.start()
        _LOGGER.info("World %s ticking at %d tps", self.world.name, self.timer.target_tps)

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        # Whatever was queued after the last tick still has to run
        self.world.run_pending()

    def tick(self) -> None:
        self.world.run_pending()
        self.ticks += 1

    def _loop(self) -> None:
        self.timer.start()
        while not self._stop.is_set():
            for _ in range(self.timer.advance()):
                self.tick()
            time.sleep(self.timer.remaining())
