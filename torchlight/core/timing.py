import time
from dataclasses import dataclass


@dataclass
class FixedStep:
    target_tps: int
    max_frame_time: float = 0.25
    max_steps_per_frame: int = 5

    _dt: float = 0.0
    _last_time: float = 0.0
    _accum: float = 0.0

    def __post_init__(self):
        if self.target_tps <= 0:
            raise ValueError(f"target_tps must be positive, got {self.target_tps}")
        self._dt = 1.0 / self.target_tps

    def start(self) -> None:
        """Call this right before the tick loop starts."""
        self._last_time = time.perf_counter()
        self._accum = 0.0

    def advance(self) -> int:
        """
        Advances the timer and returns how many fixed ticks
        should be run now.
        """
        now = time.perf_counter()
        frame_time = now - self._last_time
        self._last_time = now

        # Prevent spiral of death (lag causing more lag)
        if frame_time > self.max_frame_time:
            frame_time = self.max_frame_time

        self._accum += frame_time

        steps = 0
        while self._accum >= self._dt and steps < self.max_steps_per_frame:
            self._accum -= self._dt
            steps += 1

        # Still behind after max steps: drop the backlog instead of
        # fast-forwarding through it.
        if steps >= self.max_steps_per_frame:
            self._accum = 0.0

        return steps

    def remaining(self) -> float:
        """Seconds until the next tick is due."""
        return max(0.0, self._dt - self._accum)

    @property
    def dt(self) -> float:
        """The fixed delta time (e.g., 0.0333 for 30 tps)."""
        return self._dt
