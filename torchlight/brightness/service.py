from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from torchlight.brightness.host import LightHost, WorldLightHost
from torchlight.brightness.light import blend, clamp, max_light
from torchlight.brightness.settings import DEFAULT_SETTINGS, BrightnessSettings
from torchlight.brightness.state import DesiredStateTable
from torchlight.brightness.tracker import ActiveBoostTracker
from torchlight.core.components import ColorLight
from torchlight.core.world import World
from torchlight.errors import PlayerUnavailable
from torchlight.server.universe import Universe
from torchlight.types import PlayerId, Rgb

_LOGGER = logging.getLogger(__name__)

MSG_DISABLED = "Brightness boost disabled."
MSG_REVERTED = "No torch in your utility belt. Brightness reverted to normal."
MSG_NEED_ITEM = "Keep a torch in your utility belt to enable the brightness boost."


@dataclass(frozen=True)
class BoostStatus:
    brightness: Optional[float]
    tint: Optional[Rgb]
    warmth: Optional[float]
    active: bool
    baseline: Optional[ColorLight]


class BrightnessService:
    """
    Torch-only brightness boost. While a player keeps a torch in their
    utility belt, their DynamicLight is replaced by a brighter (and
    optionally tinted) one; without the torch it goes back to normal.

    Setters and clear_player() may be called from any thread.
    reconcile() must run on the player's world thread; sync_player()
    schedules it there.
    """

    def __init__(self, universe: Universe, settings: BrightnessSettings = DEFAULT_SETTINGS):
        self.universe = universe
        self.settings = settings
        self.desired = DesiredStateTable()
        self.boosts = ActiveBoostTracker()

    # DESIRED STATE
    def set_desired_brightness(self, player: PlayerId, value: Optional[float]) -> None:
        """None clears the boost and reverts to the normal light on next sync."""
        self.desired.set_brightness(player, value)

    def set_desired_tint(self, player: PlayerId, rgb: Optional[Rgb]) -> None:
        self.desired.set_tint(player, rgb)

    def set_desired_warmth(self, player: PlayerId, warmth: Optional[float]) -> None:
        """0.0 keeps the torch colour, 1.0 is the warmest tint."""
        self.desired.set_warmth(player, warmth)

    def has_state(self, player: PlayerId) -> bool:
        return self.desired.has_brightness(player) or self.boosts.is_active(player)

    def clear_player(self, player: PlayerId) -> None:
        self.desired.clear(player)
        self.boosts.deactivate(player)

    def status(self, player: PlayerId) -> BoostStatus:
        return BoostStatus(
            brightness=self.desired.brightness(player),
            tint=self.desired.tint(player),
            warmth=self.desired.warmth(player),
            active=self.boosts.is_active(player),
            baseline=self.boosts.baseline(player),
        )

    def clamp_brightness(self, value: float) -> float:
        return clamp(value, self.settings.min_brightness, self.settings.max_brightness)

    # SYNC
    def host_for(self, world: World) -> WorldLightHost:
        return WorldLightHost(world, self.universe, self.settings.item_keyword)

    def sync_player(self, world: World, player: PlayerId, announce: bool) -> None:
        """Schedules a reconcile on the world's thread. Safe from any thread."""
        host = self.host_for(world)
        host.run_on_owning_context(player, lambda: self.reconcile(host, player, announce))

    def reconcile(self, host: LightHost, player: PlayerId, announce: bool) -> Optional[ColorLight]:
        """
        Brings the player's light in line with what they asked for.
        Returns the light that was installed, or None if the override was
        removed or nothing was done.
        """
        try:
            return self._reconcile(host, player, announce)
        except PlayerUnavailable as e:
            _LOGGER.debug("Brightness sync skipped: %s", e)
            return None

    def _reconcile(self, host: LightHost, player: PlayerId, announce: bool) -> Optional[ColorLight]:
        desired = self.desired.brightness(player)
        if desired is None:
            was_active = self.boosts.is_active(player)
            self.boosts.deactivate(player)
            if was_active:
                host.remove_light(player)
                _LOGGER.debug("Boost removed for %s (cleared)", player)
            if announce:
                host.send_notice(player, MSG_DISABLED)
            return None

        if not host.has_qualifying_item(player):
            if self.boosts.is_active(player):
                self.boosts.deactivate(player)
                host.remove_light(player)
                _LOGGER.debug("Boost removed for %s (no torch)", player)
                host.send_notice(player, MSG_REVERTED)
            elif announce:
                host.send_notice(player, MSG_NEED_ITEM)
            return None

        clamped = self.clamp_brightness(desired)

        if self.boosts.is_active(player):
            baseline = self.boosts.baseline(player)
        else:
            # First activation: whatever is installed now is the real light
            baseline = host.get_light(player)

        requested = blend(
            clamped,
            baseline,
            self.desired.tint(player),
            self.desired.warmth(player),
            self.settings,
        )
        target = requested if baseline is None else max_light(baseline, requested)

        host.set_light(player, target)
        self.boosts.activate(player, baseline)
        if not self.desired.has_brightness(player):
            # clear_player() ran on another thread while we were working
            self.boosts.deactivate(player)
            host.remove_light(player)
            _LOGGER.debug("Boost for %s dropped, player was cleared mid-sync", player)
            return None
        _LOGGER.debug("Boost applied for %s: %s (baseline %s)", player, target, baseline)

        if announce:
            host.send_notice(
                player,
                f"Brightness tweaked to {clamped:g} (radius {target.radius}, "
                f"rgb {target.red}/{target.green}/{target.blue}).",
            )
        return target
