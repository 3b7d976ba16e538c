from __future__ import annotations

from typing import Callable, Optional, Protocol

from torchlight.brightness.items import has_qualifying_item
from torchlight.constants import QUALIFYING_ITEM_KEYWORD
from torchlight.core.components import ColorLight, DynamicLight, Player
from torchlight.core.world import World
from torchlight.errors import PlayerUnavailable
from torchlight.server.universe import Universe
from torchlight.types import EntityId, PlayerId


class LightHost(Protocol):
    """
    What reconciliation needs from the outside world. Everything except
    run_on_owning_context must be called from the owning context.
    Methods raise PlayerUnavailable when the player cannot be resolved.
    """

    def get_light(self, player: PlayerId) -> Optional[ColorLight]: ...

    def set_light(self, player: PlayerId, light: ColorLight) -> None: ...

    def remove_light(self, player: PlayerId) -> None: ...

    def has_qualifying_item(self, player: PlayerId) -> bool: ...

    def send_notice(self, player: PlayerId, text: str) -> None: ...

    def run_on_owning_context(self, player: PlayerId, fn: Callable[[], None]) -> None: ...


class WorldLightHost:
    """LightHost backed by a World's DynamicLight and Player components."""

    def __init__(
        self,
        world: World,
        universe: Universe,
        item_keyword: str = QUALIFYING_ITEM_KEYWORD,
    ):
        self.world = world
        self.universe = universe
        self.item_keyword = item_keyword

    def _entity(self, player: PlayerId) -> EntityId:
        eid = self.world.entity_ref(player)
        if eid is None:
            raise PlayerUnavailable(player, f"no entity in world {self.world.name}")
        if not self.world.has(eid, Player):
            raise PlayerUnavailable(player, "entity has no Player component")
        return eid

    def get_light(self, player: PlayerId) -> Optional[ColorLight]:
        light = self.world.component(self._entity(player), DynamicLight)
        return light.color_light if light is not None else None

    def set_light(self, player: PlayerId, light: ColorLight) -> None:
        # add_component updates in place when the light already exists
        self.world.add_component(self._entity(player), DynamicLight.of(light))

    def remove_light(self, player: PlayerId) -> None:
        self.world.remove_component(self._entity(player), DynamicLight)

    def has_qualifying_item(self, player: PlayerId) -> bool:
        state = self.world.component(self._entity(player), Player)
        return state is not None and has_qualifying_item(state.inventory, self.item_keyword)

    def send_notice(self, player: PlayerId, text: str) -> None:
        session = self.universe.get_player(player)
        if session is not None:
            session.send_message(text)

    def run_on_owning_context(self, player: PlayerId, fn: Callable[[], None]) -> None:
        self.world.execute(fn)
