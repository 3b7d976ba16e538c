from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import pytest

from torchlight.brightness import BrightnessTweaksPlugin
from torchlight.core.components import ColorLight, Inventory, ItemStack
from torchlight.core.world import World
from torchlight.errors import PlayerUnavailable
from torchlight.server.universe import Universe


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Velocity:
    x: float
    y: float
    __soa_dtype__ = [("x", "f4"), ("y", "f4")]


@dataclass(frozen=True)
class Health:
    hp: int


TORCH = ItemStack("Furniture_Crude_Torch")
STICK = ItemStack("Ingredient_Stick")


def torch_inventory() -> Inventory:
    return Inventory(utility=(None, TORCH))


@dataclass
class FakeHost:
    """In-memory LightHost; tasks run immediately."""

    lights: Dict[object, ColorLight] = field(default_factory=dict)
    holding: Dict[object, bool] = field(default_factory=dict)
    notices: List[str] = field(default_factory=list)
    missing: set = field(default_factory=set)
    writes: int = 0

    def _check(self, player) -> None:
        if player in self.missing:
            raise PlayerUnavailable(player)

    def get_light(self, player) -> Optional[ColorLight]:
        self._check(player)
        return self.lights.get(player)

    def set_light(self, player, light: ColorLight) -> None:
        self._check(player)
        self.writes += 1
        self.lights[player] = light

    def remove_light(self, player) -> None:
        self._check(player)
        self.lights.pop(player, None)

    def has_qualifying_item(self, player) -> bool:
        self._check(player)
        return self.holding.get(player, False)

    def send_notice(self, player, text: str) -> None:
        self.notices.append(text)

    def run_on_owning_context(self, player, fn: Callable[[], None]) -> None:
        fn()


@pytest.fixture
def world():
    """Returns a fresh World instance for each test."""
    return World()


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def universe():
    return Universe()


@pytest.fixture
def overworld(universe):
    return universe.create_world("overworld")


@pytest.fixture
def plugin(universe):
    plugin = BrightnessTweaksPlugin(universe)
    plugin.enable()
    yield plugin
    plugin.shutdown()


@pytest.fixture
def player(universe, overworld):
    """A connected player with a torch in the utility belt, already spawned."""
    session = universe.connect("steve", overworld, inventory=torch_inventory())
    overworld.run_pending()
    return session
