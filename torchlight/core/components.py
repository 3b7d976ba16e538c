from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from torchlight.core.component import Component
from torchlight.types import PlayerId


# --- LIGHT ---


@dataclass(frozen=True, slots=True)
class ColorLight:
    """
    Radius plus RGB intensity of a dynamic light. Every field is an
    unsigned byte, matching how DynamicLight is stored.
    """

    radius: int
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("radius", "red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be within 0..255, got {value}")

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def intensity(self) -> int:
        """Brightest channel."""
        return max(self.red, self.green, self.blue)


@dataclass(frozen=True)
class DynamicLight(Component):
    """
    Light that follows its entity around.
    """

    radius: int
    red: int
    green: int
    blue: int
    __soa_dtype__ = [
        ("radius", "u1"),
        ("red", "u1"),
        ("green", "u1"),
        ("blue", "u1"),
    ]

    @classmethod
    def of(cls, light: ColorLight) -> DynamicLight:
        return cls(light.radius, light.red, light.green, light.blue)

    @property
    def color_light(self) -> ColorLight:
        return ColorLight(self.radius, self.red, self.green, self.blue)


# --- PLAYER ---


@dataclass(frozen=True)
class PlayerRef(Component):
    """Links an entity to the connected player that controls it."""

    player_id: PlayerId
    username: str = ""


@dataclass(frozen=True)
class ItemStack:
    item_id: str
    quantity: int = 1

    @property
    def is_empty(self) -> bool:
        return self.quantity <= 0 or not self.item_id


@dataclass(frozen=True)
class Inventory:
    # The equipped utility item is tracked apart from the rest of the belt
    utility_item: Optional[ItemStack] = None
    utility: Tuple[Optional[ItemStack], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Player(Component):
    inventory: Inventory = field(default_factory=Inventory)
