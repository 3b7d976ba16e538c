from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Tuple

from torchlight import constants
from torchlight.errors import TorchlightError


@dataclass(frozen=True, slots=True)
class BrightnessSettings:
    """Bounds and item rules for the brightness boost."""

    min_brightness: float = constants.MIN_BRIGHTNESS
    max_brightness: float = constants.MAX_BRIGHTNESS
    min_radius: int = constants.MIN_LIGHT_RADIUS
    max_radius: int = constants.MAX_LIGHT_RADIUS
    max_intensity: int = constants.MAX_LIGHT_INTENSITY
    warm_tint: Tuple[int, int, int] = constants.WARM_TINT
    item_keyword: str = constants.QUALIFYING_ITEM_KEYWORD

    def __post_init__(self) -> None:
        if not 0.0 <= self.min_brightness < self.max_brightness:
            raise TorchlightError(
                f"Brightness bounds must satisfy 0 <= min < max, "
                f"got {self.min_brightness}..{self.max_brightness}"
            )
        if not 0 < self.min_radius <= self.max_radius <= 255:
            raise TorchlightError(
                f"Radius bounds must satisfy 0 < min <= max <= 255, "
                f"got {self.min_radius}..{self.max_radius}"
            )
        if not 1 <= self.max_intensity <= 255:
            raise TorchlightError(f"max_intensity must be within 1..255, got {self.max_intensity}")
        if len(self.warm_tint) != 3 or any(not 0 <= c <= 255 for c in self.warm_tint):
            raise TorchlightError(f"warm_tint must be an RGB triple, got {self.warm_tint}")
        if not self.item_keyword:
            raise TorchlightError("item_keyword must not be empty")

    @property
    def min_intensity(self) -> int:
        """Intensity at minimum brightness when there is no baseline."""
        return max(1, int(self.max_intensity * self.min_brightness + 0.5))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BrightnessSettings:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise TorchlightError(f"Unknown brightness settings: {', '.join(sorted(unknown))}")

        values = dict(data)
        if "warm_tint" in values:
            values["warm_tint"] = tuple(values["warm_tint"])
        return cls(**values)


DEFAULT_SETTINGS = BrightnessSettings()
