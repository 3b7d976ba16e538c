from typing import Tuple

# Brightness
MIN_BRIGHTNESS: float = 0.01
MAX_BRIGHTNESS: float = 1.0

# Dynamic light
MIN_LIGHT_RADIUS: int = 6
MAX_LIGHT_RADIUS: int = 32
MAX_LIGHT_INTENSITY: int = 255

# Tint
WHITE: Tuple[int, int, int] = (255, 255, 255)
WARM_TINT: Tuple[int, int, int] = (255, 220, 170)

# Items
QUALIFYING_ITEM_KEYWORD: str = "Torch"

# Server
WORLD_TPS: int = 30
