# torchlight/brightness/__init__.py
from torchlight.brightness.command import BrightnessCommand
from torchlight.brightness.host import LightHost, WorldLightHost
from torchlight.brightness.light import blend, max_light, parse_rgb
from torchlight.brightness.plugin import BrightnessTweaksPlugin
from torchlight.brightness.service import BoostStatus, BrightnessService
from torchlight.brightness.settings import DEFAULT_SETTINGS, BrightnessSettings
from torchlight.brightness.state import DesiredStateTable
from torchlight.brightness.tracker import ActiveBoostTracker

__all__ = [
    "ActiveBoostTracker",
    "BoostStatus",
    "BrightnessCommand",
    "BrightnessService",
    "BrightnessSettings",
    "BrightnessTweaksPlugin",
    "DEFAULT_SETTINGS",
    "DesiredStateTable",
    "LightHost",
    "WorldLightHost",
    "blend",
    "max_light",
    "parse_rgb",
]
