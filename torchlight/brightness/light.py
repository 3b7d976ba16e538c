"""
Colour math for the brightness boost.

Everything here is pure: the same brightness, baseline, tint and warmth
always give the same ColorLight. Rounding is half-up so that results match
what players see in the client.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Union

from torchlight.brightness.settings import DEFAULT_SETTINGS, BrightnessSettings
from torchlight.constants import WHITE
from torchlight.core.components import ColorLight
from torchlight.types import Rgb


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize01(value: float, lo: float, hi: float) -> float:
    """Maps value from [lo, hi] onto [0, 1], clamping outside input."""
    if hi == lo:
        return 0.0
    return (clamp(value, lo, hi) - lo) / (hi - lo)


def lerp_int(a: int, b: int, t: float) -> int:
    t = clamp(t, 0.0, 1.0)
    return round_half_up(a + (b - a) * t)


def clamp_rgb(rgb: Rgb) -> Rgb:
    r, g, b = rgb
    return (
        int(clamp(r, 0, 255)),
        int(clamp(g, 0, 255)),
        int(clamp(b, 0, 255)),
    )


def resolve_tint(
    baseline: Optional[ColorLight],
    tint: Optional[Rgb] = None,
    warmth: Optional[float] = None,
    warm_tint: Rgb = DEFAULT_SETTINGS.warm_tint,
) -> Rgb:
    """
    Picks the colour the boosted light should have before it is scaled
    to the target intensity.

    An explicit tint wins. Otherwise warmth pulls the baseline colour
    (white if there is none) towards ``warm_tint``. With neither, the
    baseline colour is kept, or white without a baseline.
    """
    if tint is not None:
        return clamp_rgb(tint)

    base = baseline.rgb if baseline is not None else WHITE

    if warmth is not None:
        w = clamp(warmth, 0.0, 1.0)
        return (
            lerp_int(base[0], warm_tint[0], w),
            lerp_int(base[1], warm_tint[1], w),
            lerp_int(base[2], warm_tint[2], w),
        )

    return base


def scale_tint_channel(channel: int, intensity: int, max_tint: int) -> int:
    """Scales a channel so that the brightest channel lands on ``intensity``."""
    channel = int(clamp(channel, 0, 255))
    intensity = int(clamp(intensity, 0, 255))
    max_tint = int(clamp(max_tint, 1, 255))
    return int(clamp(round_half_up(channel * intensity / max_tint), 0, 255))


def blend(
    brightness: float,
    baseline: Optional[ColorLight] = None,
    tint: Optional[Rgb] = None,
    warmth: Optional[float] = None,
    settings: BrightnessSettings = DEFAULT_SETTINGS,
) -> ColorLight:
    """
    Computes the boosted light for a brightness in
    [min_brightness, max_brightness].

    The minimum reproduces the starting light (the baseline, or the dim
    default without one) and the maximum gives max radius and full
    intensity. Values in between are linear.
    """
    t = normalize01(brightness, settings.min_brightness, settings.max_brightness)

    if baseline is None:
        base_radius = settings.min_radius
        base_intensity = settings.min_intensity
    else:
        base_radius = baseline.radius
        base_intensity = baseline.intensity

    start_radius = int(clamp(base_radius, settings.min_radius, settings.max_radius))
    start_intensity = int(clamp(base_intensity, 1, settings.max_intensity))

    radius = lerp_int(start_radius, settings.max_radius, t)
    intensity = lerp_int(start_intensity, settings.max_intensity, t)

    r, g, b = resolve_tint(baseline, tint, warmth, settings.warm_tint)
    max_tint = max(1, r, g, b)

    return ColorLight(
        radius=int(clamp(radius, settings.min_radius, settings.max_radius)),
        red=scale_tint_channel(r, intensity, max_tint),
        green=scale_tint_channel(g, intensity, max_tint),
        blue=scale_tint_channel(b, intensity, max_tint),
    )


def max_light(a: ColorLight, b: ColorLight) -> ColorLight:
    """Channel-wise maximum, radius included."""
    return ColorLight(
        radius=max(a.radius, b.radius),
        red=max(a.red, b.red),
        green=max(a.green, b.green),
        blue=max(a.blue, b.blue),
    )


_HEX_RGB = re.compile(r"(?:#|0x)?([0-9a-f]{6}|[0-9a-f]{3})")


def parse_rgb(value: Union[str, int]) -> Rgb:
    """
    Parses ``#RRGGBB``, ``RRGGBB``, ``0xRRGGBB``, the ``#RGB`` shorthand
    or a packed integer. Integers above 24 bits are masked off.
    """
    if isinstance(value, int):
        packed = value
    else:
        match = _HEX_RGB.fullmatch(value.strip().lower())
        if match is None:
            raise ValueError(f"Not an RGB colour: {value!r}")
        text = match.group(1)
        if len(text) == 3:
            text = "".join(c * 2 for c in text)
        packed = int(text, 16)

    packed &= 0xFFFFFF
    return ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)


def format_rgb(rgb: Rgb) -> str:
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"
