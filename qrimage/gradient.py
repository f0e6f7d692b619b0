"""Linear colour gradients applied to the foreground of an image."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from PIL import Image

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class ColorStop:
    """A colour at position t (0.0 to 1.0) along the gradient line."""

    t: float
    color: RGBA


@dataclass
class LinearGradient:
    """Colour stops along a direction given in degrees (0 right, 90 up)."""

    stops: list[ColorStop] = field(default_factory=list)
    angle: float = 0.0

    def apply(self, img: Image.Image, fg_color: Sequence[int]) -> Image.Image:
        """Return an RGBA copy of img with every fg_color pixel recoloured."""
        src = img.convert("RGBA")
        out = src.copy()
        width, height = src.size

        rad = math.radians(self.angle)
        dx = math.cos(rad)
        dy = -math.sin(rad)

        corners = ((0, 0), (0, height), (width, 0), (width, height))
        projections = [px * dx + py * dy for px, py in corners]
        lo, hi = min(projections), max(projections)

        fg = tuple(fg_color)
        src_px = src.load()
        out_px = out.load()
        for y in range(height):
            for x in range(width):
                if src_px[x, y] == fg:
                    t = (x * dx + y * dy - lo) / (hi - lo)
                    out_px[x, y] = interpolate_color(self.stops, t)
        return out


def new_gradient(angle: float, *stops: ColorStop) -> LinearGradient:
    """Create a gradient with its stops sorted by position."""
    return LinearGradient(stops=sorted(stops, key=lambda s: s.t), angle=angle)


def interpolate_color(stops: Sequence[ColorStop], t: float) -> RGBA:
    """Return the colour at position t, clamped to the first and last stops."""
    if t <= stops[0].t:
        return stops[0].color
    if t >= stops[-1].t:
        return stops[-1].color
    for start, end in zip(stops, stops[1:]):
        if start.t <= t <= end.t:
            return blend_colors(start.color, end.color, (t - start.t) / (end.t - start.t))
    return (0, 0, 0, 255)


def blend_colors(c1: Sequence[int], c2: Sequence[int], t: float) -> RGBA:
    """Blend two colours linearly; the result is always opaque."""
    r, g, b = (int(a * (1 - t) + z * t) for a, z in zip(c1[:3], c2[:3]))
    return (r, g, b, 255)