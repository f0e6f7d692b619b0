"""Drawing surface and the shapes used to paint individual QR modules."""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from PIL import Image, ImageDraw

RGBA = tuple[int, int, int, int]
Point = tuple[float, float]

_CURVE_SEGMENTS = 16


def _to_rgba(color: Sequence[int]) -> RGBA:
    values = tuple(int(v) for v in color)
    if len(values) == 3:
        values = values + (255,)
    if len(values) != 4 or any(not 0 <= v <= 255 for v in values):
        raise ValueError(f"invalid colour {color!r}")
    return values  # type: ignore[return-value]


@dataclass(frozen=True)
class _Rect:
    x: float
    y: float
    w: float
    h: float


class Canvas:
    """An RGBA image with a path-based drawing API.

    Paths are built with move_to, line_to, quadratic_to, draw_rectangle and
    draw_circle, then painted over the image with fill().
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self._img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._color: RGBA = (0, 0, 0, 255)
        self._rects: list[_Rect] = []
        self._polys: list[list[Point]] = []
        self._current: Optional[list[Point]] = None

    @property
    def width(self) -> int:
        return self._img.width

    @property
    def height(self) -> int:
        return self._img.height

    def set_color(self, color: Sequence[int]) -> None:
        """Set the colour used by the next fill."""
        self._color = _to_rgba(color)

    def _finish_subpath(self) -> None:
        if self._current is not None and len(self._current) >= 3:
            self._polys.append(self._current)
        self._current = None

    def move_to(self, x: float, y: float) -> None:
        """Start a new sub-path at (x, y)."""
        self._finish_subpath()
        self._current = [(x, y)]

    def line_to(self, x: float, y: float) -> None:
        """Add a straight segment to (x, y)."""
        if self._current is None:
            self.move_to(x, y)
            return
        self._current.append((x, y))

    def quadratic_to(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Add a quadratic Bezier curve with control (x1, y1) ending at (x2, y2)."""
        if self._current is None:
            self.move_to(x1, y1)
        assert self._current is not None
        x0, y0 = self._current[-1]
        for i in range(1, _CURVE_SEGMENTS + 1):
            t = i / _CURVE_SEGMENTS
            a, b, c = (1 - t) ** 2, 2 * (1 - t) * t, t * t
            self._current.append((a * x0 + b * x1 + c * x2, a * y0 + b * y1 + c * y2))

    def close_path(self) -> None:
        """Close the current sub-path; the current point returns to its start."""
        if self._current is None:
            return
        start = self._current[0]
        self._finish_subpath()
        self._current = [start]

    def draw_rectangle(self, x: float, y: float, w: float, h: float) -> None:
        """Add an axis-aligned rectangle to the path."""
        self._finish_subpath()
        self._rects.append(_Rect(x, y, w, h))
        self._current = [(x, y)]

    def draw_circle(self, x: float, y: float, r: float) -> None:
        """Add a circle centred at (x, y) with radius r to the path."""
        self._finish_subpath()
        steps = max(24, int(2 * math.pi * abs(r)))
        points = [
            (x + r * math.cos(2 * math.pi * i / steps), y + r * math.sin(2 * math.pi * i / steps))
            for i in range(steps)
        ]
        self._polys.append(points)
        self._current = [points[0]]

    def _bounds(self) -> Optional[tuple[int, int, int, int]]:
        xs: list[float] = []
        ys: list[float] = []
        for rect in self._rects:
            xs += [rect.x, rect.x + rect.w]
            ys += [rect.y, rect.y + rect.h]
        for poly in self._polys:
            xs += [p[0] for p in poly]
            ys += [p[1] for p in poly]
        if not xs:
            return None
        x0 = max(0, math.floor(min(xs)) - 1)
        y0 = max(0, math.floor(min(ys)) - 1)
        x1 = min(self.width, math.ceil(max(xs)) + 1)
        y1 = min(self.height, math.ceil(max(ys)) + 1)
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, y0, x1, y1

    def fill(self) -> None:
        """Paint the current path with the current colour and clear the path."""
        self._finish_subpath()
        bounds = self._bounds()
        rects, polys = self._rects, self._polys
        self._rects, self._polys, self._current = [], [], None
        if bounds is None:
            return

        x0, y0, x1, y1 = bounds
        mask = Image.new("L", (x1 - x0, y1 - y0), 0)
        pen = ImageDraw.Draw(mask)
        for rect in rects:
            left, right = sorted((rect.x, rect.x + rect.w))
            top, bottom = sorted((rect.y, rect.y + rect.h))
            lo_x, hi_x = math.ceil(left - 0.5), math.ceil(right - 0.5) - 1
            lo_y, hi_y = math.ceil(top - 0.5), math.ceil(bottom - 0.5) - 1
            if lo_x <= hi_x and lo_y <= hi_y:
                pen.rectangle((lo_x - x0, lo_y - y0, hi_x - x0, hi_y - y0), fill=255)
        for poly in polys:
            pen.polygon([(px - x0 - 0.5, py - y0 - 0.5) for px, py in poly], fill=255)

        layer = Image.new("RGBA", mask.size, self._color)
        clear = Image.new("RGBA", mask.size, (0, 0, 0, 0))
        self._img.alpha_composite(Image.composite(layer, clear, mask), dest=(x0, y0))

    def draw_image(self, img: Image.Image, x: int, y: int) -> None:
        """Composite img over the canvas with its upper-left corner at (x, y)."""
        src = img.convert("RGBA")
        x, y = int(x), int(y)
        left, top = max(0, -x), max(0, -y)
        right = min(src.width, self.width - x)
        bottom = min(src.height, self.height - y)
        if left >= right or top >= bottom:
            return
        self._img.alpha_composite(src.crop((left, top, right, bottom)), dest=(x + left, y + top))

    def image(self) -> Image.Image:
        """Return a copy of the drawn image."""
        return self._img.copy()


class Neighbour(enum.IntFlag):
    """Bits for the cells of the 3x3 grid around a module."""

    TOP_LEFT = 1 << 0
    TOP = 1 << 1
    TOP_RIGHT = 1 << 2
    LEFT = 1 << 3
    SELF = 1 << 4
    RIGHT = 1 << 5
    BOT_LEFT = 1 << 6
    BOT = 1 << 7
    BOT_RIGHT = 1 << 8


@dataclass
class DrawContext:
    """The area one module occupies on the canvas, with its colour and neighbours."""

    canvas: Canvas
    x: float = 0.0
    y: float = 0.0
    w: int = 0
    h: int = 0
    color: Sequence[int] = (0, 0, 0, 255)
    neighbours: Neighbour = field(default_factory=lambda: Neighbour(0))

    def upper_left(self) -> tuple[float, float]:
        """Return the upper-left corner of the area."""
        return self.x, self.y

    def edge(self) -> tuple[int, int]:
        """Return the width and height available to the shape."""
        return self.w, self.h


class Shape(abc.ABC):
    """How a single module and the finder patterns are painted."""

    @abc.abstractmethod
    def draw(self, ctx: DrawContext) -> None:
        """Paint an ordinary module."""

    @abc.abstractmethod
    def draw_finder(self, ctx: DrawContext) -> None:
        """Paint a module that belongs to a finder pattern."""


class Rectangle(Shape):
    """Fills the whole module area."""

    def draw(self, ctx: DrawContext) -> None:
        canvas = ctx.canvas
        canvas.draw_rectangle(ctx.x, ctx.y, ctx.w, ctx.h)
        canvas.set_color(ctx.color)
        canvas.fill()

    def draw_finder(self, ctx: DrawContext) -> None:
        self.draw(ctx)


class Circle(Shape):
    """Fills the largest circle centred in the module area."""

    def draw(self, ctx: DrawContext) -> None:
        radius = min(ctx.w // 2, ctx.h // 2)
        cx, cy = ctx.x + ctx.w / 2.0, ctx.y + ctx.h / 2.0
        canvas = ctx.canvas
        canvas.draw_circle(cx, cy, radius)
        canvas.set_color(ctx.color)
        canvas.fill()

    def draw_finder(self, ctx: DrawContext) -> None:
        self.draw(ctx)


SHAPE_RECTANGLE: Shape = Rectangle()
SHAPE_CIRCLE: Shape = Circle()