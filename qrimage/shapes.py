"""Ready-made module and finder drawers, and a shape assembled from them."""

from __future__ import annotations

from typing import Callable

from .shape import DrawContext, Neighbour, Shape

DrawFunc = Callable[[DrawContext], None]


def _has(mask: int, bits: int) -> bool:
    return int(mask) & int(bits) == int(bits)


class ComposableShape(Shape):
    """A shape whose module and finder drawing are supplied as functions."""

    def __init__(self, on_draw_finder: DrawFunc, on_draw: DrawFunc) -> None:
        self.on_draw_finder = on_draw_finder
        self.on_draw = on_draw

    def draw(self, ctx: DrawContext) -> None:
        self.on_draw(ctx)

    def draw_finder(self, ctx: DrawContext) -> None:
        self.on_draw_finder(ctx)


def assemble(draw_finder: DrawFunc, draw_block: DrawFunc) -> Shape:
    """Build a shape from a finder drawer and a module drawer."""
    return ComposableShape(draw_finder, draw_block)


def _fill_rect(ctx: DrawContext, x: float, y: float, w: float, h: float) -> None:
    ctx.canvas.draw_rectangle(x, y, w, h)
    ctx.canvas.fill()


def liquid_block() -> DrawFunc:
    """Modules that flow into their neighbours like drops of liquid."""

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        fw, fh = float(w), float(h)
        x, y = ctx.upper_left()
        cx, cy = x + fw / 2, y + fh / 2
        r = fw / 2
        l = fw / 2
        c = ctx.canvas
        c.set_color(ctx.color)

        def ang_top_right() -> None:
            c.move_to(cx, cy + r)
            c.line_to(cx - r, cy)
            c.line_to(cx - r, y)
            c.line_to(cx + r, y - l)
            c.quadratic_to(cx + r, cy - r, x + fw + l, cy - r)
            c.line_to(x + fw, cy + r)
            c.close_path()

        def ang_top_left() -> None:
            c.move_to(cx, cy + r)
            c.line_to(cx + r, cy)
            c.line_to(cx + r, y - l)
            c.line_to(cx - r, y - l)
            c.quadratic_to(cx - r, cy - r, x - l, cy - r)
            c.line_to(x - l, cy + r)
            c.close_path()

        def ang_bot_left() -> None:
            c.move_to(cx, cy - r)
            c.line_to(cx + r, cy)
            c.line_to(cx + r, y + fh + l)
            c.line_to(cx - r, y + fh + l)
            c.quadratic_to(cx - r, cy + r, x - l, cy + r)
            c.line_to(x - l, cy - r)
            c.close_path()

        def ang_bot_right() -> None:
            c.move_to(cx, cy - r)
            c.line_to(cx - r, cy)
            c.line_to(cx - r, y + fh + l)
            c.line_to(cx + r, y + fh + l)
            c.quadratic_to(cx + r, cy + r, x + fw + l, cy + r)
            c.line_to(x + fw, cy - r)
            c.close_path()

        mask = int(ctx.neighbours)
        n = Neighbour

        exact = {
            int(n.RIGHT | n.SELF): (cx, cy - r, fw / 2, 2 * r),
            int(n.TOP | n.SELF): (cx - r, y, 2 * r, fh / 2),
            int(n.LEFT | n.SELF): (x, cy - r, fw / 2, 2 * r),
            int(n.BOT | n.SELF): (cx - r, y + fh / 2, 2 * r, fh / 2),
            int(n.LEFT | n.SELF | n.RIGHT): (x - fw / 2, cy - r, 2 * fw, 2 * r),
        }
        if mask in exact:
            _fill_rect(ctx, *exact[mask])

        if _has(mask, n.LEFT | n.SELF | n.RIGHT):
            _fill_rect(ctx, x - fw / 2, cy - r, 2 * fw, 2 * r)
        if _has(mask, n.TOP | n.SELF | n.BOT):
            _fill_rect(ctx, cx - r, y - fh / 2, 2 * r, 2 * fh)
        if _has(mask, n.LEFT | n.SELF):
            _fill_rect(ctx, x, cy - r, fw / 2, 2 * r)
        if _has(mask, n.SELF | n.RIGHT):
            _fill_rect(ctx, cx, cy - r, fw / 2, 2 * r)
        if _has(mask, n.SELF | n.TOP):
            _fill_rect(ctx, cx - r, y, 2 * r, fh / 2)
        if _has(mask, n.SELF | n.BOT):
            _fill_rect(ctx, cx - r, y + fh / 2, 2 * r, fh / 2)

        corners = (
            (n.BOT | n.RIGHT | n.SELF, n.BOT_RIGHT, ang_bot_right),
            (n.BOT | n.LEFT | n.SELF, n.BOT_LEFT, ang_bot_left),
            (n.TOP | n.LEFT | n.SELF, n.TOP_LEFT, ang_top_left),
            (n.TOP | n.RIGHT | n.SELF, n.TOP_RIGHT, ang_top_right),
        )
        for required, diagonal, drawer in corners:
            if _has(mask, required) and not mask & int(diagonal):
                drawer()
                c.fill()

        c.draw_circle(cx, cy, r)
        c.fill()

    return draw


def hstripe_block(stripe_ratio: float) -> DrawFunc:
    """Round modules joined to their left and right neighbours.

    A ratio outside [0.6, 1.0] falls back to 0.85; the stripe itself is drawn
    at 0.9 of the module width.
    """
    if stripe_ratio < 0.6 or stripe_ratio > 1:
        stripe_ratio = 0.85

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        fw = float(w)
        x, y = ctx.upper_left()
        cx, cy = x + fw / 2, y + float(h) / 2
        r = fw * 0.9 / 2
        c = ctx.canvas
        c.set_color(ctx.color)
        mask = ctx.neighbours

        c.draw_circle(cx, cy, r)
        if _has(mask, Neighbour.LEFT | Neighbour.SELF):
            _fill_rect(ctx, x, cy - r, fw / 2, 2 * r)
        if _has(mask, Neighbour.RIGHT | Neighbour.SELF):
            _fill_rect(ctx, cx, cy - r, fw / 2, 2 * r)
        c.fill()

    return draw


def vstripe_block(stripe_ratio: float) -> DrawFunc:
    """Round modules joined to their upper and lower neighbours.

    A ratio outside [0.6, 1.0] falls back to 0.85.
    """
    if stripe_ratio < 0.6 or stripe_ratio > 1:
        stripe_ratio = 0.85

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        fw, fh = float(w), float(h)
        x, y = ctx.upper_left()
        cx, cy = x + fw / 2, y + fh / 2
        r = fw * stripe_ratio / 2
        c = ctx.canvas
        c.set_color(ctx.color)
        mask = ctx.neighbours

        c.draw_circle(cx, cy, r)
        if _has(mask, Neighbour.TOP | Neighbour.SELF):
            _fill_rect(ctx, cx - r, y, 2 * r, fh / 2)
        if _has(mask, Neighbour.BOT | Neighbour.SELF):
            _fill_rect(ctx, cx - r, cy, 2 * r, fh / 2)
        c.fill()

    return draw


def _chain(radius_ratio: float, vertical: bool, horizontal: bool) -> DrawFunc:
    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        fw, fh = float(w), float(h)
        x, y = ctx.upper_left()
        cx, cy = x + fw / 2, y + fh / 2
        r = fw * radius_ratio / 2
        l = r * 0.2
        c = ctx.canvas
        c.set_color(ctx.color)
        mask = ctx.neighbours

        c.draw_circle(cx, cy, r)
        if vertical:
            if _has(mask, Neighbour.TOP | Neighbour.SELF):
                _fill_rect(ctx, cx - l, y, 2 * l, fh / 2)
            if _has(mask, Neighbour.BOT | Neighbour.SELF):
                _fill_rect(ctx, cx - l, cy, 2 * l, fh / 2)
        if horizontal:
            if _has(mask, Neighbour.LEFT | Neighbour.SELF):
                _fill_rect(ctx, x, cy - l, fw / 2, 2 * l)
            if _has(mask, Neighbour.RIGHT | Neighbour.SELF):
                _fill_rect(ctx, cx, cy - l, fw / 2, 2 * l)
        c.fill()

    return draw


def chain_block() -> DrawFunc:
    """Round modules with narrow links to neighbours in all four directions."""
    return _chain(0.9, vertical=True, horizontal=True)


def vchain_block() -> DrawFunc:
    """Round modules with narrow links to the neighbours above and below."""
    return _chain(0.85, vertical=True, horizontal=False)


def hchain_block() -> DrawFunc:
    """Round modules with narrow links to the neighbours left and right."""
    return _chain(0.85, vertical=False, horizontal=True)


def square_blocks(size: float) -> DrawFunc:
    """A centred square of the given relative size (0.1 to 1.0, else 1.0)."""
    if size < 0.1 or size > 1.0:
        size = 1.0

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        x0, y0 = ctx.upper_left()
        cx, cy = x0 + w / 2, y0 + h / 2
        fw, fh = w * size, h * size
        c = ctx.canvas
        c.set_color(ctx.color)
        c.draw_rectangle(cx - fw / 2, cy - fh / 2, fw, fh)
        c.fill()

    return draw


def circle_blocks(size: float) -> DrawFunc:
    """A centred circle of the given relative size (0.1 to 1.0, else 1.0)."""
    if size < 0.1 or size > 1.0:
        size = 1.0

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        x0, y0 = ctx.upper_left()
        cx, cy = x0 + w / 2, y0 + h / 2
        c = ctx.canvas
        c.set_color(ctx.color)
        c.draw_circle(cx, cy, (w / 2) * size)
        c.fill()

    return draw


def rounded_finder() -> DrawFunc:
    """Finder modules with rounded outer corners and filleted inner corners."""

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        fw, fh = float(w), float(h)
        x, y = ctx.upper_left()
        lw, lh = fw / 2, fh / 2
        c = ctx.canvas
        c.set_color(ctx.color)

        mask = int(ctx.neighbours)
        n = Neighbour
        if not mask & int(n.SELF):
            return

        if mask == n.SELF | n.BOT | n.LEFT:
            c.move_to(x, y)
            c.quadratic_to(x + fw, y, x + fw, y + fh)
            c.line_to(x, y + fh + lh)
            c.quadratic_to(x, y + fh, x - lw, y + fh)
            c.close_path()
        elif mask == n.SELF | n.BOT | n.LEFT | n.BOT_LEFT:
            c.move_to(x, y)
            c.quadratic_to(x + fw, y, x + fw, y + fh)
            c.line_to(x, y + fh)
            c.close_path()
        elif mask == n.SELF | n.BOT | n.RIGHT:
            c.move_to(x, y + fh)
            c.quadratic_to(x, y, x + fw, y)
            c.line_to(x + fw + lw, y + fh)
            c.quadratic_to(x + fw, y + fh, x + fw, y + fh + lh)
            c.close_path()
        elif mask == n.SELF | n.BOT | n.RIGHT | n.BOT_RIGHT:
            c.move_to(x, y + fh)
            c.quadratic_to(x, y, x + fw, y)
            c.line_to(x + fw, y + fh)
            c.close_path()
        elif mask == n.SELF | n.TOP | n.RIGHT:
            c.move_to(x, y)
            c.quadratic_to(x, y + fh, x + fw, y + fh)
            c.line_to(x + fw + lw, y)
            c.quadratic_to(x + fw, y, x + fw, y - lh)
            c.close_path()
        elif mask == n.SELF | n.TOP | n.RIGHT | n.TOP_RIGHT:
            c.move_to(x, y)
            c.quadratic_to(x, y + fh, x + fw, y + fh)
            c.line_to(x + fw, y)
            c.close_path()
        elif mask == n.SELF | n.TOP | n.LEFT:
            c.move_to(x, y + fh)
            c.quadratic_to(x + fw, y + fh, x + fw, y)
            c.line_to(x, y - lh)
            c.quadratic_to(x, y, x - lw, y)
            c.close_path()
        elif mask == n.SELF | n.TOP | n.LEFT | n.TOP_LEFT:
            c.move_to(x, y + fh)
            c.quadratic_to(x + fw, y + fh, x + fw, y)
            c.line_to(x, y)
            c.close_path()
            c.fill()
        else:
            c.draw_rectangle(x, y, fw, fh)

        c.fill()

    return draw


def square_finder() -> DrawFunc:
    """Finder modules filling their whole area."""

    def draw(ctx: DrawContext) -> None:
        w, h = ctx.edge()
        x0, y0 = ctx.upper_left()
        c = ctx.canvas
        c.set_color(ctx.color)
        c.draw_rectangle(x0, y0, float(w), float(h))
        c.fill()

    return draw