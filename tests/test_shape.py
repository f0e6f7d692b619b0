import pytest
from PIL import Image

from qrimage.shape import (
    SHAPE_CIRCLE,
    SHAPE_RECTANGLE,
    Canvas,
    Circle,
    DrawContext,
    Neighbour,
    Rectangle,
)

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def white_canvas(size=100):
    canvas = Canvas(size, size)
    canvas.draw_rectangle(0, 0, size, size)
    canvas.set_color(WHITE)
    canvas.fill()
    return canvas


def test_rectangle_draw():
    canvas = white_canvas()
    ctx = DrawContext(canvas=canvas, x=0.0, y=0.0, w=50, h=50, color=BLACK)
    SHAPE_RECTANGLE.draw(ctx)
    img = canvas.image()
    assert img.getpixel((0, 0)) == BLACK
    assert img.getpixel((49, 49)) == BLACK
    assert img.getpixel((50, 50)) == WHITE
    assert img.getpixel((50, 0)) == WHITE


def test_rectangle_finder_same_as_draw():
    a, b = white_canvas(20), white_canvas(20)
    Rectangle().draw(DrawContext(canvas=a, x=5, y=5, w=10, h=10, color=BLACK))
    Rectangle().draw_finder(DrawContext(canvas=b, x=5, y=5, w=10, h=10, color=BLACK))
    assert a.image().tobytes() == b.image().tobytes()


def test_circle_draw():
    canvas = white_canvas()
    ctx = DrawContext(canvas=canvas, x=0.0, y=0.0, w=50, h=50, color=BLACK)
    SHAPE_CIRCLE.draw(ctx)
    img = canvas.image()
    assert img.getpixel((25, 25)) == BLACK
    assert img.getpixel((40, 25)) == BLACK
    assert img.getpixel((0, 0)) == WHITE
    assert img.getpixel((60, 25)) == WHITE


def test_circle_uses_smaller_edge():
    canvas = white_canvas()
    Circle().draw(DrawContext(canvas=canvas, x=0, y=0, w=50, h=20, color=BLACK))
    img = canvas.image()
    assert img.getpixel((25, 10)) == BLACK
    assert img.getpixel((5, 10)) == WHITE


def test_gg_style_circle():
    canvas = white_canvas()
    canvas.draw_circle(50, 50, 40)
    canvas.set_color(BLACK)
    canvas.fill()
    img = canvas.image()
    assert img.getpixel((50, 50)) == BLACK
    assert img.getpixel((5, 5)) == WHITE


def test_triangle_path():
    canvas = white_canvas(20)
    canvas.move_to(0, 0)
    canvas.line_to(10, 0)
    canvas.line_to(0, 10)
    canvas.close_path()
    canvas.set_color(BLACK)
    canvas.fill()
    img = canvas.image()
    assert img.getpixel((1, 1)) == BLACK
    assert img.getpixel((8, 8)) == WHITE


def test_quadratic_path():
    canvas = white_canvas(20)
    canvas.move_to(0, 0)
    canvas.quadratic_to(20, 0, 20, 20)
    canvas.line_to(0, 20)
    canvas.close_path()
    canvas.set_color(BLACK)
    canvas.fill()
    img = canvas.image()
    assert img.getpixel((2, 15)) == BLACK
    assert img.getpixel((18, 15)) == BLACK
    assert img.getpixel((18, 2)) == WHITE


def test_fill_blends_translucent_colour():
    canvas = white_canvas(10)
    canvas.draw_rectangle(0, 0, 10, 10)
    canvas.set_color((255, 0, 0, 128))
    canvas.fill()
    r, g, b, a = canvas.image().getpixel((5, 5))
    assert r == 255 and a == 255
    assert 120 <= g <= 135


def test_set_color_three_components_is_opaque():
    canvas = Canvas(4, 4)
    canvas.draw_rectangle(0, 0, 4, 4)
    canvas.set_color((10, 20, 30))
    canvas.fill()
    assert canvas.image().getpixel((2, 2)) == (10, 20, 30, 255)


def test_set_color_rejects_bad_values():
    with pytest.raises(ValueError):
        Canvas(4, 4).set_color((300, 0, 0))


def test_fill_without_path_keeps_image_empty():
    canvas = Canvas(8, 8)
    canvas.fill()
    assert canvas.image().getbbox() is None


def test_fill_clears_path():
    canvas = Canvas(8, 8)
    canvas.draw_rectangle(0, 0, 4, 4)
    canvas.set_color(BLACK)
    canvas.fill()
    canvas.set_color(WHITE)
    canvas.fill()
    assert canvas.image().getpixel((1, 1)) == BLACK


def test_draw_image_clips_negative_offset():
    canvas = Canvas(20, 20)
    canvas.draw_image(Image.new("RGB", (10, 10), (255, 0, 0)), -5, -5)
    img = canvas.image()
    assert img.getpixel((0, 0)) == (255, 0, 0, 255)
    assert img.getpixel((4, 4)) == (255, 0, 0, 255)
    assert img.getpixel((5, 5)) == (0, 0, 0, 0)


def test_canvas_rejects_negative_size():
    with pytest.raises(ValueError):
        Canvas(-1, 10)


def test_draw_context_accessors():
    ctx = DrawContext(canvas=Canvas(1, 1), x=3.5, y=4.0, w=7, h=9,
                      neighbours=Neighbour.SELF | Neighbour.TOP)
    assert ctx.upper_left() == (3.5, 4.0)
    assert ctx.edge() == (7, 9)
    assert int(ctx.neighbours) == 18