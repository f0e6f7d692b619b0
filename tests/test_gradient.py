from PIL import Image

from qrimage.gradient import (
    ColorStop,
    LinearGradient,
    blend_colors,
    interpolate_color,
    new_gradient,
)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def test_new_gradient_sorts_stops():
    g = new_gradient(45, ColorStop(1.0, BLUE), ColorStop(0.0, RED), ColorStop(0.5, WHITE))
    assert [s.t for s in g.stops] == [0.0, 0.5, 1.0]
    assert g.angle == 45


def test_interpolate_clamps_to_ends():
    stops = [ColorStop(0.2, RED), ColorStop(0.8, BLUE)]
    assert interpolate_color(stops, -1.0) == RED
    assert interpolate_color(stops, 0.2) == RED
    assert interpolate_color(stops, 0.8) == BLUE
    assert interpolate_color(stops, 5.0) == BLUE


def test_interpolate_matches_blend_between_stops():
    stops = [ColorStop(0.0, RED), ColorStop(1.0, BLUE)]
    assert interpolate_color(stops, 0.25) == blend_colors(RED, BLUE, 0.25)


def test_blend_endpoints_and_opacity():
    c1 = (10, 20, 30, 0)
    c2 = (200, 100, 50, 7)
    assert blend_colors(c1, c2, 0.0) == (10, 20, 30, 255)
    assert blend_colors(c1, c2, 1.0) == (200, 100, 50, 255)
    assert blend_colors(c1, c2, 0.5)[3] == 255


def test_apply_leaves_background_alone():
    img = Image.new("RGBA", (4, 4), WHITE)
    img.putpixel((1, 1), BLACK)
    g = new_gradient(0, ColorStop(0.0, RED), ColorStop(1.0, BLUE))
    out = g.apply(img, BLACK)
    assert out.getpixel((0, 0)) == WHITE
    assert out.getpixel((3, 3)) == WHITE
    assert out.getpixel((1, 1)) != BLACK
    assert out.size == img.size


def test_apply_horizontal_progression():
    img = Image.new("RGBA", (10, 1), BLACK)
    g = new_gradient(0, ColorStop(0.0, RED), ColorStop(1.0, BLUE))
    out = g.apply(img, BLACK)
    row = [out.getpixel((x, 0)) for x in range(10)]
    assert row[0] == RED
    reds = [c[0] for c in row]
    blues = [c[2] for c in row]
    assert reds == sorted(reds, reverse=True)
    assert blues == sorted(blues)


def test_apply_does_not_modify_input():
    img = Image.new("RGBA", (3, 3), BLACK)
    LinearGradient([ColorStop(0.0, RED), ColorStop(1.0, BLUE)], 90).apply(img, BLACK)
    assert set(img.getdata()) == {BLACK}