"""The standard image writer: renders a matrix into a JPEG or PNG image."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional, Sequence

from PIL import Image

from . import imgkit
from .options import RGBA, Attribute, ImageOption, OutputImageOptions
from .shape import Canvas, DrawContext, Neighbour
from .writer import IterDirection, Matrix, QRType, Writer

logger = logging.getLogger(__name__)

_NEIGHBOUR_OFFSETS = (
    (-1, -1, Neighbour.TOP_LEFT),
    (0, -1, Neighbour.TOP),
    (1, -1, Neighbour.TOP_RIGHT),
    (-1, 0, Neighbour.LEFT),
    (1, 0, Neighbour.RIGHT),
    (-1, 1, Neighbour.BOT_LEFT),
    (0, 1, Neighbour.BOT),
    (1, 1, Neighbour.BOT_RIGHT),
)

_HALFTONE_THRESHOLD = 60


class StandardWriter(Writer):
    """Draws a matrix as an image and encodes it into a binary stream."""

    def __init__(self, stream: Optional[BinaryIO], *options: ImageOption) -> None:
        if stream is None:
            raise ValueError("stream could not be None")
        self.options = OutputImageOptions()
        for apply in options:
            apply(self.options)
        self.stream = stream

    def write(self, mat: Matrix) -> None:
        img = draw(mat, self.options)
        self.options.image_encoder.encode(self.stream, img)

    def close(self) -> None:
        self.stream.close()

    def attribute(self, dimension: int) -> Attribute:
        """Size of the image a matrix of the given dimension produces."""
        return self.options.attribute(dimension)


def new(filename: str | os.PathLike, *options: ImageOption) -> StandardWriter:
    """Create (or truncate) a file and return a writer bound to it."""
    return StandardWriter(open(filename, "wb"), *options)


def draw(mat: Matrix, options: Optional[OutputImageOptions] = None) -> Image.Image:
    """Render the matrix into an RGBA image according to the options."""
    opt = options if options is not None else OutputImageOptions()
    top, right, bottom, left = opt.border_widths
    block = opt.block_width()
    w = mat.width * block + left + right
    h = mat.height * block + top + bottom

    canvas = Canvas(w, h)
    canvas.set_color(opt.background_color())
    canvas.draw_rectangle(0, 0, w, h)
    canvas.fill()

    ctx = DrawContext(canvas, w=block, h=block, color=(0, 0, 0, 255))
    shape = opt.get_shape()

    halftone: Optional[Image.Image] = None
    halftone_w = block / 3.0
    if opt.halftone_img is not None:
        side = mat.width * 3
        halftone = imgkit.binaryzation(imgkit.scale(opt.halftone_img, (side, side)), _HALFTONE_THRESHOLD)

    logo = opt.logo
    logo_valid = False
    logo_w = logo_h = 0
    if logo is not None:
        logo_w, logo_h = logo.size
        logo_valid = valid_logo_image(w, h, logo_w, logo_h, opt.logo_size_multiplier)
    safe_zone = logo_valid and opt.logo_safe_zone

    def overlaps(x: int, y: int) -> bool:
        return block_overlaps_logo(x, y, block, left, top, w, h, logo_w, logo_h)

    bitmap = mat.bitmap()
    if safe_zone:
        for x, y, _ in mat.iterate(IterDirection.ROW):
            if overlaps(x, y):
                bitmap[y][x] = False

    for x, y, value in mat.iterate(IterDirection.ROW):
        if safe_zone and value.is_set() and overlaps(x, y):
            continue

        ctx.x = float(x * block + left)
        ctx.y = float(y * block + top)
        ctx.w = ctx.h = block
        ctx.color = opt.translate_to_rgba(value)
        ctx.neighbours = get_neighbours(bitmap, x, y)

        if value.type is QRType.FINDER:
            shape.draw_finder(ctx)
        elif value.type is QRType.DATA and halftone is not None:
            sub = int(halftone_w)
            for i in range(3):
                for j in range(3):
                    if i == 1 and j == 1:
                        color: Sequence[int] = ctx.color
                    else:
                        color = halftone_color(halftone, opt.bg_transparent, x * 3 + i, y * 3 + j)
                    shape.draw(
                        DrawContext(
                            canvas,
                            x=ctx.x + i * halftone_w,
                            y=ctx.y + j * halftone_w,
                            w=sub,
                            h=sub,
                            color=color,
                        )
                    )
        else:
            shape.draw(ctx)

    if opt.qr_gradient is not None:
        canvas.draw_image(opt.qr_gradient.apply(canvas.image(), opt.qr_color), 0, 0)

    if logo is not None:
        if logo_valid:
            canvas.draw_image(logo, (w - logo_w) // 2, (h - logo_h) // 2)
        else:
            logger.warning(
                "w=%d, h=%d, logoW=%d, logoH=%d, logo is over than 1/%d of QRCode",
                w, h, logo_w, logo_h, opt.logo_size_multiplier,
            )

    return canvas.image()


def get_neighbours(bitmap: Sequence[Sequence[bool]], x: int, y: int) -> Neighbour:
    """Flags for the dark cells among (x, y) and its eight neighbours; bitmap is [y][x]."""
    result = Neighbour(0)
    rows = len(bitmap)
    if rows == 0:
        return result
    cols = len(bitmap[0])

    def dark(cx: int, cy: int) -> bool:
        return 0 <= cy < rows and 0 <= cx < cols and bool(bitmap[cy][cx])

    if dark(x, y):
        result |= Neighbour.SELF
    for dx, dy, flag in _NEIGHBOUR_OFFSETS:
        if dark(x + dx, y + dy):
            result |= flag
    return result


def halftone_color(img: Image.Image, transparent: bool, x: int, y: int) -> RGBA:
    """Colour of a halftone sub-block: white (or clear) for white pixels, black otherwise."""
    if not (0 <= x < img.width and 0 <= y < img.height):
        return (0, 0, 0, 255)
    if img.mode != "L":
        logger.warning("halftone_color: not a grey image, got mode %s", img.mode)
        return tuple(img.convert("RGBA").getpixel((x, y)))  # type: ignore[return-value]
    if img.getpixel((x, y)) == 255:
        return (0, 0, 0, 0) if transparent else (255, 255, 255, 255)
    return (0, 0, 0, 255)


def valid_logo_image(qr_width: int, qr_height: int, logo_width: int, logo_height: int, multiplier: int) -> bool:
    """True when the logo is at most 1/multiplier of the image in both directions."""
    return qr_width >= multiplier * logo_width and qr_height >= multiplier * logo_height


def block_overlaps_logo(
    x: int, y: int, block_size: int, left: int, top: int, w: int, h: int, logo_width: int, logo_height: int
) -> bool:
    """True when module (x, y) intersects the centred logo area."""
    block_left = x * block_size + left
    block_top = y * block_size + top
    block_right = block_left + block_size
    block_bottom = block_top + block_size

    logo_left = (w - logo_width) // 2
    logo_top = (h - logo_height) // 2
    logo_right = logo_left + logo_width
    logo_bottom = logo_top + logo_height

    return (
        block_right > logo_left
        and block_left < logo_right
        and block_bottom > logo_top
        and block_top < logo_bottom
    )