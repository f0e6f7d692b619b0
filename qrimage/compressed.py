"""A writer producing small two-colour PNG images."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

from PIL import Image, ImageDraw

from .writer import IterDirection, Matrix, Writer

_BACKGROUND = 0
_FOREGROUND = 1
_PALETTE = [255, 255, 255, 0, 0, 0]


@dataclass
class Option:
    """Padding around the code and size of each module, in pixels."""

    padding: int
    block_size: int


class CompressedWriter(Writer):
    """Writes a matrix as a paletted PNG with maximum compression."""

    def __init__(self, stream: BinaryIO, option: Option) -> None:
        self.stream = stream
        self.option = option

    def write(self, mat: Matrix) -> None:
        padding = self.option.padding
        block = self.option.block_size
        size = mat.width * block + 2 * padding

        img = Image.new("P", (size, size), _BACKGROUND)
        img.putpalette(_PALETTE)
        draw = ImageDraw.Draw(img)

        if block > 0:
            for x, y, value in mat.iterate(IterDirection.COLUMN):
                if value.is_set():
                    sx = x * block + padding
                    sy = y * block + padding
                    draw.rectangle((sx, sy, sx + block - 1, sy + block - 1), fill=_FOREGROUND)

        img.save(self.stream, format="PNG", optimize=True, compress_level=9)

    def close(self) -> None:
        self.stream.close()


def new(filename: str | os.PathLike, option: Option) -> CompressedWriter:
    """Open a file for writing and return a writer bound to it."""
    return CompressedWriter(open(filename, "wb"), option)