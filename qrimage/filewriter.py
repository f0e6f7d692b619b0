"""A writer that prints a matrix as half-block characters to a text stream."""

from __future__ import annotations

from itertools import zip_longest
from typing import Optional, TextIO

from .writer import Matrix, Writer

_UP = "\u2580"
_DOWN = "\u2584"
_FULL = "\u2588"
_SPACE = " "


def _glyph(top: bool, bottom: bool) -> str:
    if top and bottom:
        return _FULL
    if top:
        return _UP
    if bottom:
        return _DOWN
    return _SPACE


class FileWriter(Writer):
    """Draws two matrix rows per text line using block characters."""

    def __init__(self, out: Optional[TextIO]) -> None:
        self.out = out

    def write(self, mat: Matrix) -> None:
        if self.out is None:
            raise ValueError("nil file")
        rows = mat.bitmap()
        for top, bottom in zip_longest(rows[0::2], rows[1::2]):
            bottom = bottom or [False] * len(top)
            self.out.write("".join(_glyph(t, b) for t, b in zip(top, bottom)))
            self.out.write("\n")

    def close(self) -> None:
        """Leave the stream open; it belongs to the caller."""
        return None