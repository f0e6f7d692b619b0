"""Module matrices and the writer interface that renders them."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Iterator, Sequence


class QRType(enum.Enum):
    """The role a module plays inside a QR code symbol."""

    INIT = "init"
    DATA = "data"
    VERSION = "version"
    FORMAT = "format"
    FINDER = "finder"
    DARK = "dark"
    SPLITTER = "splitter"
    TIMING = "timing"


@dataclass(frozen=True)
class QRValue:
    """A single module: its role and whether it is dark."""

    type: QRType = QRType.INIT
    value: bool = False

    def is_set(self) -> bool:
        """Return True when the module is dark."""
        return self.value


class IterDirection(enum.Enum):
    """Order in which a matrix is walked."""

    ROW = "row"
    COLUMN = "column"


class Matrix:
    """A rectangular grid of QR modules addressed by (x, y)."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid matrix size {width}x{height}")
        self._width = width
        self._height = height
        self._cells = [[QRValue() for _ in range(width)] for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) is outside a {self._width}x{self._height} matrix")

    def set(self, x: int, y: int, value: QRValue) -> None:
        """Store a module value at (x, y)."""
        self._check(x, y)
        self._cells[y][x] = value

    def get(self, x: int, y: int) -> QRValue:
        """Return the module value at (x, y)."""
        self._check(x, y)
        return self._cells[y][x]

    def bitmap(self) -> list[list[bool]]:
        """Return dark/light flags as a list of rows, indexed [y][x]."""
        return [[cell.is_set() for cell in row] for row in self._cells]

    def iterate(self, direction: IterDirection = IterDirection.ROW) -> Iterator[tuple[int, int, QRValue]]:
        """Yield (x, y, value) for every module, row by row or column by column."""
        if direction is IterDirection.ROW:
            for y, row in enumerate(self._cells):
                for x, cell in enumerate(row):
                    yield x, y, cell
        else:
            for x in range(self._width):
                for y in range(self._height):
                    yield x, y, self._cells[y][x]


def from_bitmap(bitmap: Sequence[Sequence[bool]]) -> Matrix:
    """Build a matrix of data modules from rows of booleans."""
    rows = [list(row) for row in bitmap]
    width = len(rows[0]) if rows else 0
    if any(len(row) != width for row in rows):
        raise ValueError("all bitmap rows must have the same length")
    mat = Matrix(width, len(rows))
    for y, row in enumerate(rows):
        for x, dark in enumerate(row):
            mat.set(x, y, QRValue(QRType.DATA, bool(dark)))
    return mat


class Writer(abc.ABC):
    """Renders a matrix somewhere: a file, a stream, a terminal."""

    @abc.abstractmethod
    def write(self, mat: Matrix) -> None:
        """Render the matrix."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release whatever the writer holds."""

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class NonWriter(Writer):
    """A writer that discards everything."""

    def write(self, mat: Matrix) -> None:
        return None

    def close(self) -> None:
        return None