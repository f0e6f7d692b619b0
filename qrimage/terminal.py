"""A writer that shows a matrix in the terminal and waits for a key."""

from __future__ import annotations

from typing import Any, Optional

import blessed

from .writer import IterDirection, Matrix, Writer

_BLOCK = "\u2588\u2588"
_TIP = "Press any key to quit."
_PADDING = 1


class TerminalWriter(Writer):
    """Prints each module as two block characters, black on white."""

    def __init__(self, term: Optional[Any] = None) -> None:
        self.term = term if term is not None else blessed.Terminal()

    def render(self, mat: Matrix) -> str:
        """Return the text shown for the matrix, including the quit tip."""
        padding = _PADDING
        cols = mat.width + 2 * padding
        rows = mat.height + 2 * padding
        grid = [[False] * cols for _ in range(rows)]

        last_row = 0
        for x, y, value in mat.iterate(IterDirection.ROW):
            grid[y + padding][x + padding] = value.is_set()
            last_row = y

        dark = self.term.black_on_white
        light = self.term.white_on_white
        lines = ["".join(dark(_BLOCK) if cell else light(_BLOCK) for cell in row) for row in grid]

        tip_row = last_row + 2 * padding + 2
        lines.extend([""] * (tip_row - len(lines)))
        lines.append(_TIP)
        return "\n".join(lines)

    def write(self, mat: Matrix) -> None:
        term = self.term
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            term.stream.write(term.home + term.clear + self.render(mat))
            term.stream.flush()
            term.inkey()

    def close(self) -> None:
        """Nothing to release: the terminal is restored when write returns."""
        return None