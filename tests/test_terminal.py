import contextlib
import io

import blessed

from qrimage.terminal import TerminalWriter
from qrimage.writer import from_bitmap

TIP = "Press any key to quit."
BLOCK = "\u2588\u2588"


class StubTerminal:
    def __init__(self):
        self.stream = io.StringIO()
        self.home = ""
        self.clear = ""
        self.keys_read = 0

    def black_on_white(self, text):
        return "D" * len(text)

    def white_on_white(self, text):
        return "L" * len(text)

    def fullscreen(self):
        return contextlib.nullcontext()

    def cbreak(self):
        return contextlib.nullcontext()

    def hidden_cursor(self):
        return contextlib.nullcontext()

    def inkey(self):
        self.keys_read += 1
        return "q"


def test_render_plain_terminal_structure():
    mat = from_bitmap([[True, False, True], [False, True, False], [True, True, False]])
    writer = TerminalWriter(blessed.Terminal(force_styling=None))
    lines = writer.render(mat).split("\n")
    grid = lines[: mat.height + 2]
    assert all(line == BLOCK * (mat.width + 2) for line in grid)
    assert lines[-1] == TIP
    assert lines[mat.height + 2] == ""


def test_render_marks_dark_modules():
    bitmap = [[True, False], [False, True]]
    mat = from_bitmap(bitmap)
    writer = TerminalWriter(StubTerminal())
    lines = writer.render(mat).split("\n")
    for y, row in enumerate(bitmap):
        line = lines[y + 1]
        for x, dark in enumerate(row):
            cell = line[(x + 1) * 2:(x + 2) * 2]
            assert cell == ("DD" if dark else "LL")
    assert set(lines[0]) == {"L"}
    assert set(lines[len(bitmap) + 1]) == {"L"}


def test_render_dark_count_matches_bitmap():
    bitmap = [[(x + y) % 3 == 0 for x in range(5)] for y in range(5)]
    mat = from_bitmap(bitmap)
    text = TerminalWriter(StubTerminal()).render(mat)
    assert text.count("D") == 2 * sum(sum(row) for row in bitmap)


def test_write_outputs_render_and_waits_for_key():
    term = StubTerminal()
    writer = TerminalWriter(term)
    mat = from_bitmap([[True]])
    writer.write(mat)
    assert term.stream.getvalue() == writer.render(mat)
    assert term.keys_read == 1
    writer.close()
    assert term.keys_read == 1