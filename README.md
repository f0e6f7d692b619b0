# qrimage

`qrimage` takes a QR code matrix that has already been computed and renders it
in one of four forms:

- **Standard images.** The output is JPEG by default, or PNG if you ask for it.
  You can set colours, gradients, block size, borders, block shapes, logos and
  halftone backgrounds.
- **Compressed PNGs.** These are two-colour, palette-based images saved with
  the highest compression level.
- **Plain text.** The output uses half-block glyphs (`▀`, `▄`, `█`), and each
  text line covers two matrix rows.
- **The terminal.** The code is drawn full screen and stays there until a key
  is pressed.

## What it does not do

`qrimage` does not encode text or bytes into a QR code. It has no error
correction, no version selection and no masking. You supply the modules, and
it only renders them. It also has no command-line program, so everything is
done from Python.

## Building a matrix

```python
from qrimage.writer import from_bitmap

bitmap = [
    [True, False, True],
    [False, True, False],
    [True, False, True],
]
mat = from_bitmap(bitmap)
```

`from_bitmap` marks every module as a data module.

You can also build a matrix by hand:

- `Matrix(width, height)` creates a matrix in which every module is light.
- `Matrix.set(x, y, QRValue(QRType.FINDER, True))` gives a module its role and
  colour. The role can be `DATA`, `FINDER`, `TIMING` and so on.
- `Matrix.get`, `Matrix.bitmap()` and `Matrix.iterate(IterDirection.ROW)` let
  you inspect it. `bitmap()` returns rows indexed `[y][x]`. `iterate()` yields
  `(x, y, value)`.
- `width` and `height` are read-only properties.

A coordinate outside the matrix raises `IndexError`.

## Writing an image

```python
from qrimage.standard import new
from qrimage.options import (
    PngEncoder,
    with_bg_color_hex,
    with_fg_color_hex,
    with_qr_width,
    with_border_width,
    with_custom_image_encoder,
)

with new(
    "code.png",
    with_custom_image_encoder(PngEncoder()),
    with_bg_color_hex("#b8de6f"),
    with_fg_color_hex("#01c5c4"),
    with_qr_width(13),
    with_border_width(1, 2, 3, 4),
) as writer:
    writer.write(mat)
```

`new(filename, *options)` creates or truncates the file.

`StandardWriter(stream, *options)` writes to a binary stream that is already
open. Closing the writer closes that stream.

`qrimage.standard.draw(mat, options)` returns the rendered RGBA `PIL.Image`
without encoding it.

Each option is a callable that adjusts an `OutputImageOptions` instance:

- **Colours**
  - `with_bg_color` and `with_fg_color` accept a colour name, a grey level, or
    an RGB or RGBA sequence.
  - `with_bg_color_hex` and `with_fg_color_hex` accept `"#rrggbb"` or `"#rgb"`.
  - `with_bg_transparent` makes the background transparent. This only shows in
    PNG output.
- **Gradient**
  - `with_fg_gradient(new_gradient(angle, ColorStop(t, rgba), ...))` takes its
    names from `qrimage.gradient`.
  - The angle is in degrees: 0 points right and 90 points up.
- **Layout**
  - `with_qr_width(width)` sets the block size in pixels. It accepts 0 to 255
    and raises `ValueError` otherwise. A width of 0 falls back to 20.
  - `with_border_width(*widths)` sets the borders:
    - with no values, all four borders are 40;
    - one value sets every side;
    - two or three values set (top/bottom, right/left);
    - four or more values set top, right, bottom and left.
- **Shape**
  - `with_circle_shape()` draws round modules.
  - `with_custom_shape(shape)` uses a shape you provide.
- **Logo**
  - `with_logo_image(img)`, `with_logo_image_file_jpeg(path)` and
    `with_logo_image_file_png(path)` set the logo. If a file cannot be loaded,
    the failure is logged and the option is ignored.
  - The logo is centred. If it is larger than 1/5 of the image in either
    direction, it is skipped and a warning is logged. Change the limit with
    `with_logo_size_multiplier(n)`.
  - `with_logo_safe_zone()` leaves dark modules under the logo undrawn.
- **Halftone**
  - `with_halftone(path)` blends a black-and-white version of an image into
    the data modules.
- **Encoding**
  - `with_builtin_image_encoder(ImageFormat.JPEG | ImageFormat.PNG)` picks a
    built-in encoder.
  - `with_custom_image_encoder(encoder)` uses any `ImageEncoder` subclass.

`StandardWriter.attribute(dimension)` returns an `Attribute` before anything is
drawn. It gives the final width `w`, height `h`, `borders` and `block_width`.

## Custom shapes

`qrimage.shapes` has ready-made block and finder painters. `assemble` combines
a finder painter with a block painter:

```python
from qrimage.shapes import assemble, rounded_finder, liquid_block
from qrimage.options import with_custom_shape
from qrimage.standard import new

shape = assemble(rounded_finder(), liquid_block())
with new("liquid.jpeg", with_custom_shape(shape)) as writer:
    writer.write(mat)
```

The painters available are:

- **Block painters:** `liquid_block`, `hstripe_block`, `vstripe_block`,
  `chain_block`, `hchain_block`, `vchain_block`, `square_blocks(size)` and
  `circle_blocks(size)`.
- **Finder painters:** `rounded_finder` and `square_finder`.

Each painter receives a `qrimage.shape.DrawContext`. It offers:

- `upper_left()` and `edge()`;
- the module's `color`;
- a `Neighbour` bitmask of the dark modules around it;
- the `canvas` to draw on, a `Canvas` with `move_to`, `line_to`,
  `quadratic_to`, `close_path`, `draw_rectangle`, `draw_circle` and `fill`.

You can also subclass `qrimage.shape.Shape` directly.

## Other writers

```python
import sys
from qrimage.filewriter import FileWriter

FileWriter(sys.stdout).write(mat)
```

- `qrimage.filewriter.FileWriter(out)` prints to a text stream. The stream is
  left open.
- `qrimage.compressed.new(filename, Option(padding=4, block_size=2))` writes a
  minimal two-colour PNG. `CompressedWriter(stream, option)` does the same to
  an open binary stream.
- `qrimage.terminal.TerminalWriter()` draws the code with `blessed` and waits
  for a key. `render(mat)` returns the text it would show.
- `qrimage.writer.NonWriter` discards everything.

Every writer has the same `write(mat)` / `close()` pair, as defined by
`qrimage.writer.Writer`, and can be used as a context manager.

## Image helpers

`qrimage.imgkit` provides `read`, `save`, `gray`, `binaryzation` and `scale`.
`save` chooses JPEG or PNG from the file extension.

## Tests

```
pip install -e ".[test]"
pytest
```