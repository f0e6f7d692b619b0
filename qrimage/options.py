"""Options controlling how a QR matrix is rendered into an image."""

from __future__ import annotations

import abc
import enum
import logging
import string
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Optional, Sequence, Union

from PIL import Image, ImageColor

from . import imgkit
from .gradient import LinearGradient
from .shape import SHAPE_CIRCLE, SHAPE_RECTANGLE, Shape
from .writer import QRValue

logger = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
ColorLike = Union[str, int, Sequence[int]]

DEFAULT_PADDING = 40


class ImageFormat(enum.Enum):
    """Built-in output formats."""

    JPEG = 0
    PNG = 1


class ImageEncoder(abc.ABC):
    """Encodes an image into a binary stream."""

    @abc.abstractmethod
    def encode(self, stream: BinaryIO, img: Image.Image) -> None:
        """Write img into stream."""


class JpegEncoder(ImageEncoder):
    """Encodes as JPEG with quality 75."""

    def encode(self, stream: BinaryIO, img: Image.Image) -> None:
        img.convert("RGB").save(stream, format="JPEG", quality=75)


class PngEncoder(ImageEncoder):
    """Encodes as PNG."""

    def encode(self, stream: BinaryIO, img: Image.Image) -> None:
        img.save(stream, format="PNG")


@dataclass(frozen=True)
class Attribute:
    """Size of a generated image, its borders (top, right, bottom, left) and block width."""

    w: int
    h: int
    borders: tuple[int, int, int, int]
    block_width: int


def parse_from_hex(s: str) -> RGBA:
    """Parse "#rrggbb" or "#rgb" into an opaque RGBA tuple."""
    if len(s) == 7:
        parts, factor = [s[1:3], s[3:5], s[5:7]], 1
    elif len(s) == 4:
        parts, factor = list(s[1:4]), 17
    else:
        raise ValueError("invalid length, must be 7 or 4")
    if s[0] != "#" or any(ch not in string.hexdigits for ch in s[1:]):
        raise ValueError(f"invalid hex colour {s!r}")
    r, g, b = (int(part, 16) * factor for part in parts)
    return (r, g, b, 255)


def parse_from_color(c: ColorLike) -> RGBA:
    """Turn a colour name, grey level or RGB(A) sequence into an RGBA tuple."""
    if isinstance(c, str):
        return ImageColor.getcolor(c, "RGBA")  # type: ignore[return-value]
    if isinstance(c, int):
        values: tuple[int, ...] = (c, c, c, 255)
    else:
        values = tuple(int(v) for v in c)
        if len(values) == 3:
            values = values + (255,)
    if len(values) != 4 or any(not 0 <= v <= 255 for v in values):
        raise ValueError(f"invalid colour {c!r}")
    return values  # type: ignore[return-value]


@dataclass
class OutputImageOptions:
    """Everything the image writer needs to know; defaults match a plain black-on-white code."""

    bg_color: RGBA = (255, 255, 255, 255)
    bg_transparent: bool = False
    qr_color: RGBA = (0, 0, 0, 255)
    qr_gradient: Optional[LinearGradient] = None
    logo: Optional[Image.Image] = None
    logo_size_multiplier: int = 5
    logo_safe_zone: bool = False
    qr_width: int = 20
    shape: Optional[Shape] = SHAPE_RECTANGLE
    image_encoder: ImageEncoder = field(default_factory=JpegEncoder)
    border_widths: tuple[int, int, int, int] = (
        DEFAULT_PADDING,
        DEFAULT_PADDING,
        DEFAULT_PADDING,
        DEFAULT_PADDING,
    )
    halftone_img: Optional[Image.Image] = None

    def background_color(self) -> RGBA:
        """Background colour, with zero alpha when the background is transparent."""
        if self.bg_transparent:
            r, g, b, _ = self.bg_color
            return (r, g, b, 0)
        return self.bg_color

    def block_width(self) -> int:
        """Width of one module in pixels, falling back to 20 when out of range."""
        if self.qr_width <= 0 or self.qr_width > 255:
            return 20
        return self.qr_width

    def get_shape(self) -> Shape:
        """The module shape, rectangles by default."""
        return self.shape if self.shape is not None else SHAPE_RECTANGLE

    def attribute(self, dimension: int) -> Attribute:
        """Size of the image that a matrix of the given dimension produces."""
        top, right, bottom, left = self.border_widths
        block = self.block_width()
        return Attribute(
            w=dimension * block + right + left,
            h=dimension * block + top + bottom,
            borders=tuple(self.border_widths),  # type: ignore[arg-type]
            block_width=block,
        )

    def translate_to_rgba(self, value: QRValue) -> RGBA:
        """Foreground colour for dark modules, background colour otherwise."""
        if value.is_set():
            return self.qr_color
        if self.bg_transparent:
            return (0, 0, 0, 0)
        return self.bg_color


ImageOption = Callable[[OutputImageOptions], None]


def with_bg_transparent() -> ImageOption:
    """Make the background transparent (only visible in PNG output)."""
    def apply(oo: OutputImageOptions) -> None:
        oo.bg_transparent = True
    return apply


def with_bg_color(c: Optional[ColorLike]) -> ImageOption:
    """Set the background colour; None leaves it unchanged."""
    def apply(oo: OutputImageOptions) -> None:
        if c is not None:
            oo.bg_color = parse_from_color(c)
    return apply


def with_bg_color_hex(hex_str: str) -> ImageOption:
    """Set the background colour from a hex string; an empty string leaves it unchanged."""
    def apply(oo: OutputImageOptions) -> None:
        if hex_str:
            oo.bg_color = parse_from_hex(hex_str)
    return apply


def with_fg_color(c: Optional[ColorLike]) -> ImageOption:
    """Set the foreground colour; None leaves it unchanged."""
    def apply(oo: OutputImageOptions) -> None:
        if c is not None:
            oo.qr_color = parse_from_color(c)
    return apply


def with_fg_color_hex(hex_str: str) -> ImageOption:
    """Set the foreground colour from a hex string."""
    def apply(oo: OutputImageOptions) -> None:
        oo.qr_color = parse_from_hex(hex_str)
    return apply


def with_fg_gradient(gradient: Optional[LinearGradient]) -> ImageOption:
    """Paint the foreground with a gradient; ignored when it has no stops."""
    def apply(oo: OutputImageOptions) -> None:
        if gradient is not None and gradient.stops:
            oo.qr_gradient = gradient
    return apply


def with_logo_image(img: Optional[Image.Image]) -> ImageOption:
    """Place img in the centre of the code."""
    def apply(oo: OutputImageOptions) -> None:
        if img is not None:
            oo.logo = img
    return apply


def _load_logo(path: str, fmt: str) -> Optional[Image.Image]:
    try:
        with Image.open(path, formats=[fmt]) as img:
            img.load()
            return img.copy()
    except OSError as exc:
        logger.warning("could not load %s logo from %s: %s", fmt, path, exc)
        return None


def with_logo_image_file_jpeg(path: str) -> ImageOption:
    """Load the logo from a JPEG file; failures are logged and ignored."""
    def apply(oo: OutputImageOptions) -> None:
        img = _load_logo(path, "JPEG")
        if img is not None:
            oo.logo = img
    return apply


def with_logo_image_file_png(path: str) -> ImageOption:
    """Load the logo from a PNG file; failures are logged and ignored."""
    def apply(oo: OutputImageOptions) -> None:
        img = _load_logo(path, "PNG")
        if img is not None:
            oo.logo = img
    return apply


def with_qr_width(width: int) -> ImageOption:
    """Set the width of each module in pixels (0 to 255)."""
    if not 0 <= width <= 255:
        raise ValueError(f"module width must be within 0..255, got {width}")

    def apply(oo: OutputImageOptions) -> None:
        oo.qr_width = int(width)
    return apply


def with_circle_shape() -> ImageOption:
    """Draw modules as circles."""
    def apply(oo: OutputImageOptions) -> None:
        oo.shape = SHAPE_CIRCLE
    return apply


def with_custom_shape(shape: Optional[Shape]) -> ImageOption:
    """Draw modules with a custom shape."""
    def apply(oo: OutputImageOptions) -> None:
        oo.shape = shape
    return apply


def with_builtin_image_encoder(fmt: Union[ImageFormat, int]) -> ImageOption:
    """Choose the JPEG or PNG encoder."""
    encoders = {ImageFormat.JPEG: JpegEncoder, ImageFormat.PNG: PngEncoder}
    try:
        encoder_cls = encoders[ImageFormat(fmt)]
    except ValueError:
        raise ValueError(f"not supported file format: {fmt!r}") from None

    def apply(oo: OutputImageOptions) -> None:
        oo.image_encoder = encoder_cls()
    return apply


def with_custom_image_encoder(encoder: Optional[ImageEncoder]) -> ImageOption:
    """Use a custom encoder; None leaves the current one."""
    def apply(oo: OutputImageOptions) -> None:
        if encoder is not None:
            oo.image_encoder = encoder
    return apply


def with_border_width(*widths: int) -> ImageOption:
    """Set borders: none for the default, one for all sides, two or three for
    (vertical, horizontal), four or more for (top, right, bottom, left)."""
    def apply(oo: OutputImageOptions) -> None:
        if not widths:
            oo.border_widths = (DEFAULT_PADDING,) * 4
        elif len(widths) == 1:
            oo.border_widths = (widths[0],) * 4
        elif len(widths) in (2, 3):
            oo.border_widths = (widths[0], widths[1], widths[0], widths[1])
        else:
            oo.border_widths = tuple(widths[:4])  # type: ignore[assignment]
    return apply


def with_halftone(path: str) -> ImageOption:
    """Blend a halftone of the image at path into the data modules."""
    def apply(oo: OutputImageOptions) -> None:
        try:
            oo.halftone_img = imgkit.read(path)
        except OSError as exc:
            logger.warning("read halftone image failed: %s", exc)
    return apply


def with_logo_size_multiplier(multiplier: int) -> ImageOption:
    """The logo may be at most 1/multiplier of the image in each direction."""
    def apply(oo: OutputImageOptions) -> None:
        oo.logo_size_multiplier = multiplier
    return apply


def with_logo_safe_zone() -> ImageOption:
    """Leave modules under the logo undrawn."""
    def apply(oo: OutputImageOptions) -> None:
        oo.logo_safe_zone = True
    return apply