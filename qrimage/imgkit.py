"""Small image helpers: reading, saving, grey-scaling, thresholding, scaling."""

from __future__ import annotations

import os
from typing import Optional

from PIL import Image

_SAVE_FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG"}


def read(path: str | os.PathLike) -> Image.Image:
    """Read and decode an image file."""
    with Image.open(path) as img:
        img.load()
        return img.copy()


def save(img: Image.Image, filename: str | os.PathLike) -> None:
    """Save an image as JPEG or PNG, chosen by the file extension."""
    ext = os.path.splitext(os.fspath(filename))[1]
    fmt = _SAVE_FORMATS.get(ext)
    if fmt is None:
        raise ValueError("unsupported image format, jpg or png only")
    if fmt == "JPEG" and img.mode not in ("L", "RGB", "CMYK"):
        img = img.convert("RGB")
    img.save(filename, format=fmt)


def gray(src: Image.Image) -> Image.Image:
    """Return a grey-scale copy of the image."""
    return src.convert("L")


def binaryzation(src: Image.Image, threshold: int = 128) -> Image.Image:
    """Return a black-and-white image: grey levels above threshold become white."""
    if not 0 <= threshold <= 255:
        threshold = 128
    return gray(src).point(lambda p: 255 if p > threshold else 0)


def scale(
    src: Image.Image,
    size: tuple[int, int],
    resample: Optional[Image.Resampling] = None,
) -> Image.Image:
    """Resize the image into an RGBA image of the given (width, height)."""
    if resample is None:
        resample = Image.Resampling.BILINEAR
    return src.convert("RGBA").resize(size, resample)