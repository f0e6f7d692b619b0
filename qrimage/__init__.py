"""Render QR code matrices as images, compressed PNGs, text and terminal output."""

__version__ = "0.1.0"