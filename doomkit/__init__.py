"""A printf-style formatter and a BMP image and texture reader."""

__version__ = "0.1.0"