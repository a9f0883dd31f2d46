"""BRL -> PYG / USD exchange quote service."""

__version__ = "0.1.0"
