"""Terminal car dodging game."""

__version__ = "1.0.0"
