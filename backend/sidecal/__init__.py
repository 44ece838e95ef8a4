"""Side-panel calendar backend: recurring event resolution."""

__version__ = "0.1.0"
