"""Circuit route generation backend."""

__version__ = "1.0.0"
