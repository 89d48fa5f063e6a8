"""BigFile network block explorer backend."""

__version__ = "0.1.0"
