"""oxchess: a chess rules oracle on a 0x88 board."""

__version__ = "0.1.0"
