"""A tile-based puzzle game with collectible keys, pushable blocks and rule sentences, drawn with pygame."""

__version__ = "0.1.0"
__all__ = ["__version__"]