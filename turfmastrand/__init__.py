"""Neo Turf Masters hole and pin randomizer, with PCG32 and SHA-1 helpers."""

__version__ = "0.1.0"
__all__ = ["__version__"]