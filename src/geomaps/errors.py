"""Exceptions raised by geomaps.

Each error also derives from the built-in exception callers would expect,
so ``except KeyError`` around a band lookup keeps working.
"""


class GeomapsError(Exception):
    """Base class for all geomaps errors."""


class BandNotFoundError(GeomapsError, KeyError):
    """Requested band name is not in the store's names."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"band name not found: {name}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class CellIndexError(GeomapsError, IndexError):
    """Linear cell index falls outside ``[0, width*height)``."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"cell index {index} out of range for {size} cells")


class CodecError(GeomapsError, OSError):
    """A raster file could not be read, written or interpreted."""
