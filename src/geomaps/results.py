"""Small result containers returned by the explicit (non-raising) lookups.

Band lookups return `Found` or `NotFound`; checked cell indexing returns
`InRange` or `OutOfRange`. Both pairs expose ``ok`` and ``unwrap()`` so
callers can branch explicitly or opt back into an exception.
"""
from dataclasses import dataclass
from typing import Union

from geomaps.errors import BandNotFoundError, CellIndexError


@dataclass(frozen=True)
class Found:
    index: int

    ok = True

    def unwrap(self) -> int:
        return self.index


@dataclass(frozen=True)
class NotFound:
    name: str

    ok = False

    def unwrap(self) -> int:
        raise BandNotFoundError(self.name)


@dataclass(frozen=True)
class InRange:
    index: int

    ok = True

    def unwrap(self) -> int:
        return self.index


@dataclass(frozen=True)
class OutOfRange:
    """Raw index that fell outside the band, with the band size it was checked against."""
    index: int
    size: int

    ok = False

    def unwrap(self) -> int:
        raise CellIndexError(self.index, self.size)


BandLookup = Union[Found, NotFound]
IndexOutcome = Union[InRange, OutOfRange]
