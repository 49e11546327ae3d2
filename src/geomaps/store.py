"""
store.py

In-memory multi-band georeferenced raster map.

A `RasterStore` holds a stack of named float layers (elevation, cost,
classification, ...) sharing one grid: its dimensions, a north-up affine
transform in GDAL order ``(x0, sx, rx, y0, ry, sy)``, a UTM zone tag and an
application-defined local origin. Bands are flat ``float32`` arrays of
``width * height`` cells, row-major, so a linear cell index from
`geomaps.indexing` addresses the same cell in every band.

The store is a value type: `copy()` (and ``copy.copy`` / ``copy.deepcopy``)
return a fully independent instance. Nothing here is thread-safe; callers
must serialize mutation of a shared instance.
"""
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np
from affine import Affine

from geomaps import indexing, metadata
from geomaps.config import DEFAULT_DTYPE, DEFAULT_TRANSFORM
from geomaps.errors import BandNotFoundError
from geomaps.results import BandLookup, Found, IndexOutcome, NotFound

logger = logging.getLogger(__name__)


def _resized(band: np.ndarray, size: int) -> np.ndarray:
    # keep leading cells, zero-fill the rest
    out = np.zeros(size, dtype=DEFAULT_DTYPE)
    n = min(size, band.size)
    out[:n] = band[:n]
    return out


class RasterStore:
    """Named float bands over a common north-up georeferenced grid."""

    def __init__(self):
        self._init()

    def _init(self) -> None:
        self._transform: List[float] = list(DEFAULT_TRANSFORM)
        self._width = 0
        self._height = 0
        self._utm_zone = 0
        self._utm_north = True
        self._custom_x_origin = 0.0
        self._custom_y_origin = 0.0
        self.bands: List[np.ndarray] = []
        self.names: List[str] = []

    @classmethod
    def from_file(cls, filepath, codec=None) -> 'RasterStore':
        """Create a store populated from ``filepath`` (GeoTIFF by default)."""
        store = cls()
        store.load(filepath, codec=codec)
        return store

    # ------------------------------------------------------------------
    # value semantics
    # ------------------------------------------------------------------
    def copy(self) -> 'RasterStore':
        """Return an independent deep copy (bands, names and all metadata)."""
        other = type(self).__new__(type(self))
        other._transform = list(self._transform)
        other._width = self._width
        other._height = self._height
        other._utm_zone = self._utm_zone
        other._utm_north = self._utm_north
        other._custom_x_origin = self._custom_x_origin
        other._custom_y_origin = self._custom_y_origin
        other.bands = [np.array(band, dtype=DEFAULT_DTYPE, copy=True) for band in self.bands]
        other.names = list(self.names)
        return other

    def __copy__(self) -> 'RasterStore':
        return self.copy()

    def __deepcopy__(self, memo) -> 'RasterStore':
        return self.copy()

    def __eq__(self, other) -> bool:
        """Structural equality.

        Compares dimensions, absolute pixel scale, upper-left position,
        custom origin, band names and band contents. The UTM zone and
        hemisphere are not compared; use `strict_equals` for that.
        """
        if not isinstance(other, RasterStore):
            return NotImplemented
        return (self.get_width() == other.get_width()
                and self.get_height() == other.get_height()
                and self.get_scale_x() == other.get_scale_x()
                and self.get_scale_y() == other.get_scale_y()
                and self.get_utm_pose_x() == other.get_utm_pose_x()
                and self.get_utm_pose_y() == other.get_utm_pose_y()
                and self.get_custom_x_origin() == other.get_custom_x_origin()
                and self.get_custom_y_origin() == other.get_custom_y_origin()
                and self.names == other.names
                and len(self.bands) == len(other.bands)
                and all(np.array_equal(a, b) for a, b in zip(self.bands, other.bands)))

    __hash__ = None

    def strict_equals(self, other: 'RasterStore') -> bool:
        """`==` plus equal UTM zone and hemisphere."""
        return (self == other
                and self._utm_zone == other._utm_zone
                and self._utm_north == other._utm_north)

    def __repr__(self) -> str:
        return f"RasterStore[{self._width},{self._height}]"

    # ------------------------------------------------------------------
    # mutators
    # ------------------------------------------------------------------
    def set_size(self, n: int, x: int, y: int) -> None:
        """Set raster size.

        Parameters:
        - n: number of bands
        - x: number of columns
        - y: number of rows

        Existing bands keep their leading cells; new cells and new bands are
        zero. ``names`` is resized alongside ``bands`` (new names are ``""``).
        """
        if n < 0 or x < 0 or y < 0:
            raise ValueError(f"set_size arguments must be non-negative, got ({n}, {x}, {y})")
        self._width = int(x)
        self._height = int(y)
        size = self._width * self._height
        del self.bands[n:]
        del self.names[n:]
        self.bands = [_resized(band, size) for band in self.bands]
        while len(self.bands) < n:
            self.bands.append(np.zeros(size, dtype=DEFAULT_DTYPE))
        while len(self.names) < n:
            self.names.append('')
        logger.debug('set_size: %d bands of %dx%d', n, self._width, self._height)

    def set_transform(self, pos_x: float, pos_y: float,
                      width: float = 1.0, height: float = 1.0) -> None:
        """Set a north-up transform from pixel/line space to projected coordinates.

        Parameters:
        - pos_x, pos_y: upper left pixel position
        - width, height: pixel size (default 1.0)
        """
        self._transform = [float(pos_x), float(width), 0.0,
                           float(pos_y), 0.0, float(height)]

    def set_utm(self, zone: int, north: bool = True) -> None:
        """Set the UTM zone and hemisphere. Geometry is left untouched."""
        self._utm_zone = int(zone)
        self._utm_north = bool(north)

    def set_custom_origin(self, x: float, y: float) -> None:
        self._custom_x_origin = float(x)
        self._custom_y_origin = float(y)

    def copy_meta(self, src: 'RasterStore', n_raster: Optional[int] = None) -> None:
        """Copy geometry and projection from ``src``; see `geomaps.metadata.copy_meta`."""
        metadata.copy_meta(self, src, n_raster)

    def clear_bands(self) -> None:
        """Zero every band. Band count, size, names and geometry are kept."""
        for band in self.bands:
            band[:] = 0.0

    def clear(self) -> None:
        """Empty the band list, keeping dimensions, transform, projection and names.

        Historical behaviour: afterwards ``names`` has entries with no band
        behind them, so name lookups fail until `set_size` reallocates.
        Prefer `clear_bands` or `reset`.
        """
        self.bands = []

    def reset(self) -> None:
        """Return to the default empty state."""
        self._init()

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    def get_scale_x(self) -> float:
        return abs(self._transform[1])

    def get_scale_y(self) -> float:
        return abs(self._transform[5])

    def get_utm_pose_x(self) -> float:
        return self._transform[0]

    def get_utm_pose_y(self) -> float:
        return self._transform[3]

    def get_custom_x_origin(self) -> float:
        return self._custom_x_origin

    def get_custom_y_origin(self) -> float:
        return self._custom_y_origin

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        return self._height, self._width

    @property
    def transform(self) -> Tuple[float, ...]:
        return tuple(self._transform)

    @property
    def affine(self) -> Affine:
        return Affine.from_gdal(*self._transform)

    @property
    def utm_zone(self) -> int:
        return self._utm_zone

    @property
    def utm_north(self) -> bool:
        return self._utm_north

    def _set_geometry(self, width: int, height: int, transform: Sequence[float]) -> None:
        # used by codecs; bands are filled in by the caller
        self._width = int(width)
        self._height = int(height)
        self._transform = [float(v) for v in transform]

    # ------------------------------------------------------------------
    # bands
    # ------------------------------------------------------------------
    def find_band(self, name: str) -> BandLookup:
        """Look up a band by name without raising. First match wins."""
        for idx, band_name in enumerate(self.names):
            if band_name == name:
                return Found(idx)
        return NotFound(name)

    def get_band_id(self, name: str) -> int:
        """Index of the first band called ``name``.

        Raises `BandNotFoundError` (a KeyError) if no band has that name.
        """
        return self.find_band(name).unwrap()

    def get_band(self, name: str) -> np.ndarray:
        """The band called ``name``. The array is shared with the store."""
        return self.bands[self.get_band_id(name)]

    def band_as_grid(self, name: str) -> np.ndarray:
        """(height, width) view of the band called ``name``."""
        return self.get_band(name).reshape(self.shape)

    # ------------------------------------------------------------------
    # indexing
    # ------------------------------------------------------------------
    def index_raster(self, x: float, y: float) -> int:
        return indexing.index_raster(self, x, y)

    def index_utm(self, x: float, y: float) -> int:
        return indexing.index_utm(self, x, y)

    def index_custom(self, x: float, y: float) -> int:
        return indexing.index_custom(self, x, y)

    def checked_index_raster(self, x: float, y: float) -> IndexOutcome:
        return indexing.checked_index_raster(self, x, y)

    def checked_index_utm(self, x: float, y: float) -> IndexOutcome:
        return indexing.checked_index_utm(self, x, y)

    def checked_index_custom(self, x: float, y: float) -> IndexOutcome:
        return indexing.checked_index_custom(self, x, y)

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------
    def save(self, filepath, codec=None) -> None:
        """Write the store to ``filepath`` through ``codec`` (GeoTIFF by default)."""
        _codec_or_default(codec).save(self, filepath)

    def load(self, filepath, codec=None) -> None:
        """Populate this store from ``filepath``.

        A failed load is not rolled back: the store may be left partially
        populated and should be reset or discarded by the caller.
        """
        _codec_or_default(codec).load(filepath, store=self)


def _codec_or_default(codec):
    if codec is not None:
        return codec
    from geomaps.codec import GeoTiffCodec
    return GeoTiffCodec()
