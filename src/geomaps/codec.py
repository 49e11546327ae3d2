"""
codec.py

Persistence for `RasterStore` instances.

`FileCodec` is the interface the store talks to; `GeoTiffCodec` implements
it with rasterio. A GeoTIFF written here holds:

- the store's affine transform
- a WGS 84 / UTM CRS synthesized from ``utm_zone`` / ``utm_north``
  (no CRS when the zone is 0, i.e. unset)
- one float32 band per store band, in order, each tagged with its name under
  `BAND_NAME_TAG` and with the same name as band description

Loading is the inverse. The UTM zone is recovered from the file's CRS with
pyproj; a CRS that is not a UTM projection raises `CodecError`.

A failed load does not roll back: the target store may already hold the
new geometry when the error is raised.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple
import logging

import numpy as np
import rasterio
from rasterio.crs import CRS
from rasterio.errors import RasterioError
from pyproj import CRS as ProjCRS
from pyproj.exceptions import CRSError

from geomaps.config import (BAND_NAME_TAG, DEFAULT_COMPRESS, DEFAULT_DRIVER, DEFAULT_DTYPE,
                            UTM_EPSG_NORTH, UTM_EPSG_SOUTH, UTM_ZONE_MAX, UTM_ZONE_MIN)
from geomaps.errors import CodecError
from geomaps.store import RasterStore

logger = logging.getLogger(__name__)


def utm_crs(zone: int, north: bool = True) -> CRS:
    """WGS 84 / UTM CRS for ``zone`` and hemisphere."""
    if not UTM_ZONE_MIN <= zone <= UTM_ZONE_MAX:
        raise ValueError(f"UTM zone must be in [{UTM_ZONE_MIN}, {UTM_ZONE_MAX}], got {zone}")
    base = UTM_EPSG_NORTH if north else UTM_EPSG_SOUTH
    return CRS.from_epsg(base + zone)


def utm_from_crs(crs) -> Tuple[int, bool]:
    """Return ``(zone, north)`` for a UTM CRS.

    Accepts anything pyproj can parse (rasterio CRS, WKT, EPSG string).
    Raises `CodecError` when the CRS is not a UTM projection.
    """
    try:
        wkt = crs.to_wkt() if hasattr(crs, 'to_wkt') else crs
        proj_crs = ProjCRS.from_user_input(wkt)
    except CRSError as e:
        raise CodecError(f"unreadable spatial reference: {crs}") from e
    zone = proj_crs.utm_zone
    if not zone:
        raise CodecError(f"spatial reference is not UTM: {proj_crs.name}")
    # pyproj reports e.g. '31N' / '18S'
    return int(zone[:-1]), zone[-1].upper() == 'N'


class FileCodec(ABC):
    """Reads and writes a `RasterStore` to a georeferenced raster file."""

    @abstractmethod
    def save(self, store: RasterStore, filepath) -> None:
        """Write ``store`` to ``filepath``.

        Raises ValueError, before any file is opened, when ``store`` has no
        bands, zero dimensions, or bands and names of mismatched length or
        size. Raises `CodecError` when the file cannot be written.
        """

    @abstractmethod
    def load(self, filepath, store: Optional[RasterStore] = None) -> RasterStore:
        """Populate ``store`` (or a new store) from ``filepath`` and return it."""


class GeoTiffCodec(FileCodec):
    """GeoTIFF persistence through rasterio."""

    def __init__(self, driver: str = DEFAULT_DRIVER, compress: Optional[str] = DEFAULT_COMPRESS):
        self.driver = driver
        self.compress = compress

    def _profile(self, store: RasterStore) -> dict:
        profile = {
            'driver': self.driver,
            'width': store.get_width(),
            'height': store.get_height(),
            'count': len(store.bands),
            'dtype': DEFAULT_DTYPE,
            'transform': store.affine,
        }
        if store.utm_zone:
            try:
                profile['crs'] = utm_crs(store.utm_zone, store.utm_north)
            except ValueError as e:
                raise CodecError(f"no spatial reference for UTM zone {store.utm_zone}: {e}") from e
        if self.compress:
            profile['compress'] = self.compress
        return profile

    def save(self, store: RasterStore, filepath) -> None:
        if len(store.names) != len(store.bands):
            raise ValueError(f"{len(store.bands)} bands but {len(store.names)} names")
        if not store.bands or store.get_width() == 0 or store.get_height() == 0:
            raise ValueError(f"nothing to write for {store!r} with {len(store.bands)} bands")
        size = store.get_width() * store.get_height()
        for name, band in zip(store.names, store.bands):
            if band.size != size:
                raise ValueError(f"band {name!r} has {band.size} cells, expected {size}")

        try:
            with rasterio.open(str(filepath), 'w', **self._profile(store)) as dst:
                for idx, (name, band) in enumerate(zip(store.names, store.bands), start=1):
                    dst.write(band.reshape(store.shape).astype(DEFAULT_DTYPE), idx)
                    dst.update_tags(idx, **{BAND_NAME_TAG: name})
                    dst.set_band_description(idx, name)
        except RasterioError as e:
            raise CodecError(f"cannot write {filepath}: {e}") from e
        logger.info('saved %r with %d bands to %s', store, len(store.bands), filepath)

    def load(self, filepath, store: Optional[RasterStore] = None) -> RasterStore:
        if store is None:
            store = RasterStore()
        try:
            with rasterio.open(str(filepath)) as src:
                gt = src.transform.to_gdal()
                if gt[2] != 0.0 or gt[4] != 0.0:
                    logger.warning('%s: rotated transform %s, index math assumes north-up', filepath, gt)
                store._set_geometry(src.width, src.height, gt)
                if src.crs is None:
                    logger.warning('%s: no spatial reference, leaving UTM zone unset', filepath)
                    store.set_utm(0, True)
                else:
                    store.set_utm(*utm_from_crs(src.crs))
                bands = []
                names = []
                for idx in src.indexes:
                    bands.append(src.read(idx).astype(DEFAULT_DTYPE).ravel())
                    names.append(self._band_name(src, idx))
        except RasterioError as e:
            raise CodecError(f"cannot read {filepath}: {e}") from e
        store.bands = bands
        store.names = names
        logger.info('loaded %r with %d bands from %s', store, len(bands), filepath)
        return store

    @staticmethod
    def _band_name(src, idx: int) -> str:
        name = src.tags(idx).get(BAND_NAME_TAG)
        if name is None:
            name = src.descriptions[idx - 1] or ''
            logger.warning('band %d has no %s tag, using description %r', idx, BAND_NAME_TAG, name)
        return name
