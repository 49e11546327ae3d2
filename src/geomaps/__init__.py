"""geomaps: multi-band georeferenced raster maps with coordinate indexing."""
from geomaps.errors import BandNotFoundError, CellIndexError, CodecError, GeomapsError
from geomaps.results import Found, InRange, NotFound, OutOfRange
from geomaps.store import RasterStore
from geomaps.indexing import (check_index, checked_index_custom, checked_index_raster,
                              checked_index_utm, index_custom, index_raster, index_utm)
from geomaps.metadata import copy_meta, diff_meta
from geomaps.visualize import band_to_image, normalize_to_bytes, save_band_png
from geomaps.codec import FileCodec, GeoTiffCodec, utm_crs, utm_from_crs

__version__ = '0.1.0'
