# -*- coding: utf-8 -*-

"""
geomaps/config.py

Default values shared by the raster store and the file codecs. Keeping them
here means the GeoTIFF writer, the loader and the tests agree on the same
driver, storage type and metadata tag names.

Contents:
---------
1. FILE FORMAT:
   - Driver, pixel type and compression used when a map is written to disk.
   - `BAND_NAME_TAG` is the band-level metadata key that carries each band's
     name, so layer order and identity survive a save/load cycle.

2. PROJECTION:
   - EPSG code bases for WGS 84 / UTM. Zone `z` in the northern hemisphere is
     `UTM_EPSG_NORTH + z`, in the southern hemisphere `UTM_EPSG_SOUTH + z`.

3. GEOMETRY:
   - Transform of a freshly created store, in GDAL order
     (x0, sx, rx, y0, ry, sy).

Usage:
------
    from geomaps.config import DEFAULT_DRIVER, BAND_NAME_TAG
"""

# ───────────────────────────────────────────────────────────────────────────────
# 1) FILE FORMAT
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_DRIVER = 'GTiff'
DEFAULT_DTYPE = 'float32'
DEFAULT_COMPRESS = 'deflate'
BAND_NAME_TAG = 'NAME'

# ───────────────────────────────────────────────────────────────────────────────
# 2) PROJECTION (WGS 84 / UTM)
# ───────────────────────────────────────────────────────────────────────────────
UTM_EPSG_NORTH = 32600
UTM_EPSG_SOUTH = 32700
UTM_ZONE_MIN = 1
UTM_ZONE_MAX = 60

# ───────────────────────────────────────────────────────────────────────────────
# 3) GEOMETRY
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_TRANSFORM = (0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
