"""Copy and compare geometry/projection metadata between raster stores.

`copy_meta` transfers the grid (dimensions, transform, UTM tag) but never
band contents: the destination's bands are zero-filled at the new size.
"""
from typing import List, Optional
import logging

import numpy as np

logger = logging.getLogger(__name__)


def copy_meta(dst, src, n_raster: Optional[int] = None) -> None:
    """Copy meta-data from ``src`` into ``dst``.

    Parameters:
    - dst: store to modify in place
    - src: store to copy from
    - n_raster: number of bands to allocate. When None, ``dst`` takes the
      band count and names of ``src``. When given, names are not copied and
      every band name of ``dst`` is reset to ``""``.

    The UTM zone/hemisphere and the transform are always copied. The custom
    origin is not.
    """
    dst.set_utm(src.utm_zone, src.utm_north)
    if n_raster is None:
        names = list(src.names)
        n_raster = len(src.bands)
    else:
        names = []
    dst._set_geometry(src.get_width(), src.get_height(), src.transform)
    # zero first so no previous cell survives the resize
    dst.clear_bands()
    dst.set_size(n_raster, src.get_width(), src.get_height())
    # names follow the band count, as set_size would resize them
    dst.names = (names + [''] * n_raster)[:n_raster]
    logger.debug('copy_meta: %d bands of %dx%d', n_raster, src.get_width(), src.get_height())


def diff_meta(a, b) -> List[str]:
    """Names of the fields that differ between two stores.

    Unlike ``a == b`` this includes ``utm_zone`` and ``utm_north``.
    """
    fields = [
        ('width', a.get_width(), b.get_width()),
        ('height', a.get_height(), b.get_height()),
        ('scale_x', a.get_scale_x(), b.get_scale_x()),
        ('scale_y', a.get_scale_y(), b.get_scale_y()),
        ('utm_pose_x', a.get_utm_pose_x(), b.get_utm_pose_x()),
        ('utm_pose_y', a.get_utm_pose_y(), b.get_utm_pose_y()),
        ('custom_x_origin', a.get_custom_x_origin(), b.get_custom_x_origin()),
        ('custom_y_origin', a.get_custom_y_origin(), b.get_custom_y_origin()),
        ('utm_zone', a.utm_zone, b.utm_zone),
        ('utm_north', a.utm_north, b.utm_north),
        ('names', list(a.names), list(b.names)),
    ]
    diffs = [name for name, va, vb in fields if va != vb]
    if (len(a.bands) != len(b.bands)
            or any(not np.array_equal(x, y) for x, y in zip(a.bands, b.bands))):
        diffs.append('bands')
    return diffs
