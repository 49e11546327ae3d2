"""
indexing.py

Coordinate to linear-cell-index conversions for a `RasterStore`.

Three coordinate spaces map onto the same flat index into a band:

- raster: ``(x, y)`` is already an offset from the upper-left corner, in
  projection units
- utm: ``(x, y)`` are absolute projected coordinates; the store's upper-left
  position is subtracted first
- custom: ``(x, y)`` are relative to the store's custom origin, which is
  added before delegating to the utm path

All three use ``ceil(x / sx + (y / sy) * width)`` with ``sx``/``sy`` the
absolute pixel scales. The raw functions do no range checking and may return
negative or too-large values; the ``checked_*`` variants wrap the result in
`InRange` / `OutOfRange`. Zero pixel scales are not guarded against.
"""
import math

from geomaps.results import InRange, IndexOutcome, OutOfRange


def index_raster(store, x: float, y: float) -> int:
    return math.ceil(x / store.get_scale_x()
                     + y / store.get_scale_y() * store.get_width())


def index_utm(store, x: float, y: float) -> int:
    return math.ceil((x - store.get_utm_pose_x()) / store.get_scale_x()
                     + (y - store.get_utm_pose_y()) / store.get_scale_y() * store.get_width())


def index_custom(store, x: float, y: float) -> int:
    return index_utm(store,
                     x + store.get_custom_x_origin(),
                     y + store.get_custom_y_origin())


def check_index(store, index: int) -> IndexOutcome:
    """Classify ``index`` against the store's ``width * height`` cells."""
    size = store.get_width() * store.get_height()
    if 0 <= index < size:
        return InRange(index)
    return OutOfRange(index, size)


def checked_index_raster(store, x: float, y: float) -> IndexOutcome:
    return check_index(store, index_raster(store, x, y))


def checked_index_utm(store, x: float, y: float) -> IndexOutcome:
    return check_index(store, index_utm(store, x, y))


def checked_index_custom(store, x: float, y: float) -> IndexOutcome:
    return check_index(store, index_custom(store, x, y))
