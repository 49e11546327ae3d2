"""
visualize.py

Turn float bands into 8-bit intensity images for display or quick export.

`normalize_to_bytes` spreads a band linearly over ``[0, 255]`` with
``min -> 0`` and ``max -> 255``, rounding down. A flat band (max == min)
carries no information and maps to all zeros.
"""
import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def normalize_to_bytes(band) -> np.ndarray:
    """Rescale ``band`` to uint8 with floor rounding.

    Returns an array of the same length as ``band``.
    """
    v = np.asarray(band, dtype=np.float32).ravel()
    out = np.zeros(v.shape, dtype=np.uint8)
    if v.size == 0:
        return out
    vmin = v.min()
    vmax = v.max()
    diff = vmax - vmin
    if diff == 0:
        return out
    coef = np.float32(255.0 / float(diff))
    out[:] = np.floor(coef * (v - vmin))
    return out


def band_to_image(store, name: str) -> Image.Image:
    """Grayscale (mode ``L``) image of the band called ``name``."""
    grid = normalize_to_bytes(store.get_band(name)).reshape(store.shape)
    return Image.fromarray(grid)


def save_band_png(store, name: str, filepath) -> None:
    img = band_to_image(store, name)
    img.save(str(filepath), format='PNG')
    logger.info('wrote band %r (%dx%d) to %s', name, store.get_width(), store.get_height(), filepath)
