import logging

import numpy as np
from PIL import Image

from braillepic.buffer import PixelBuffer, round_half_up

logger = logging.getLogger(__name__)

# Each character cell covers a 2-wide by 4-tall block of dots
DOTS_PER_CELL_X = 2
DOTS_PER_CELL_Y = 4

# Loaded images are shrunk to fit this box before any adjustment
PREVIEW_MAX_SIZE = (800, 600)


def _resize(src: PixelBuffer, width: int, height: int) -> np.ndarray:
    """Smoothed resize through premultiplied alpha.

    The result is always premultiplied and back, even at the same size, so
    fully transparent pixels come out black whether or not scaling happened.
    """
    image = src.to_image().convert("RGBa")
    if (width, height) != (src.width, src.height):
        image = image.resize((width, height), Image.Resampling.BILINEAR)
    return np.asarray(image.convert("RGBA"))


def aspect_rows(src_width: int, src_height: int, chars_width: int) -> int:
    """Character rows that keep the source aspect ratio at ``chars_width`` columns."""
    px_width = chars_width * DOTS_PER_CELL_X
    px_height = round_half_up(src_height * (px_width / src_width))
    return max(1, round_half_up(px_height / DOTS_PER_CELL_Y))


def fit_to_grid(src: PixelBuffer, chars_width: int, chars_height: int) -> PixelBuffer:
    """Letterbox ``src`` into a ``chars_width*2`` by ``chars_height*4`` dot raster.

    The source is scaled uniformly to fit, centred, and everything outside it
    is left fully transparent black.
    """
    px_w = chars_width * DOTS_PER_CELL_X
    px_h = chars_height * DOTS_PER_CELL_Y
    out = np.zeros((px_h, px_w, 4), dtype=np.uint8)
    if src.is_empty:
        return PixelBuffer(out)

    scale = min(px_w / src.width, px_h / src.height)
    dw = min(px_w, round_half_up(src.width * scale))
    dh = min(px_h, round_half_up(src.height * scale))
    dx = round_half_up((px_w - dw) / 2)
    dy = round_half_up((px_h - dh) / 2)
    logger.debug("fit %dx%d -> %dx%d at (%d, %d) in %dx%d", src.width, src.height, dw, dh, dx, dy, px_w, px_h)

    # Extreme aspect ratios can round a side down to nothing
    if dw > 0 and dh > 0:
        out[dy : dy + dh, dx : dx + dw] = _resize(src, dw, dh)
    return PixelBuffer(out)


def fit_preview(src: PixelBuffer, max_size: tuple[int, int] = PREVIEW_MAX_SIZE) -> PixelBuffer:
    """Shrink ``src`` to fit within ``max_size``, never enlarging it."""
    if src.is_empty:
        return src
    max_w, max_h = max_size
    scale = min(max_w / src.width, max_h / src.height, 1)
    if scale == 1:
        return src
    w = max(1, round_half_up(src.width * scale))
    h = max(1, round_half_up(src.height * scale))
    logger.debug("preview fit %dx%d -> %dx%d", src.width, src.height, w, h)
    return PixelBuffer(_resize(src, w, h))
