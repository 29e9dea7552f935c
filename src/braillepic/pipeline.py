import logging
from collections.abc import Callable
from pathlib import Path

from PIL import Image

from braillepic.adjust import adjust_colours
from braillepic.braille import BrailleGrid, encode
from braillepic.buffer import PixelBuffer
from braillepic.decode import decode_image, load_image
from braillepic.params import SHARPEN_EPSILON, AdjustmentParams, GlyphGridRequest
from braillepic.resample import DOTS_PER_CELL_X, DOTS_PER_CELL_Y, aspect_rows, fit_to_grid
from braillepic.sharpen import sharpen

logger = logging.getLogger(__name__)


def grid_size(source: PixelBuffer, request: GlyphGridRequest) -> tuple[int, int]:
    """Resolve (chars_width, chars_height), deriving the height when keeping aspect."""
    if not request.keep_aspect:
        return request.chars_width, request.chars_height
    rows = aspect_rows(source.width, source.height, request.chars_width)
    return request.chars_width, max(1, min(request.max_chars, rows))


def filter_source(source: PixelBuffer, adjustments: AdjustmentParams) -> PixelBuffer:
    """Colour adjustment followed by sharpening, when there is any to do."""
    adjusted = adjust_colours(source, adjustments)
    if adjustments.sharpness > SHARPEN_EPSILON:
        return sharpen(adjusted, adjustments.sharpness)
    logger.debug("sharpness %s, skipping sharpen", adjustments.sharpness)
    return adjusted


def render(
    source: PixelBuffer,
    adjustments: AdjustmentParams | None = None,
    request: GlyphGridRequest | None = None,
) -> BrailleGrid:
    """Run the full pipeline from a decoded source to a Braille grid.

    Nothing is cached; call again whenever a parameter changes.
    """
    adjustments = adjustments or AdjustmentParams()
    request = request or GlyphGridRequest()
    adjustments.validate()
    request.validate()

    if source.is_empty:
        return BrailleGrid()

    filtered = filter_source(source, adjustments)
    chars_width, chars_height = grid_size(filtered, request)
    dots = fit_to_grid(filtered, chars_width, chars_height)
    return encode(dots, chars_width, chars_height, request.threshold, request.invert)


def render_image(
    image: Image.Image | str | Path | bytes,
    adjustments: AdjustmentParams | None = None,
    request: GlyphGridRequest | None = None,
    decode: Callable[[bytes], PixelBuffer] | None = None,
) -> BrailleGrid:
    """Like :func:`render`, accepting a Pillow image, a file path or encoded bytes.

    Bytes go through ``decode``, which defaults to Pillow decoding.
    """
    if isinstance(image, Image.Image):
        source = PixelBuffer.from_image(image)
    elif isinstance(image, bytes):
        source = (decode or decode_image)(image)
    else:
        source = load_image(image)
    return render(source, adjustments, request)


class BrailleEngine:
    """Rendering engine with fixed adjustment and grid settings."""

    cell_width = DOTS_PER_CELL_X
    cell_height = DOTS_PER_CELL_Y

    def __init__(self, adjustments: AdjustmentParams | None = None, request: GlyphGridRequest | None = None):
        self.adjustments = adjustments or AdjustmentParams()
        self.request = request or GlyphGridRequest()

    def render(self, source: PixelBuffer | Image.Image) -> BrailleGrid:
        if isinstance(source, Image.Image):
            source = PixelBuffer.from_image(source)
        return render(source, self.adjustments, self.request)
