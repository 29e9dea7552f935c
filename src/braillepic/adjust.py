import numpy as np

from braillepic.buffer import PixelBuffer, to_channels
from braillepic.params import AdjustmentParams

# Rec. 601 luma weights, shared with the Braille encoder
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def luma(r, g, b):
    """Weighted brightness of RGB values (floats or arrays)."""
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


def contrast_factor(contrast: float) -> float:
    """Photographic contrast multiplier around 128 for a contrast in [-100, 100]."""
    c = contrast * 2.55
    return (259 * (c + 255)) / (255 * (259 - c))


def adjust_colours(src: PixelBuffer, params: AdjustmentParams) -> PixelBuffer:
    """Apply brightness, contrast and saturation to every pixel.

    The steps run in that order on unclamped float values; only the final
    result is rounded and clamped. Alpha is passed through untouched.
    Sharpness is not used here, see :func:`braillepic.sharpen.sharpen`.
    """
    rgb = src.pixels[:, :, :3].astype(np.float64)

    rgb = rgb + params.brightness * 2.55
    rgb = contrast_factor(params.contrast) * (rgb - 128) + 128

    gray = luma(rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2])[:, :, np.newaxis]
    rgb = gray + (rgb - gray) * (1 + params.saturation / 100)

    out = np.empty_like(src.pixels)
    out[:, :, :3] = to_channels(rgb)
    out[:, :, 3] = src.pixels[:, :, 3]
    return PixelBuffer(out)
