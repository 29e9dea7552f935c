"""Threshold a dot raster into Unicode Braille characters.

Each character is a 2x4 block of dots. Unicode numbers the dots like this::

    1 4
    2 5
    3 6
    7 8

and dot ``n`` sets bit ``n - 1`` of the offset from U+2800.
"""

from dataclasses import dataclass, field

import numpy as np

from braillepic.adjust import luma
from braillepic.buffer import PixelBuffer
from braillepic.resample import DOTS_PER_CELL_X, DOTS_PER_CELL_Y

BRAILLE_BASE = 0x2800

# Dot number at [row][column] within a cell
DOT_NUMBERS = (
    (1, 4),
    (2, 5),
    (3, 6),
    (7, 8),
)

BRAILLE = np.array([chr(BRAILLE_BASE + m) for m in range(256)])


class GridShapeError(AssertionError):
    """The dot raster doesn't match the requested character grid."""


def dot_bit(dot: int) -> int:
    return 1 << (dot - 1)


def dot_bits() -> np.ndarray:
    """(4, 2) array of the mask bit contributed by each dot position."""
    return np.array([[dot_bit(d) for d in row] for row in DOT_NUMBERS], dtype=np.int64)


@dataclass
class BrailleGrid:
    rows: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Rows joined with a newline after every row, including the last."""
        return "".join(row + "\n" for row in self.rows)

    def __str__(self) -> str:
        return self.text


def encode_masks(px: PixelBuffer, chars_width: int, chars_height: int, threshold: float, invert: bool) -> np.ndarray:
    """Dot masks of shape (chars_height, chars_width), values 0-255."""
    expected = (chars_height * DOTS_PER_CELL_Y, chars_width * DOTS_PER_CELL_X)
    if (px.height, px.width) != expected:
        raise GridShapeError(
            f"Dot raster is {px.width}x{px.height}, expected {expected[1]}x{expected[0]} "
            f"for a {chars_width}x{chars_height} grid"
        )

    rgb = px.pixels[:, :, :3].astype(np.float64)
    lum = luma(rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2])
    on = lum < threshold if invert else lum > threshold

    # (rows, 4, cols, 2) -> (rows, cols, 4, 2)
    cells = on.reshape(chars_height, DOTS_PER_CELL_Y, chars_width, DOTS_PER_CELL_X).transpose(0, 2, 1, 3)
    return (cells * dot_bits()).sum(axis=(2, 3))


def encode(px: PixelBuffer, chars_width: int, chars_height: int, threshold: float, invert: bool = False) -> BrailleGrid:
    masks = encode_masks(px, chars_width, chars_height, threshold, invert)
    return BrailleGrid(rows=["".join(BRAILLE[row]) for row in masks])
