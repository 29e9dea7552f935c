from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image


def round_half_up(values):
    """Round to the nearest integer with .5 going up, for scalars or arrays."""
    if isinstance(values, np.ndarray):
        return np.floor(values + 0.5)
    return int(np.floor(values + 0.5))


def to_channels(values: np.ndarray) -> np.ndarray:
    """Round and clamp float channel values into uint8."""
    return np.clip(round_half_up(values), 0, 255).astype(np.uint8)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """An immutable RGBA8 raster, stored as a read-only (height, width, 4) array."""

    pixels: np.ndarray

    def __post_init__(self):
        arr = np.array(self.pixels, dtype=np.uint8, copy=True)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {arr.shape}")
        arr.setflags(write=False)
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @classmethod
    def new(cls, width: int, height: int, rgba: tuple[int, int, int, int] = (0, 0, 0, 0)) -> PixelBuffer:
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[:, :] = rgba
        return cls(arr)

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))
