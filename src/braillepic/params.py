from dataclasses import dataclass

ADJUSTMENT_RANGE = (-100, 100)
SHARPNESS_RANGE = (0.0, 5.0)
THRESHOLD_RANGE = (0, 255)

# UI-safety cap on output grid size; not tied to the algorithm
MAX_GRID_CHARS = 400

# Sharpening at or below this amount is skipped entirely
SHARPEN_EPSILON = 0.01


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be in [{low}, {high}], got {value}")


@dataclass(frozen=True)
class AdjustmentParams:
    brightness: float = 0
    contrast: float = 0
    saturation: float = 0
    sharpness: float = 0.0

    def validate(self) -> None:
        for name in ("brightness", "contrast", "saturation"):
            _check_range(name, getattr(self, name), *ADJUSTMENT_RANGE)
        _check_range("sharpness", self.sharpness, *SHARPNESS_RANGE)


@dataclass(frozen=True)
class GlyphGridRequest:
    """Target character grid and thresholding options.

    When ``keep_aspect`` is set, ``chars_height`` is ignored and derived from
    ``chars_width`` and the source aspect ratio at render time.
    """

    chars_width: int = 80
    chars_height: int = 30
    threshold: int = 128
    invert: bool = False
    keep_aspect: bool = False
    max_chars: int = MAX_GRID_CHARS

    def validate(self) -> None:
        if self.max_chars < 1:
            raise ValueError(f"max_chars must be at least 1, got {self.max_chars}")
        _check_range("chars_width", self.chars_width, 1, self.max_chars)
        if not self.keep_aspect:
            _check_range("chars_height", self.chars_height, 1, self.max_chars)
        _check_range("threshold", self.threshold, *THRESHOLD_RANGE)
