import numpy as np
import pytest

from braillepic.buffer import PixelBuffer
from braillepic.resample import aspect_rows, fit_preview, fit_to_grid

WHITE = (255, 255, 255, 255)


def luma_rows(buf):
    rgb = buf.pixels[:, :, :3].astype(np.float64)
    return 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]


def test_output_matches_grid_size():
    result = fit_to_grid(PixelBuffer.new(37, 91, WHITE), 7, 5)
    assert (result.width, result.height) == (14, 20)


def test_wide_source_is_letterboxed_top_and_bottom():
    result = fit_to_grid(PixelBuffer.new(100, 50, WHITE), 10, 10)
    assert (result.width, result.height) == (20, 40)
    # scale 0.2 -> 20x10 image at dy=15
    assert (result.pixels[:15] == 0).all()
    assert (result.pixels[25:] == 0).all()
    assert (luma_rows(result)[15:25] > 250).all()


def test_tall_source_is_pillarboxed_left_and_right():
    result = fit_to_grid(PixelBuffer.new(10, 100, WHITE), 10, 10)
    # scale 0.4 -> 4x40 image at dx=8
    assert (result.pixels[:, :8] == 0).all()
    assert (result.pixels[:, 12:] == 0).all()
    assert (luma_rows(result)[:, 8:12] > 250).all()


def test_exact_size_copies_opaque_pixels():
    rng = np.random.default_rng(3)
    arr = rng.integers(0, 256, size=(8, 4, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    src = PixelBuffer(arr)
    result = fit_to_grid(src, 2, 2)
    np.testing.assert_array_equal(result.pixels, src.pixels)


@pytest.mark.parametrize("src_size", [(2, 4), (4, 8), (6, 4)])
def test_transparent_pixels_are_black_with_or_without_scaling(src_size):
    result = fit_to_grid(PixelBuffer.new(*src_size, (255, 255, 255, 0)), 1, 1)
    assert (result.pixels == 0).all()


def test_same_size_and_scaled_sources_agree():
    clear_white = (255, 255, 255, 0)
    same = fit_to_grid(PixelBuffer.new(2, 4, clear_white), 1, 1)
    scaled = fit_to_grid(PixelBuffer.new(4, 8, clear_white), 1, 1)
    np.testing.assert_array_equal(same.pixels, scaled.pixels)


def test_degenerate_fit_is_all_blank():
    # scale 0.002 rounds the height to zero
    result = fit_to_grid(PixelBuffer.new(1000, 1, WHITE), 1, 1)
    assert (result.width, result.height) == (2, 4)
    assert (result.pixels == 0).all()


def test_empty_source_is_all_blank():
    result = fit_to_grid(PixelBuffer.new(0, 0), 3, 2)
    assert (result.width, result.height) == (6, 8)
    assert (result.pixels == 0).all()


@pytest.mark.parametrize(
    "src_size, chars_width, expected",
    [
        ((200, 100), 40, 10),
        ((100, 50), 10, 3),  # 10 dot rows / 4 = 2.5 rounds up
        ((50, 100), 10, 10),
        ((1000, 1), 1, 1),
    ],
)
def test_aspect_rows(src_size, chars_width, expected):
    assert aspect_rows(*src_size, chars_width) == expected


def test_fit_preview_shrinks_large_images():
    result = fit_preview(PixelBuffer.new(1600, 600, WHITE))
    assert (result.width, result.height) == (800, 300)


def test_fit_preview_never_enlarges():
    src = PixelBuffer.new(40, 30, WHITE)
    assert fit_preview(src) is src


def test_fit_preview_custom_box():
    result = fit_preview(PixelBuffer.new(300, 300, WHITE), max_size=(100, 200))
    assert (result.width, result.height) == (100, 100)
