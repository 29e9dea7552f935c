import numpy as np

from braillepic.buffer import PixelBuffer, to_channels


def sharpen_kernel(sharpness: float) -> np.ndarray:
    """3x3 sharpening kernel with a centre weight of ``5 + 2*sharpness``.

    The kernel is deliberately left unnormalized: its weights sum to
    ``1 + 2*sharpness``, so flat areas get brighter as sharpness grows.
    """
    centre = 5 + 2 * sharpness
    return np.array(
        [
            [0, -1, 0],
            [-1, centre, -1],
            [0, -1, 0],
        ],
        dtype=np.float64,
    )


def sharpen(src: PixelBuffer, sharpness: float) -> PixelBuffer:
    """Convolve all four channels, alpha included, with :func:`sharpen_kernel`.

    Borders are handled by replicating the nearest edge pixel.
    """
    if src.is_empty:
        return src
    kernel = sharpen_kernel(sharpness)
    h, w = src.height, src.width
    padded = np.pad(src.pixels.astype(np.float64), ((1, 1), (1, 1), (0, 0)), mode="edge")

    acc = np.zeros((h, w, 4), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            weight = kernel[ky, kx]
            if weight == 0:
                continue
            acc += weight * padded[ky : ky + h, kx : kx + w]

    return PixelBuffer(to_channels(acc))
