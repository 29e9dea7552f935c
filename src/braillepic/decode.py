import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from braillepic.buffer import PixelBuffer


def _open(fp) -> PixelBuffer:
    try:
        with Image.open(fp) as image:
            # Animated sources keep only their first frame
            image.seek(0)
            return PixelBuffer.from_image(image)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Failed to load image: {e}") from e


def decode_image(data: bytes) -> PixelBuffer:
    """Decode PNG/JPEG/etc. bytes into an RGBA buffer."""
    return _open(io.BytesIO(data))


def load_image(path: str | Path) -> PixelBuffer:
    return _open(Path(path))
