import logging
import math
import shutil
import subprocess
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from braillepic.braille import BrailleGrid

logger = logging.getLogger(__name__)

BACKGROUND = "#00121a"
FOREGROUND = "#e6eef6"
MAX_IMAGE_SIDE = 8192

# Common fonts that cover the Braille block, tried before asking fontconfig
FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _as_text(grid: BrailleGrid | str) -> str:
    return grid.text if isinstance(grid, BrailleGrid) else grid


def write_text(grid: BrailleGrid | str, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(_as_text(grid), encoding="utf-8")
    return path


def find_braille_font() -> str | None:
    """Path of a TrueType/OpenType font with U+2800 glyphs, or None."""
    for path in FONT_CANDIDATES:
        if Path(path).exists():
            return path
    if shutil.which("fc-match"):
        result = subprocess.run(["fc-match", "-f", "%{file}", ":charset=2800"], capture_output=True, text=True)
        path = result.stdout.strip()
        if result.returncode == 0 and path.endswith((".ttf", ".otf")):
            return path
    return None


def _load_font(font_path: str | None, font_size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    if font_path is None:
        font_path = find_braille_font()
    if font_path is not None:
        return ImageFont.truetype(font_path, font_size)
    logger.warning("No Braille-capable font found, PNG will use Pillow's default font and may show no glyphs")
    return ImageFont.load_default(size=font_size)


def render_png(grid: BrailleGrid | str, font_size: int = 12, font_path: str | None = None) -> Image.Image:
    """Draw the text light-on-dark, one fixed-height line per row.

    Cells are ``ceil(0.6 * font_size)`` wide and ``ceil(0.95 * font_size)``
    tall; the canvas is sized from the first line and capped at 8192px a side.
    """
    text = _as_text(grid)
    if not text:
        raise ValueError("Nothing to export: text is empty")

    lines = text.split("\n")
    char_w = math.ceil(font_size * 0.6)
    char_h = math.ceil(font_size * 0.95)
    width = len(lines[0]) * char_w or 1
    height = len(lines) * char_h or 1

    image = Image.new("RGB", (min(MAX_IMAGE_SIDE, width), min(MAX_IMAGE_SIDE, height)), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = _load_font(font_path, font_size)
    for i, line in enumerate(lines):
        draw.text((0, i * char_h + 1), line, fill=FOREGROUND, font=font)
    return image


def write_png(grid: BrailleGrid | str, path: str | Path, font_size: int = 12, font_path: str | None = None) -> Path:
    path = Path(path)
    render_png(grid, font_size=font_size, font_path=font_path).save(path, format="PNG")
    return path
