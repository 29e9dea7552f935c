import argparse
import logging
import sys
from pathlib import Path

from braillepic.decode import load_image
from braillepic.export import write_png, write_text
from braillepic.params import AdjustmentParams, GlyphGridRequest
from braillepic.pipeline import render
from braillepic.resample import fit_preview


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as Braille art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-W", "--width", type=int, default=80, help="Output width in characters (default: 80)")
    parser.add_argument("-H", "--height", type=int, default=30, help="Output height in characters (default: 30)")
    parser.add_argument(
        "-k", "--keep-aspect", action="store_true", help="Derive the height from the width and image aspect ratio"
    )
    parser.add_argument(
        "-t", "--threshold", type=int, default=128, help="Luma cut-off for a raised dot, 0-255 (default: 128)"
    )
    parser.add_argument("-i", "--invert", action="store_true", help="Raise dots for dark pixels instead of bright")
    parser.add_argument("-b", "--brightness", type=int, default=0, help="Brightness, -100 to 100 (default: 0)")
    parser.add_argument("-c", "--contrast", type=int, default=0, help="Contrast, -100 to 100 (default: 0)")
    parser.add_argument("-s", "--saturation", type=int, default=0, help="Saturation, -100 to 100 (default: 0)")
    parser.add_argument("-S", "--sharpness", type=float, default=0.0, help="Sharpening, 0 to 5 (default: 0)")
    parser.add_argument("-o", "--output", help="Write the text to this file instead of stdout")
    parser.add_argument("--png", help="Also draw the text into this PNG file")
    parser.add_argument("--font-size", type=int, default=12, help="Font size for --png (default: 12)")
    parser.add_argument(
        "--font", default=None, help="TrueType font for --png (default: a system font with Braille glyphs)"
    )
    parser.add_argument(
        "--full-size", action="store_true", help="Don't shrink the image to 800x600 before processing"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details to stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    adjustments = AdjustmentParams(
        brightness=args.brightness,
        contrast=args.contrast,
        saturation=args.saturation,
        sharpness=args.sharpness,
    )
    request = GlyphGridRequest(
        chars_width=args.width,
        chars_height=args.height,
        threshold=args.threshold,
        invert=args.invert,
        keep_aspect=args.keep_aspect,
    )

    try:
        source = load_image(image_path)
        if not args.full_size:
            source = fit_preview(source)
        grid = render(source, adjustments, request)
        if args.png:
            write_png(grid, args.png, font_size=args.font_size, font_path=args.font)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if args.output:
        write_text(grid, args.output)
    else:
        sys.stdout.write(grid.text)
