"""CLI tool for converting images to ZPL labels."""

import argparse
import logging
import sys
from pathlib import Path

from zplimage.config import ConverterConfig, load_config
from zplimage.converter import ImageZplConverter
from zplimage.converters.errors import ConversionError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for zplimage-convert CLI."""
    parser = argparse.ArgumentParser(
        description="Convert an image to a ZPL ^GFA label command.",
        prog="zplimage-convert",
    )
    parser.add_argument(
        "image",
        type=Path,
        help="Path to image file (PNG, JPEG, BMP, ...)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: stdout for zpl, preview.png for png)",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help="Label width in dots (default: 560, rounded up to a multiple of 8)",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Luminance below which a dot prints, 1-255 (default: 128)",
    )
    parser.add_argument(
        "--darkness",
        type=int,
        default=None,
        help="Print darkness 0-30 (adds ~SD command)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with converter defaults",
    )
    parser.add_argument(
        "--format",
        choices=["zpl", "png"],
        default="zpl",
        help="Output format (default: zpl)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline details to stderr",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Check image exists
    if not args.image.exists():
        print(f"Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    # Build configuration: file defaults, then command line overrides
    try:
        defaults = load_config(args.config) if args.config else ConverterConfig()
        overrides = {
            key: value
            for key, value in (("width", args.width), ("threshold", args.threshold), ("darkness", args.darkness))
            if value is not None
        }
        converter = ImageZplConverter(**{**defaults.model_dump(), **overrides})
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Convert
    try:
        if args.format == "png":
            output = converter.preview(args.image)
        else:
            output = converter.convert(args.image).command_bytes()
    except ConversionError as e:
        print(f"Error converting image ({e.stage} stage): {e}", file=sys.stderr)
        return 1

    # Write output
    output_path = args.output
    if output_path is None and args.format == "png":
        output_path = Path("preview.png")

    if output_path is None:
        sys.stdout.buffer.write(output)
        sys.stdout.buffer.flush()
        return 0

    try:
        with open(output_path, "wb") as f:
            f.write(output)
        print(f"Converted to {output_path}", file=sys.stderr)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
