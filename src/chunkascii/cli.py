import argparse
import asyncio
import logging
import sys
from pathlib import Path

from chunkascii.errors import ChunkAsciiError
from chunkascii.renderer import DEFAULT_CHUNK_HEIGHT, DEFAULT_CHUNK_WIDTH, image_to_ascii
from chunkascii.source import ImageSource


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as ASCII art")
    parser.add_argument("image", help="Path or http(s) URL of the input image")
    parser.add_argument(
        "-W",
        "--chunk-width",
        type=int,
        default=DEFAULT_CHUNK_WIDTH,
        help=f"Pixels per character horizontally (default: {DEFAULT_CHUNK_WIDTH})",
    )
    parser.add_argument(
        "-H",
        "--chunk-height",
        type=int,
        default=DEFAULT_CHUNK_HEIGHT,
        help=f"Pixels per character vertically (default: {DEFAULT_CHUNK_HEIGHT})",
    )
    parser.add_argument(
        "-r", "--reverse", action="store_true", default=False, help="Reverse the ramp for light-on-dark output"
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write to this file instead of stdout")
    parser.add_argument("-t", "--timeout", type=float, default=None, help="Timeout in seconds for URL downloads")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    source = ImageSource(timeout=args.timeout)
    try:
        art = asyncio.run(
            image_to_ascii(args.image, args.chunk_width, args.chunk_height, args.reverse, pixel_source=source)
        )
    except ChunkAsciiError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output is not None:
        try:
            args.output.write_text(art, encoding="utf-8")
        except OSError as e:
            print(f"error: cannot write {args.output}: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        sys.stdout.write(art)
