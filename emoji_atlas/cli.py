#!/usr/bin/env python3
"""
Emoji atlas command line.

Usage:
    emoji-atlas build emoji-test.txt out/
    emoji-atlas build emoji-test.txt out/ --font /path/to/NotoEmoji-Regular.ttf --font-size 28 --tile-size 34
    emoji-atlas preview out/ "Hello 👋🏽 world 🌍"
    emoji-atlas inspect out/
"""

import argparse
import sys
from pathlib import Path

from .config import FONT_SIZE, TILE_SIZE, BuildSettings
from .exceptions import AtlasDocumentError, AtlasError
from .pipeline import AtlasBuilder
from .preview import AtlasPreview, load_atlas, tile_coverage

PREVIEW_OUTPUT = "preview_output.png"


def cmd_build(args):
    settings = BuildSettings(
        input_path=Path(args.input),
        output_dir=Path(args.output_dir),
        tile_size=args.tile_size,
        font_path=Path(args.font) if args.font else None,
        font_size=args.font_size,
        verbose=not args.quiet,
    )
    AtlasBuilder(settings).run()
    if not args.quiet:
        print("\nDone!")


def cmd_preview(args):
    atlas = load_atlas(args.atlas_dir)
    print(f"Atlas loaded: {atlas.image.width}x{atlas.image.height}, {len(atlas.document.frames)} frames")
    image = AtlasPreview(atlas).render_text(args.text)
    image.save(args.output)
    print(f"Saved output to: {args.output}")


def cmd_inspect(args):
    atlas = load_atlas(args.atlas_dir)
    frames = atlas.document.frames
    print(f"Image: {atlas.document.image_name} ({atlas.image.width}x{atlas.image.height})")
    print(f"Frames: {len(frames)}")
    if not frames:
        return

    coverage = tile_coverage(atlas.image, atlas.tile_size)
    rows, columns = coverage.shape
    used = int(coverage.sum())
    print(f"Grid: {columns} cols x {rows} rows, tile {atlas.tile_size}px")
    print(f"Cells with pixels: {used}, empty: {coverage.size - used}")

    # A frame whose tile came out blank usually means the font lacks the glyph
    tile = atlas.tile_size
    for frame in frames:
        row, column = frame.y // tile, frame.x // tile
        if row >= rows or column >= columns:
            raise AtlasDocumentError(
                f"Frame {frame.code_point} at ({frame.x},{frame.y}) is off the {columns}x{rows} grid"
            )
        if not coverage[row, column]:
            print(f"  Warning: frame {frame.code_point} ({frame.name}) is blank")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='emoji-atlas',
        description='Pack a list of Unicode code points into one emoji atlas image plus JSON frames',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest='command', required=True)

    build = sub.add_parser('build', help='Build emoji_atlas.png and emoji_atlas.json')
    build.add_argument('input', help='Code point list, one sequence per line')
    build.add_argument('output_dir', help='Directory for the atlas files (created if absent)')
    build.add_argument('--font', default=None,
                       help='Font file (default: first emoji font found on this system)')
    build.add_argument('--font-size', type=int, default=FONT_SIZE,
                       help=f'Font size in pixels (default: {FONT_SIZE})')
    build.add_argument('--tile-size', type=int, default=TILE_SIZE,
                       help=f'Tile size in pixels (default: {TILE_SIZE})')
    build.add_argument('--quiet', action='store_true', help='Only report errors')
    build.set_defaults(func=cmd_build)

    preview = sub.add_parser('preview', help='Render text using a built atlas')
    preview.add_argument('atlas_dir', help='Directory holding emoji_atlas.json')
    preview.add_argument('text', help='Text to render')
    preview.add_argument('--output', default=PREVIEW_OUTPUT,
                         help=f'Output PNG file (default: {PREVIEW_OUTPUT})')
    preview.set_defaults(func=cmd_preview)

    inspect = sub.add_parser('inspect', help='Summarize a built atlas')
    inspect.add_argument('atlas_dir', help='Directory holding emoji_atlas.json')
    inspect.set_defaults(func=cmd_inspect)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except AtlasError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
