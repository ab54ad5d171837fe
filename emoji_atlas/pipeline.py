"""
Emoji atlas build pipeline.

Loading -> Composing -> Done, with Failed reachable from Loading (unreadable or
empty input) and from Composing (font, canvas or output failure). A failed run
removes whatever files it wrote and re-raises; there is no retry.
"""

import enum
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from PIL import Image

from .codepoints import MalformedRecord, load_candidates
from .composer import AtlasComposition, compose
from .config import OUTPUT_IMAGE_NAME, BuildSettings
from .exceptions import AtlasError, EmptyInputError, OutputWriteError
from .metadata import AtlasDocument, build_document
from .rasterizer import GlyphRasterizer, default_rasterizer


class PipelineState(enum.Enum):
    LOADING = 'loading'
    COMPOSING = 'composing'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class BuildReport:
    composition: AtlasComposition
    document: AtlasDocument
    malformed: List[MalformedRecord] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)


def encode_png(canvas: Image.Image) -> bytes:
    buffer = io.BytesIO()
    canvas.save(buffer, 'PNG')
    return buffer.getvalue()


def write_outputs(output_dir: Path, image_bytes: bytes, document: AtlasDocument,
                  json_name: str) -> List[Path]:
    """
    Write the image and the JSON document into `output_dir`.

    On failure every file this call started writing is removed before OutputWriteError
    is raised. Files are not replaced atomically.
    """
    output_dir = Path(output_dir)
    written = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        image_path = output_dir / document.image_name
        written.append(image_path)
        image_path.write_bytes(image_bytes)

        json_path = output_dir / json_name
        written.append(json_path)
        json_path.write_text(document.to_json(), encoding='utf-8')
    except OSError as e:
        for path in written:
            if path.is_file():
                path.unlink()
        raise OutputWriteError(f"Cannot write atlas to {output_dir}: {e}") from e
    return written


class AtlasBuilder:
    """Runs one atlas build and tracks which stage it is in."""

    def __init__(self, settings: BuildSettings, rasterizer: Optional[GlyphRasterizer] = None):
        self.settings = settings
        self.rasterizer = rasterizer
        self.state = PipelineState.LOADING

    def log(self, message=''):
        if self.settings.verbose:
            print(message)

    def run(self) -> BuildReport:
        try:
            return self._run()
        except AtlasError:
            self.state = PipelineState.FAILED
            raise

    def _run(self) -> BuildReport:
        settings = self.settings

        self.state = PipelineState.LOADING
        parsed = load_candidates(settings.input_path)
        for record in parsed.malformed:
            self.log(f"WARNING: line {record.line_number} skipped ({record.reason}): {record.text}")
        if not parsed.candidates:
            raise EmptyInputError(
                f"No usable code points in {settings.input_path} "
                f"({len(parsed.malformed)} malformed line(s))"
            )

        self.state = PipelineState.COMPOSING
        if self.rasterizer is None:
            self.rasterizer = default_rasterizer(settings.font_path, settings.font_size)
        self.print_config(len(parsed.candidates))

        composition = compose(parsed.candidates, settings.tile_size, self.rasterizer,
                              verbose=settings.verbose)
        document = build_document(composition.placed, settings.tile_size, OUTPUT_IMAGE_NAME)

        image_bytes = encode_png(composition.canvas)
        written = write_outputs(settings.output_dir, image_bytes, document, settings.json_path.name)
        for path in written:
            self.log(f"Saved: {path}")

        self.log(f"Packed {len(composition.placed)} glyphs, "
                 f"skipped {len(composition.rejected)} too wide, "
                 f"{len(parsed.malformed)} malformed")
        self.state = PipelineState.DONE
        return BuildReport(composition, document, parsed.malformed, written)

    def print_config(self, candidate_count):
        """Print configuration on startup"""
        s = self.settings
        self.log("=== Emoji Atlas Builder ===")
        self.log(f"Input: {s.input_path}")
        self.log(f"Candidates: {candidate_count}")
        self.log(f"Tile size: {s.tile_size}x{s.tile_size} pixels")
        name = getattr(self.rasterizer, 'name', type(self.rasterizer).__name__)
        size = getattr(self.rasterizer, 'size', s.font_size)
        self.log(f"Font: {name} @ {size}px")
        self.log(f"Output: {s.image_path} + {s.json_path.name}")
        self.log()


def build_atlas(input_path, output_dir, rasterizer: Optional[GlyphRasterizer] = None,
                **options) -> BuildReport:
    """Build an atlas from a code point list. `options` are BuildSettings fields."""
    settings = BuildSettings(input_path=Path(input_path), output_dir=Path(output_dir), **options)
    return AtlasBuilder(settings, rasterizer).run()
