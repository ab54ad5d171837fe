"""
Atlas read-back tools.

Loads a built atlas, renders text with it the way a client would (emoji
sequences replaced by their tiles) and reports which grid cells hold pixels.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import numpy as np
from PIL import Image

from .config import OUTPUT_JSON_NAME, PRIVATE_USE_BASE
from .exceptions import AtlasDocumentError
from .lookup import CodePointTable
from .metadata import AtlasDocument, Frame

PREVIEW_BACKGROUND = (40, 40, 40, 255)
PREVIEW_PADDING = 16


@dataclass
class LoadedAtlas:
    document: AtlasDocument
    image: Image.Image

    @property
    def tile_size(self) -> int:
        return self.document.frames[0].w if self.document.frames else 0


def load_atlas(directory) -> LoadedAtlas:
    """Load the JSON document in `directory` and the image it names."""
    directory = Path(directory)
    json_path = directory / OUTPUT_JSON_NAME
    try:
        text = json_path.read_text(encoding='utf-8')
    except OSError as e:
        raise AtlasDocumentError(f"Cannot read atlas document {json_path}: {e}") from e
    document = AtlasDocument.from_json(text)

    image_path = directory / document.image_name
    try:
        with Image.open(image_path) as img:
            image = img.convert('RGBA')
    except OSError as e:
        raise AtlasDocumentError(f"Cannot read atlas image {image_path}: {e}") from e

    for frame in document.frames:
        if frame.x + frame.w > image.width or frame.y + frame.h > image.height:
            raise AtlasDocumentError(
                f"Frame {frame.code_point} ({frame.x},{frame.y} {frame.w}x{frame.h}) lies outside "
                f"the {image.width}x{image.height} atlas image"
            )

    return LoadedAtlas(document, image)


def tile_coverage(image: Image.Image, tile_size: int) -> np.ndarray:
    """
    Boolean grid (rows x columns): True where a cell has any non-transparent pixel.
    """
    if tile_size <= 0:
        raise ValueError(f"Tile size must be positive, got {tile_size}")
    alpha = np.asarray(image.convert('RGBA'))[:, :, 3]
    rows = alpha.shape[0] // tile_size
    columns = alpha.shape[1] // tile_size
    cells = alpha[:rows * tile_size, :columns * tile_size].reshape(rows, tile_size, columns, tile_size)
    return cells.any(axis=(1, 3))


class AtlasPreview:
    """Composes text out of atlas tiles, left to right"""

    def __init__(self, atlas: LoadedAtlas):
        self.atlas = atlas
        self.table = CodePointTable.from_document(atlas.document)

    def frame_for(self, private_code_point: int) -> Frame:
        return self.atlas.document.frames[private_code_point - PRIVATE_USE_BASE]

    def extract_tile(self, frame: Frame) -> Image.Image:
        """Cut a frame's tile out of the atlas"""
        return self.atlas.image.crop((frame.x, frame.y, frame.x + frame.w, frame.y + frame.h))

    def layout_text(self, text: str) -> Tuple[List[Frame], List[str]]:
        """Frames to draw for `text`, plus the characters the atlas cannot show."""
        frames = []
        missing = []
        replaced = self.table.replace_text(text)
        for ch in replaced:
            cp = ord(ch)
            if PRIVATE_USE_BASE <= cp < PRIVATE_USE_BASE + len(self.atlas.document.frames):
                frames.append(self.frame_for(cp))
            elif not ch.isspace():
                missing.append(ch)
        return frames, missing

    def render_text(self, text: str) -> Image.Image:
        frames, missing = self.layout_text(text)
        for ch in missing:
            print(f"  Warning: Character '{ch}' (U+{ord(ch):04X}) not found in atlas")

        tile = self.atlas.tile_size
        canvas_width = max(len(frames), 1) * tile + PREVIEW_PADDING * 2
        canvas_height = tile + PREVIEW_PADDING * 2
        canvas = Image.new('RGBA', (canvas_width, canvas_height), PREVIEW_BACKGROUND)

        for i, frame in enumerate(frames):
            cell = self.extract_tile(frame)
            canvas.paste(cell, (PREVIEW_PADDING + i * tile, PREVIEW_PADDING), cell)

        return canvas
