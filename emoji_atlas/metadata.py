"""
Atlas description document.

Shape written next to the atlas image:

    { "imageName": "emoji_atlas.png",
      "frames": [ { "name": "<glyph>", "codePoint": "<label>",
                    "frame": { "x": 0, "y": 0, "w": 34, "h": 34 } }, ... ] }

Frames follow acceptance order. Every frame is a full tile.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .composer import PlacedGlyph
from .config import OUTPUT_IMAGE_NAME
from .exceptions import AtlasDocumentError


@dataclass(frozen=True)
class Frame:
    name: str
    code_point: str
    x: int
    y: int
    w: int
    h: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'codePoint': self.code_point,
            'frame': {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h},
        }


@dataclass(frozen=True)
class AtlasDocument:
    image_name: str
    frames: List[Frame]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'imageName': self.image_name,
            'frames': [frame.to_dict() for frame in self.frames],
        }

    def to_json(self) -> str:
        """Serialized form; identical documents give identical text."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2) + '\n'

    @classmethod
    def from_dict(cls, data: Any) -> 'AtlasDocument':
        try:
            frames = [
                Frame(
                    name=str(entry['name']),
                    code_point=str(entry['codePoint']),
                    x=int(entry['frame']['x']),
                    y=int(entry['frame']['y']),
                    w=int(entry['frame']['w']),
                    h=int(entry['frame']['h']),
                )
                for entry in data['frames']
            ]
            image_name = str(data['imageName'])
        except (KeyError, TypeError, ValueError) as e:
            raise AtlasDocumentError(f"Malformed atlas document: {e!r}") from e

        for index, frame in enumerate(frames):
            if frame.w <= 0 or frame.h <= 0 or frame.x < 0 or frame.y < 0:
                raise AtlasDocumentError(
                    f"Frame {index} ({frame.code_point}) has an empty or negative rectangle: "
                    f"x={frame.x} y={frame.y} w={frame.w} h={frame.h}"
                )
        return cls(image_name=image_name, frames=frames)

    @classmethod
    def from_json(cls, text: str) -> 'AtlasDocument':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise AtlasDocumentError(f"Atlas document is not valid JSON: {e}") from e
        return cls.from_dict(data)


def build_document(placed: Optional[Sequence[PlacedGlyph]], tile_size: int,
                   image_name: str = OUTPUT_IMAGE_NAME) -> AtlasDocument:
    """One frame per placed glyph, in order. None counts as no glyphs."""
    frames = [
        Frame(
            name=glyph.display,
            code_point=glyph.label,
            x=glyph.column * tile_size,
            y=glyph.row * tile_size,
            w=tile_size,
            h=tile_size,
        )
        for glyph in placed or ()
    ]
    return AtlasDocument(image_name=image_name, frames=frames)
