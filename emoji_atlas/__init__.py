"""Pack Unicode code point sequences into one emoji atlas image and its frame list."""

from .codepoints import GlyphCandidate, MalformedRecord, load_candidates, parse_line, parse_lines
from .composer import Accepted, AtlasComposition, PlacedGlyph, RejectedTooWide, compose
from .exceptions import (
    AtlasDocumentError,
    AtlasError,
    CanvasAllocationError,
    ConfigurationError,
    EmptyInputError,
    FontUnavailableError,
    InputUnavailableError,
    OutputWriteError,
)
from .layout import AtlasLayout, grid_position
from .lookup import CodePointTable
from .metadata import AtlasDocument, Frame, build_document
from .pipeline import AtlasBuilder, BuildReport, PipelineState, build_atlas
from .rasterizer import GlyphRasterizer, PillowRasterizer

__version__ = "0.1.0"
