"""
Atlas composition.

Runs every candidate through the rasterizer's width check, packs the ones that
fit onto the grid in arrival order and draws them into a single RGBA canvas.
A glyph that does not fit is recorded and skipped; it never stops the batch.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Union

from PIL import Image

from .codepoints import GlyphCandidate
from .config import BACKGROUND_COLOR, PROGRESS_EVERY
from .exceptions import CanvasAllocationError, EmptyInputError
from .layout import AtlasLayout, grid_position
from .rasterizer import GlyphRasterizer


@dataclass(frozen=True)
class PlacedGlyph:
    display: str
    label: str
    column: int
    row: int


@dataclass(frozen=True)
class Accepted:
    glyph: PlacedGlyph


@dataclass(frozen=True)
class RejectedTooWide:
    candidate: GlyphCandidate
    width: float


Outcome = Union[Accepted, RejectedTooWide]


@dataclass
class AtlasComposition:
    layout: AtlasLayout
    canvas: Image.Image
    outcomes: List[Outcome] = field(default_factory=list)

    @property
    def placed(self) -> List[PlacedGlyph]:
        """Accepted glyphs in acceptance order."""
        return [o.glyph for o in self.outcomes if isinstance(o, Accepted)]

    @property
    def rejected(self) -> List[RejectedTooWide]:
        return [o for o in self.outcomes if isinstance(o, RejectedTooWide)]


def allocate_canvas(layout: AtlasLayout) -> Image.Image:
    """Create the transparent RGBA canvas for `layout`."""
    try:
        return Image.new('RGBA', (layout.width, layout.height), BACKGROUND_COLOR)
    except (MemoryError, ValueError) as e:
        raise CanvasAllocationError(
            f"Cannot allocate a {layout.width}x{layout.height} atlas: {e}"
        ) from e


def compose(candidates: Sequence[GlyphCandidate], tile_size: int,
            rasterizer: GlyphRasterizer, verbose: bool = False) -> AtlasComposition:
    """Lay out and draw `candidates`; returns the canvas and one outcome per candidate."""
    if not candidates:
        raise EmptyInputError('No glyphs to pack')

    layout = AtlasLayout.for_count(len(candidates), tile_size)
    composition = AtlasComposition(layout=layout, canvas=allocate_canvas(layout))

    total = len(candidates)
    accepted_count = 0
    for index, candidate in enumerate(candidates):
        width = rasterizer.measure_width(candidate.display)

        # Wider than a tile: unrenderable at this size, not an error
        if width > tile_size:
            composition.outcomes.append(RejectedTooWide(candidate, width))
            if verbose:
                print(f"Skipped (too wide): {candidate.display} {candidate.label} "
                      f"({width:.1f}px > {tile_size}px)")
        else:
            column, row = grid_position(accepted_count, layout.columns)
            tile_x, tile_y = layout.cell_origin(column, row)
            rasterizer.render_centered(candidate.display, composition.canvas, tile_x, tile_y, tile_size)

            composition.outcomes.append(
                Accepted(PlacedGlyph(candidate.display, candidate.label, column, row))
            )
            accepted_count += 1

        # Progress indicator
        if verbose and ((index + 1) % PROGRESS_EVERY == 0 or index == total - 1):
            print(f"Rendered {accepted_count}/{total} glyphs...")

    return composition
