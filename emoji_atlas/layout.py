"""
Atlas grid geometry.

The grid is square-ish: columns = ceil(sqrt(n)), rows = ceil(n / columns),
sized for every candidate being accepted. Rejected glyphs leave trailing
cells empty.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AtlasLayout:
    tile_size: int
    columns: int
    rows: int

    @classmethod
    def for_count(cls, count: int, tile_size: int) -> 'AtlasLayout':
        """Size the grid for `count` glyphs (count must be >= 1)."""
        if count < 1:
            raise ValueError(f"Cannot lay out {count} glyphs")
        columns = math.isqrt(count)
        if columns * columns < count:
            columns += 1
        rows = -(-count // columns)
        return cls(tile_size=tile_size, columns=columns, rows=rows)

    @property
    def width(self) -> int:
        return self.columns * self.tile_size

    @property
    def height(self) -> int:
        return self.rows * self.tile_size

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    def cell_origin(self, column: int, row: int) -> Tuple[int, int]:
        """Top-left pixel of a grid cell."""
        return column * self.tile_size, row * self.tile_size


def grid_position(index: int, columns: int) -> Tuple[int, int]:
    """Column and row of the index-th accepted glyph, filling rows left to right."""
    return index % columns, index // columns


def glyph_anchor(tile_x, tile_y, tile_size, ascent, descent) -> Tuple[float, float]:
    """
    Horizontal middle and baseline for drawing a glyph centred in its tile.

    The baseline sits below the tile centre by half of (ascent - descent), so the
    middle of the font's ascent..descent box lands on the tile centre rather than
    the baseline. Both metrics are positive distances from the baseline.
    """
    center_x = tile_x + tile_size / 2
    center_y = tile_y + tile_size / 2
    return center_x, center_y + (ascent - descent) / 2
