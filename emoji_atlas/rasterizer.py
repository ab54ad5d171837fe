"""
Glyph rasterizing.

The composer only talks to the GlyphRasterizer protocol. PillowRasterizer is the
bundled backend built on FreeType through Pillow; any other backend (a test
double, a platform text renderer) works as long as it offers the same three
methods.
"""

from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .config import BITMAP_STRIKE_SIZES, FILL_COLOR, FONT_SEARCH_PATHS, FONT_SIZE
from .exceptions import FontUnavailableError
from .layout import glyph_anchor


class GlyphRasterizer(Protocol):
    def measure_width(self, text: str) -> float:
        """Rendered advance width of `text` in pixels."""

    def font_metrics(self) -> Tuple[float, float]:
        """(ascent, descent), both positive distances from the baseline."""

    def render_centered(self, text: str, canvas: Image.Image, tile_x: int, tile_y: int, tile_size: int) -> None:
        """Draw `text` centred in the tile whose top-left corner is (tile_x, tile_y)."""


def load_font(path, size: int, strike_sizes: Sequence[int] = BITMAP_STRIKE_SIZES) -> ImageFont.FreeTypeFont:
    """
    Open `path` at `size`, or at the nearest bitmap strike for fonts that only
    carry fixed sizes. Raises the original OSError when no size loads.
    """
    try:
        return ImageFont.truetype(str(path), size)
    except OSError as e:
        error = e

    for strike in sorted(strike_sizes, key=lambda s: (s > size, abs(s - size))):
        if strike == size:
            continue
        try:
            return ImageFont.truetype(str(path), strike)
        except OSError:
            continue
    raise error


class PillowRasterizer:
    """Draws glyphs with a FreeType font, keeping color bitmaps when the font has them."""

    def __init__(self, font: ImageFont.FreeTypeFont, fill=FILL_COLOR):
        self.font = font
        self.fill = fill

    @classmethod
    def from_font(cls, font_path=None, font_size: int = FONT_SIZE,
                  search_paths: Sequence[str] = FONT_SEARCH_PATHS) -> 'PillowRasterizer':
        """
        Load `font_path`, or the first loadable font of `search_paths` when no
        path is given.
        """
        if font_path is not None:
            try:
                return cls(load_font(font_path, font_size))
            except OSError as e:
                raise FontUnavailableError(f"Failed to load font from {font_path}: {e}") from e

        for candidate in search_paths:
            if not Path(candidate).exists():
                continue
            try:
                font = load_font(candidate, font_size)
            except OSError:
                continue
            return cls(font)

        raise FontUnavailableError(
            f"No usable font found at size {font_size}. Tried: {', '.join(search_paths)}"
        )

    @property
    def name(self) -> str:
        family, style = self.font.getname()
        return f"{family} {style}".strip()

    @property
    def size(self) -> int:
        return self.font.size

    def measure_width(self, text: str) -> float:
        return self.font.getlength(text)

    def font_metrics(self) -> Tuple[float, float]:
        return self.font.getmetrics()

    def render_centered(self, text, canvas, tile_x, tile_y, tile_size):
        ascent, descent = self.font_metrics()
        x, y = glyph_anchor(tile_x, tile_y, tile_size, ascent, descent)
        draw = ImageDraw.Draw(canvas)
        # 'ms' anchor = horizontal middle, baseline
        draw.text((x, y), text, font=self.font, fill=self.fill, anchor='ms', embedded_color=True)


def default_rasterizer(font_path: Optional[Path] = None, font_size: int = FONT_SIZE) -> PillowRasterizer:
    return PillowRasterizer.from_font(font_path, font_size)
