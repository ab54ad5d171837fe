"""
Emoji atlas configuration.

Defaults for tile geometry, font selection and output naming. The command line
overrides them through BuildSettings.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

# =============================================================================
# Atlas Configuration - Must match the sprite loader on the client side
# =============================================================================
TILE_SIZE = 34  # pixels per tile, square
FONT_SIZE = 28  # leaves a few pixels of margin inside the tile

# Appearance
FILL_COLOR = (0, 0, 0, 255)      # Black, only used by monochrome fonts
BACKGROUND_COLOR = (0, 0, 0, 0)  # Transparent

# Output (fixed names, the client looks for exactly these)
OUTPUT_IMAGE_NAME = "emoji_atlas.png"
OUTPUT_JSON_NAME = "emoji_atlas.json"

# Report progress every N rendered glyphs
PROGRESS_EVERY = 32

# Fonts tried in order when no --font is given
FONT_SEARCH_PATHS = [
    '/System/Library/Fonts/Apple Color Emoji.ttc',
    'C:\\Windows\\Fonts\\seguiemj.ttf',
    '/usr/share/fonts/truetype/noto/NotoEmoji-Regular.ttf',
    '/usr/share/fonts/noto/NotoEmoji-Regular.ttf',
    '/System/Library/Fonts/Supplemental/Arial Unicode.ttf',  # scalable, few emoji
    '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',  # Fallback, no emoji
]

# Color emoji fonts only carry fixed bitmap sizes (Apple Color Emoji: 20..160,
# Noto Color Emoji: 109). When the requested size is missing, the closest
# strike not larger than it is used, then the closest larger one.
BITMAP_STRIKE_SIZES = (20, 26, 32, 40, 48, 52, 64, 96, 109, 160)

# =============================================================================
# Lookup Configuration
# =============================================================================
PRIVATE_USE_BASE = 0xF0000  # Supplementary Private Use Area-A
MAX_SEQUENCE_LENGTH = 8     # longest code point sequence matched in text


@dataclass(frozen=True)
class BuildSettings:
    """Everything one atlas build needs to know."""

    input_path: Path
    output_dir: Path
    tile_size: int = TILE_SIZE
    font_path: Optional[Path] = None
    font_size: int = FONT_SIZE
    verbose: bool = True

    def __post_init__(self):
        if not isinstance(self.tile_size, int) or self.tile_size <= 0:
            raise ConfigurationError(f"Tile size must be a positive integer, got {self.tile_size!r}")
        if not isinstance(self.font_size, int) or self.font_size <= 0:
            raise ConfigurationError(f"Font size must be a positive integer, got {self.font_size!r}")

    @property
    def image_path(self) -> Path:
        return Path(self.output_dir) / OUTPUT_IMAGE_NAME

    @property
    def json_path(self) -> Path:
        return Path(self.output_dir) / OUTPUT_JSON_NAME
