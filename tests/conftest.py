import pytest
from PIL import ImageDraw

INK = (255, 0, 0, 255)


class FakeRasterizer:
    """Scripted widths; draws an opaque square centred in the tile."""

    def __init__(self, widths=None, default_width=20, metrics=(24, 6)):
        self.widths = widths or {}
        self.default_width = default_width
        self.metrics = metrics
        self.rendered = []

    def measure_width(self, text):
        return self.widths.get(text, self.default_width)

    def font_metrics(self):
        return self.metrics

    def render_centered(self, text, canvas, tile_x, tile_y, tile_size):
        self.rendered.append((text, tile_x, tile_y))
        size = int(self.measure_width(text))
        left = tile_x + (tile_size - size) // 2
        top = tile_y + (tile_size - size) // 2
        ImageDraw.Draw(canvas).rectangle([left, top, left + size - 1, top + size - 1], fill=INK)


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


@pytest.fixture
def write_list(tmp_path):
    def _write(*lines, name='emoji.txt'):
        path = tmp_path / name
        path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        return path
    return _write
