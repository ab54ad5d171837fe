import numpy as np
import pytest

from emoji_atlas.codepoints import GlyphCandidate
from emoji_atlas.composer import Accepted, RejectedTooWide, compose
from emoji_atlas.exceptions import CanvasAllocationError, EmptyInputError
from emoji_atlas.layout import AtlasLayout

from conftest import FakeRasterizer

A = GlyphCandidate('a', '61')
B = GlyphCandidate('b', '62')
C = GlyphCandidate('c', '63')


def test_rejected_glyph_does_not_consume_a_cell():
    rasterizer = FakeRasterizer(widths={'b': 40})
    composition = compose([A, B, C], 34, rasterizer)

    assert [(g.label, g.column, g.row) for g in composition.placed] == [('61', 0, 0), ('63', 1, 0)]
    assert composition.rejected == [RejectedTooWide(B, 40)]
    assert rasterizer.rendered == [('a', 0, 0), ('c', 34, 0)]


def test_outcomes_follow_input_order():
    composition = compose([A, B, C], 34, FakeRasterizer(widths={'a': 35}))
    assert [type(o) for o in composition.outcomes] == [RejectedTooWide, Accepted, Accepted]


def test_width_equal_to_tile_fits():
    composition = compose([A], 34, FakeRasterizer(widths={'a': 34}))
    assert len(composition.placed) == 1


def test_grid_is_sized_for_all_candidates():
    composition = compose([A, B, C], 34, FakeRasterizer(widths={'b': 99, 'c': 99}))
    assert composition.layout == AtlasLayout(tile_size=34, columns=2, rows=2)
    assert composition.canvas.size == (68, 68)
    assert composition.canvas.mode == 'RGBA'


def test_background_stays_transparent(rasterizer):
    composition = compose([A, B, C], 34, rasterizer)
    alpha = np.asarray(composition.canvas)[:, :, 3]
    # fourth cell never used
    assert not alpha[34:, 34:].any()
    assert alpha[:34, :34].any()
    assert alpha[:34, 34:].any()
    assert alpha[34:, :34].any()


def test_all_rejected_still_yields_canvas():
    composition = compose([A, B], 34, FakeRasterizer(default_width=50))
    assert composition.placed == []
    assert not np.asarray(composition.canvas)[:, :, 3].any()


def test_empty_input_packs_nothing(rasterizer):
    with pytest.raises(EmptyInputError):
        compose([], 34, rasterizer)
    assert rasterizer.rendered == []


def test_canvas_allocation_failure(monkeypatch, rasterizer):
    def refuse(*args, **kwargs):
        raise MemoryError('out of memory')

    monkeypatch.setattr('emoji_atlas.composer.Image.new', refuse)
    with pytest.raises(CanvasAllocationError):
        compose([A], 34, rasterizer)


def test_verbose_reports_skips(capsys):
    compose([A, B], 34, FakeRasterizer(widths={'b': 40}), verbose=True)
    out = capsys.readouterr().out
    assert 'Skipped (too wide): b 62 (40.0px > 34px)' in out


def test_progress_reaches_last_candidate_when_it_is_rejected(capsys):
    compose([A, B], 34, FakeRasterizer(widths={'b': 40}), verbose=True)
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == 'Rendered 1/2 glyphs...'
