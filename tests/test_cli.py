import json

import pytest

from emoji_atlas import cli

from conftest import FakeRasterizer


@pytest.fixture(autouse=True)
def fake_font(monkeypatch):
    monkeypatch.setattr('emoji_atlas.pipeline.default_rasterizer', lambda *args: FakeRasterizer())


def test_build_command(tmp_path, write_list, capsys):
    out = tmp_path / 'out'
    assert cli.main(['build', str(write_list('1F600', '1F602')), str(out), '--tile-size', '40']) == 0
    data = json.loads((out / 'emoji_atlas.json').read_text(encoding='utf-8'))
    assert [f['frame']['x'] for f in data['frames']] == [0, 40]
    assert 'Done!' in capsys.readouterr().out


def test_build_quiet(tmp_path, write_list, capsys):
    assert cli.main(['build', str(write_list('1F600')), str(tmp_path / 'out'), '--quiet']) == 0
    assert capsys.readouterr().out == ''


def test_build_empty_input_exits_with_error(tmp_path, write_list, capsys):
    out = tmp_path / 'out'
    assert cli.main(['build', str(write_list('# only a comment')), str(out)]) == 1
    assert 'ERROR: No usable code points' in capsys.readouterr().err
    assert not out.exists()


def test_build_bad_tile_size(tmp_path, write_list, capsys):
    assert cli.main(['build', str(write_list('1F600')), str(tmp_path), '--tile-size', '0']) == 1
    assert 'ERROR: Tile size' in capsys.readouterr().err


def test_inspect_and_preview(tmp_path, write_list, capsys):
    out = tmp_path / 'out'
    cli.main(['build', str(write_list('1F600', '1F602', '1F603')), str(out), '--quiet'])

    assert cli.main(['inspect', str(out)]) == 0
    report = capsys.readouterr().out
    assert 'Frames: 3' in report
    assert 'Cells with pixels: 3, empty: 1' in report

    target = tmp_path / 'preview.png'
    assert cli.main(['preview', str(out), '\U0001F602\U0001F600', '--output', str(target)]) == 0
    assert target.exists()


def test_inspect_missing_atlas(tmp_path, capsys):
    assert cli.main(['inspect', str(tmp_path)]) == 1
    assert 'ERROR:' in capsys.readouterr().err


@pytest.mark.parametrize('field, value', [('w', 0), ('h', 0), ('y', 340)])
def test_inspect_bad_frames_report_error(tmp_path, write_list, capsys, field, value):
    out = tmp_path / 'out'
    cli.main(['build', str(write_list('1F600', '1F602')), str(out), '--quiet'])
    json_path = out / 'emoji_atlas.json'
    data = json.loads(json_path.read_text(encoding='utf-8'))
    data['frames'][1]['frame'][field] = value
    json_path.write_text(json.dumps(data), encoding='utf-8')

    assert cli.main(['inspect', str(out)]) == 1
    assert 'ERROR:' in capsys.readouterr().err
