import json

import pytest

from emoji_atlas.composer import PlacedGlyph
from emoji_atlas.exceptions import AtlasDocumentError
from emoji_atlas.metadata import AtlasDocument, Frame, build_document

PLACED = [
    PlacedGlyph('\U0001F600', '1F600', 0, 0),
    PlacedGlyph('\U0001F602', '1F602', 1, 0),
    PlacedGlyph('\U0001F44B\U0001F3FD', '1F44B 1F3FD', 0, 1),
]


def test_frames_are_full_tiles_at_grid_positions():
    document = build_document(PLACED, 34)
    assert document.image_name == 'emoji_atlas.png'
    assert [(f.x, f.y, f.w, f.h) for f in document.frames] == [
        (0, 0, 34, 34),
        (34, 0, 34, 34),
        (0, 34, 34, 34),
    ]
    assert [f.code_point for f in document.frames] == ['1F600', '1F602', '1F44B 1F3FD']


def test_none_means_no_frames():
    assert build_document(None, 34).frames == []


def test_json_shape():
    data = json.loads(build_document(PLACED[:1], 34, 'atlas.png').to_json())
    assert data == {
        'imageName': 'atlas.png',
        'frames': [
            {'name': '\U0001F600', 'codePoint': '1F600', 'frame': {'x': 0, 'y': 0, 'w': 34, 'h': 34}},
        ],
    }
    assert isinstance(data['frames'][0]['frame']['w'], int)


def test_json_keeps_emoji_unescaped():
    text = build_document(PLACED, 34).to_json()
    assert '\U0001F600' in text
    assert text == build_document(list(PLACED), 34).to_json()


def test_read_back():
    document = build_document(PLACED, 34)
    assert AtlasDocument.from_json(document.to_json()) == document


def test_read_back_accepts_float_numbers():
    text = '{"imageName": "a.png", "frames": [{"name": "x", "codePoint": "78", "frame": {"x": 34.0, "y": 0.0, "w": 34.0, "h": 34.0}}]}'
    assert AtlasDocument.from_json(text).frames == [Frame('x', '78', 34, 0, 34, 34)]


@pytest.mark.parametrize('text', ['not json', '{}', '{"imageName": "a.png", "frames": [{"name": "x"}]}', '[]'])
def test_malformed_documents(text):
    with pytest.raises(AtlasDocumentError):
        AtlasDocument.from_json(text)


@pytest.mark.parametrize('rect', [
    {'x': 0, 'y': 0, 'w': 0, 'h': 34},
    {'x': 0, 'y': 0, 'w': 34, 'h': 0},
    {'x': -34, 'y': 0, 'w': 34, 'h': 34},
])
def test_empty_or_negative_rectangles(rect):
    data = {'imageName': 'a.png', 'frames': [{'name': 'x', 'codePoint': '78', 'frame': rect}]}
    with pytest.raises(AtlasDocumentError):
        AtlasDocument.from_dict(data)
