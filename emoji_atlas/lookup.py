"""
Code point sequence lookup.

Text renderers that draw emoji from the atlas address each frame through a
private-use character: frame i becomes U+F0000 + i. CodePointTable maps code
point sequences (as written in the frame labels) to those characters and
rewrites plain text accordingly, preferring the longest sequence at each
position so that ZWJ sequences win over their parts.
"""

from typing import Dict, Iterable, Optional, Sequence

from .config import MAX_SEQUENCE_LENGTH, PRIVATE_USE_BASE
from .exceptions import AtlasDocumentError
from .metadata import AtlasDocument


class _Node:
    __slots__ = ('children', 'private_code_point')

    def __init__(self):
        self.children: Dict[int, '_Node'] = {}
        self.private_code_point: Optional[int] = None


class CodePointTable:
    """Trie of code point sequences."""

    def __init__(self, max_length: int = MAX_SEQUENCE_LENGTH):
        self.max_length = max_length
        self._root = _Node()
        self._size = 0

    def __len__(self):
        return self._size

    @classmethod
    def from_document(cls, document: AtlasDocument, base: int = PRIVATE_USE_BASE) -> 'CodePointTable':
        table = cls()
        for index, frame in enumerate(document.frames):
            try:
                table.add(frame.code_point, base + index)
            except ValueError as e:
                raise AtlasDocumentError(f"Frame {index} has a bad codePoint {frame.code_point!r}") from e
        return table

    def add(self, label: str, private_code_point: int):
        """Register a label such as '1F468 200D 1F469'."""
        self.add_sequence([int(token, 16) for token in label.split()], private_code_point)

    def add_sequence(self, code_points: Sequence[int], private_code_point: int):
        if not code_points:
            raise ValueError('Cannot register an empty code point sequence')
        node = self._root
        for cp in code_points:
            node = node.children.setdefault(cp, _Node())
        if node.private_code_point is None:
            self._size += 1
        node.private_code_point = private_code_point

    def lookup(self, code_points: Iterable[int]) -> Optional[int]:
        """Private code point registered for exactly this sequence, if any."""
        node = self._root
        for cp in code_points:
            node = node.children.get(cp)
            if node is None:
                return None
        return node.private_code_point

    def longest_match(self, text: str, start: int):
        """
        Find the longest registered sequence starting at text[start].

        Returns (private_code_point, length) or None.
        """
        node = self._root
        best = None
        for offset in range(min(self.max_length, len(text) - start)):
            node = node.children.get(ord(text[start + offset]))
            if node is None:
                break
            if node.private_code_point is not None:
                best = (node.private_code_point, offset + 1)
        return best

    def replace_text(self, text: str) -> str:
        """Swap every registered emoji sequence in `text` for its private-use character."""
        out = []
        i = 0
        while i < len(text):
            match = self.longest_match(text, i)
            if match is None:
                out.append(text[i])
                i += 1
            else:
                private_code_point, length = match
                out.append(chr(private_code_point))
                i += length
        return ''.join(out)
