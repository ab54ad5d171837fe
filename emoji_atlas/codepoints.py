"""
Code point list parsing.

Each data line of a definition file looks like:

    1F468 200D 1F469 ; fully-qualified # optional trailing fields

Only the part before the first ';' is read. It holds one or more hexadecimal
code points separated by whitespace, which are joined into one display string.
Blank lines and lines starting with '#' are ignored.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .exceptions import InputUnavailableError

HEX_TOKEN = re.compile(r'\+?[0-9A-Fa-f]+')
MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


@dataclass(frozen=True)
class GlyphCandidate:
    """A decoded glyph and the code point label it came from."""

    display: str
    label: str


@dataclass(frozen=True)
class MalformedRecord:
    """A data line that could not be decoded. Skipped, never fatal."""

    line_number: int
    text: str
    reason: str


@dataclass
class ParseReport:
    candidates: List[GlyphCandidate]
    malformed: List[MalformedRecord]


def decode_code_points(spec: str) -> str:
    """
    Decode whitespace separated hex code points into a string.

    Raises ValueError when a token is not plain hex or not a Unicode scalar value.
    """
    chars = []
    for token in spec.split():
        if not HEX_TOKEN.fullmatch(token):
            raise ValueError(f"not a hex code point: {token!r}")
        value = int(token, 16)
        if value > MAX_CODE_POINT or value in SURROGATES:
            raise ValueError(f"not a Unicode scalar value: U+{value:X}")
        chars.append(chr(value))
    return ''.join(chars)


def parse_line(line: str, line_number: int = 0) -> Optional[Union[GlyphCandidate, MalformedRecord]]:
    """Parse one line. Returns None for blank and comment lines."""
    trimmed = line.strip()
    if not trimmed or trimmed.startswith('#'):
        return None

    label = trimmed.split(';', 1)[0].strip()
    try:
        display = decode_code_points(label)
    except ValueError as e:
        return MalformedRecord(line_number, line.rstrip('\r\n'), str(e))

    if not display:
        return MalformedRecord(line_number, line.rstrip('\r\n'), 'no code points before ";"')
    return GlyphCandidate(display, label)


def parse_lines(lines: Iterable[str]) -> ParseReport:
    """Parse every line, keeping candidates in input order."""
    report = ParseReport(candidates=[], malformed=[])
    for line_number, line in enumerate(lines, start=1):
        result = parse_line(line, line_number)
        if isinstance(result, GlyphCandidate):
            report.candidates.append(result)
        elif isinstance(result, MalformedRecord):
            report.malformed.append(result)
    return report


def load_candidates(path) -> ParseReport:
    """Read and parse a code point list file (UTF-8, BOM tolerated)."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InputUnavailableError(f"Cannot read code point list {path}: {e}") from e

    return parse_lines(lines)
