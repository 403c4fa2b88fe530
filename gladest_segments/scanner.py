"""Delimiter scanning for ``$...$`` and ``$$...$$`` math.

Every function here is pure: it looks at ``src`` from ``pos`` up to
``limit`` and either returns a MathRegion (whose ``end`` is the new cursor)
or None, leaving the caller free to try another rule at the same place.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

BLOCK_MARKER = '$$'
INLINE_MARKER = '$'


class MathKind(Enum):
    INLINE = INLINE_MARKER
    BLOCK = BLOCK_MARKER

    @property
    def delimiter(self):
        return self.value

    @property
    def context(self):
        return 'block' if self is MathKind.BLOCK else 'inline'

    @property
    def tag(self):
        return 'div' if self is MathKind.BLOCK else 'span'


@dataclass(frozen=True)
class MathRegion:
    kind: MathKind
    content: str
    span: Tuple[int, int]

    def __post_init__(self):
        if not self.content.strip():
            raise ValueError("math region content must not be empty")

    @property
    def start(self):
        return self.span[0]

    @property
    def end(self):
        return self.span[1]


def _limit(src, limit):
    return len(src) if limit is None else min(limit, len(src))


def _line_end(src, pos, limit):
    idx = src.find('\n', pos, limit)
    return limit if idx == -1 else idx


def is_escaped(src, pos):
    """True when the character at ``pos`` follows an odd run of backslashes."""
    count = 0
    i = pos - 1
    while i >= 0 and src[i] == '\\':
        count += 1
        i -= 1
    return count % 2 == 1


def _open_block(src, pos, limit):
    if pos > 0 and src[pos - 1] != '\n':
        return None
    i = pos
    while i < limit and src[i] in ' \t':
        i += 1
    if src.startswith(BLOCK_MARKER, i, limit):
        return i + len(BLOCK_MARKER)
    return None


def scan_block(src: str, pos: int = 0, limit: Optional[int] = None) -> Optional[MathRegion]:
    """Match a ``$$`` block starting on the line that begins at ``pos``.

    A closing ``$$`` on the opening line ends the block there. Otherwise
    the block runs until a line that is just ``$$`` or a line ending in
    ``$$``. Without a terminator before ``limit`` nothing is matched.
    """
    limit = _limit(src, limit)
    body_start = _open_block(src, pos, limit)
    if body_start is None:
        return None

    eol = _line_end(src, body_start, limit)
    close = src.find(BLOCK_MARKER, body_start, eol)
    if close != -1:
        content = src[body_start:close].strip()
        if not content:
            return None
        return MathRegion(MathKind.BLOCK, content, (pos, eol))

    lines = [src[body_start:eol]]
    cursor = eol
    while cursor < limit:
        line_start = cursor + 1
        line_end = _line_end(src, line_start, limit)
        line = src[line_start:line_end]
        if line.strip() == BLOCK_MARKER:
            break
        tail = line.rstrip()
        if tail.endswith(BLOCK_MARKER):
            lines.append(tail[:-len(BLOCK_MARKER)])
            break
        lines.append(line)
        cursor = line_end
    else:
        return None

    content = '\n'.join(lines).strip()
    if not content:
        return None
    return MathRegion(MathKind.BLOCK, content, (pos, line_end))


def probe_block(src: str, pos: int = 0, limit: Optional[int] = None) -> bool:
    return scan_block(src, pos, limit) is not None


def scan_inline(src: str, pos: int = 0, limit: Optional[int] = None) -> Optional[MathRegion]:
    """Match ``$...$`` whose opening marker sits exactly at ``pos``."""
    limit = _limit(src, limit)
    if pos >= limit or src[pos] != INLINE_MARKER or is_escaped(src, pos):
        return None
    # `$$` belongs to block math, whichever half we landed on
    if src.startswith(INLINE_MARKER, pos + 1, limit):
        return None
    if pos > 0 and src[pos - 1] == INLINE_MARKER and not is_escaped(src, pos - 1):
        return None

    i = pos + 1
    while i < limit:
        ch = src[i]
        if ch == '\\':
            if src.startswith('\n', i + 1, limit):
                return None
            i += 2
            continue
        if ch == '\n':
            return None
        if ch == INLINE_MARKER:
            if src.startswith(INLINE_MARKER, i + 1, limit):
                i += 2
                continue
            content = src[pos + 1:i].strip()
            if not content:
                return None
            return MathRegion(MathKind.INLINE, content, (pos, i + 1))
        i += 1
    return None


def probe_inline(src: str, pos: int = 0, limit: Optional[int] = None) -> bool:
    return scan_inline(src, pos, limit) is not None


def find_inline(src, pos=0, limit=None):
    """First inline region whose opening ``$`` is at or after ``pos``."""
    limit = _limit(src, limit)
    candidate = src.find(INLINE_MARKER, pos, limit)
    while candidate != -1:
        region = scan_inline(src, candidate, limit)
        if region is not None:
            return region
        candidate = src.find(INLINE_MARKER, candidate + 1, limit)
    return None
