"""Sentence splitting and script classification.

Text is cut at punctuation into segments. Punctuation is kept verbatim
and only segments containing Han characters are offered to the
substitution engine. All indexing is by character, never by byte.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import regex

# ASCII and full-width CJK punctuation. Space counts as a boundary.
PUNCTUATION: frozenset[str] = frozenset([
    " ", "!", "@", "#", "$", "%", "^", "&", "*", "(", ")", "-", "=", "_",
    "`", "~", "[", "]", "{", "}", "\\", "|", ";", ":", "'", "\"", ",", ".",
    "/", "<", ">", "?",
    "　", "～", "！", "￥", "…", "×", "（", "）", "—", "【", "】", "、",
    "；", "：", "‘", "’", "“", "”", "，", "。", "《", "》", "？", "／", "＼",
    "「", "」", "－", "．", "·",
])

HAN_PATTERN = regex.compile(r"\p{Han}")


class SegmentKind(Enum):
    """How a piece of input is treated."""

    PUNCTUATION = "punctuation"     # Copied verbatim
    PLAIN = "plain"                 # No Han characters, copied verbatim
    HAN = "han"                     # Offered to the substitution engine


@dataclass(frozen=True)
class Segment:
    text: str
    kind: SegmentKind

    @property
    def convertible(self) -> bool:
        return self.kind is SegmentKind.HAN


def is_punctuation(char: str) -> bool:
    return char in PUNCTUATION


def contains_han(text: str) -> bool:
    """Check if text has at least one Han script character."""
    return HAN_PATTERN.search(text) is not None


def is_blank(text: str) -> bool:
    """Empty or whitespace only."""
    return not text.strip()


def is_numeric(text: str) -> bool:
    """Check if the whole text, trimmed, is a floating point literal."""
    try:
        float(text.strip())
    except ValueError:
        return False
    return True


def _classify(buffer: list[str]) -> Segment:
    text = "".join(buffer)
    kind = SegmentKind.HAN if contains_han(text) else SegmentKind.PLAIN
    return Segment(text, kind)


def split_segments(text: str) -> Iterator[Segment]:
    """Split text at punctuation.

    Joining the yielded segments' text always reproduces the input.

    Args:
        text: Input text.

    Yields:
        Segments in input order; each punctuation character is its own segment.
    """
    buffer: list[str] = []
    for char in text:
        if char in PUNCTUATION:
            if buffer:
                yield _classify(buffer)
                buffer = []
            yield Segment(char, SegmentKind.PUNCTUATION)
            continue
        buffer.append(char)

    if buffer:
        yield _classify(buffer)
