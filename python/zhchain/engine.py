"""Longest-match substitution engine.

For a segment, key lengths are tried from the longest possible down to
the shortest key in the table. Within one length the segment is scanned
left to right; a match claims its span and the scan resumes after it.
Windows are always read from the original segment and may not overlap a
span claimed earlier, so a longer match always beats a shorter one over
the same characters. Replacements are applied in a single final pass.

Example:
    table = {"AB": "X", "A": "Y"}
    convert_segment("ABA", table, LengthBounds(2, 1))  ->  "XY"
"""

from typing import Mapping

from .builder.table import LengthBounds
from .errors import ConvertError

Span = tuple[int, int, str]     # (start, end, replacement)


def find_spans(segment: str, table: Mapping[str, str], bounds: LengthBounds) -> list[Span]:
    """Find non-overlapping replacement spans, ordered by position.

    Raises:
        ConvertError: If a table value is not a string.
    """
    size = len(segment)
    if not table or not bounds.admits(size):
        return []

    claimed = [False] * size
    spans: list[Span] = []

    for length in range(min(size, bounds.max_key_len), bounds.min_key_len - 1, -1):
        j = 0
        while j <= size - length:
            if any(claimed[j:j + length]):
                j += 1
                continue

            replacement = table.get(segment[j:j + length])
            if replacement is None:
                j += 1
                continue
            if not isinstance(replacement, str):
                raise ConvertError(
                    f"Replacement for {segment[j:j + length]!r} is {type(replacement).__name__}, not str",
                    segment,
                )

            spans.append((j, j + length, replacement))
            for k in range(j, j + length):
                claimed[k] = True
            j += length

    spans.sort()
    return spans


def convert_segment(segment: str, table: Mapping[str, str], bounds: LengthBounds) -> str:
    """Replace dictionary keys in a segment, longest match first.

    Args:
        segment: Punctuation-free run of text.
        table: Merged key -> replacement mapping.
        bounds: Key length range of the table.

    Returns:
        Converted segment, or the segment itself if nothing matched.
    """
    spans = find_spans(segment, table, bounds)
    if not spans:
        return segment

    parts = []
    pos = 0
    for start, end, replacement in spans:
        parts.append(segment[pos:start])
        parts.append(replacement)
        pos = end
    parts.append(segment[pos:])
    return "".join(parts)
