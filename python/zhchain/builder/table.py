"""Merged substitution table builder.

Folds per-file DictionaryTables into one flat key -> replacement mapping.
Tables are added in load order and the first table to define a key keeps
it; later tables never overwrite.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from ..ingest.base import DictionaryTable


@dataclass(frozen=True)
class LengthBounds:
    """Global key length range, in characters."""

    max_key_len: int = 0
    min_key_len: int = 0

    def admits(self, length: int) -> bool:
        """Whether a segment of this length could contain a key."""
        return self.max_key_len > 0 and length >= self.min_key_len


@dataclass
class BuildStats:
    """Statistics from a merge."""

    total_entries: int = 0
    shadowed: int = 0                   # Keys ignored because an earlier file had them
    by_file: dict[str, int] = field(default_factory=dict)   # file_ref -> keys contributed
    by_length: dict[int, int] = field(default_factory=dict)


class TableBuilder:
    """Builds the merged table and length bounds."""

    def __init__(self):
        self._table: dict[str, str] = {}
        self._max_len = 0
        self._min_len = 0
        self.stats = BuildStats()

    def add_table(self, table: DictionaryTable) -> int:
        """Merge a per-file table with first-writer-wins semantics.

        Args:
            table: Parsed dictionary file.

        Returns:
            Number of keys this table contributed.
        """
        added = 0
        for key, candidates in table.entries.items():
            if key in self._table:
                self.stats.shadowed += 1
                continue
            if not candidates:
                continue

            self._table[key] = candidates[0]
            added += 1
            length = len(key)
            self.stats.by_length[length] = self.stats.by_length.get(length, 0) + 1

        # Bounds cover every key in the file, shadowed or not
        if table.max_key_len > self._max_len:
            self._max_len = table.max_key_len
        if table.min_key_len and (self._min_len == 0 or table.min_key_len < self._min_len):
            self._min_len = table.min_key_len

        self.stats.by_file[table.file_ref] = added
        self.stats.total_entries += added
        return added

    def count(self) -> int:
        return len(self._table)

    def build(self) -> tuple[Mapping[str, str], LengthBounds]:
        """Freeze the merged table.

        Returns:
            A read-only view of the table and its LengthBounds.
        """
        table = MappingProxyType(dict(self._table))
        return table, LengthBounds(max_key_len=self._max_len, min_key_len=self._min_len)
