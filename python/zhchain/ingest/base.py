"""Base ingestor interface for dictionary files.

All ingestors inherit from Ingestor and implement parse().
This provides a consistent API for loading substitution entries from any
source format into a DictionaryTable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..errors import DictFileNotFound, DictIOError


@dataclass
class DictionaryTable:
    """Entries parsed from one dictionary file."""

    file_ref: str
    entries: dict[str, list[str]] = field(default_factory=dict)  # key -> candidates
    max_key_len: int = 0        # In characters
    min_key_len: int = 0
    total_lines: int = 0
    skipped_lines: int = 0      # Fewer than 2 fields
    duplicates: int = 0         # Repeated keys within this file
    is_segmentation: bool = False

    def add(self, key: str, candidates: list[str]) -> bool:
        """Add an entry unless the key is already present.

        Returns:
            True if the entry was stored.
        """
        if key in self.entries:
            self.duplicates += 1
            return False

        self.entries[key] = candidates
        length = len(key)
        if length > self.max_key_len:
            self.max_key_len = length
        if self.min_key_len == 0 or length < self.min_key_len:
            self.min_key_len = length
        return True

    def first(self, key: str) -> Optional[str]:
        """The replacement used for conversion: the first candidate."""
        candidates = self.entries.get(key)
        return candidates[0] if candidates else None

    def count(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return (
            f"DictionaryTable({self.file_ref}: "
            f"{self.count()} entries, {self.skipped_lines} skipped, "
            f"keys {self.min_key_len}-{self.max_key_len})"
        )


class Ingestor(ABC):
    """Base class for dictionary file ingestors.

    Subclasses must implement:
        - parse(filepath) -> Iterator of (key, candidates, line_number) tuples;
          lines that cannot be used are yielded as (None, [], line_number)

    The ingest() method handles file errors and table construction.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    @abstractmethod
    def parse(self, filepath: Path) -> Iterator[tuple[Optional[str], list[str], int]]:
        """Parse a dictionary file.

        Args:
            filepath: Path to the dictionary file.

        Yields:
            Tuples of (key, candidates, line_number).
        """
        pass

    def ingest(self, filepath: Path | str, file_ref: Optional[str] = None) -> DictionaryTable:
        """Read a dictionary file into a DictionaryTable.

        Args:
            filepath: Path to the dictionary file.
            file_ref: Reference name recorded on the table (defaults to the file name).

        Raises:
            DictFileNotFound: If the file does not exist.
            DictIOError: If reading or decoding fails.
        """
        filepath = Path(filepath)
        table = DictionaryTable(file_ref=file_ref or filepath.name)

        try:
            for key, candidates, _line_num in self.parse(filepath):
                table.total_lines += 1
                if key is None:
                    table.skipped_lines += 1
                    continue
                table.add(key, candidates)
        except FileNotFoundError as e:
            raise DictFileNotFound(f"Dictionary file not found: {filepath}", filepath) from e
        except (OSError, UnicodeDecodeError) as e:
            raise DictIOError(f"Failed reading dictionary {filepath}: {e}", filepath) from e

        return table
