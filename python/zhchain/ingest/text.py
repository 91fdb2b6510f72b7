"""Plain text dictionary ingestor.

Format (UTF-8, one entry per line):
    开源    開源
    干      幹 乾 干

Fields are separated by any whitespace. Lines with fewer than two fields
are skipped. Only the first candidate is used by conversion.
"""

from pathlib import Path
from typing import Iterator, Optional

from .base import Ingestor


class TextIngestor(Ingestor):
    """Ingestor for whitespace-separated text dictionaries."""

    def parse(self, filepath: Path) -> Iterator[tuple[Optional[str], list[str], int]]:
        with open(filepath, "r", encoding=self.encoding) as f:
            for line_num, line in enumerate(f, start=1):
                fields = line.split()
                if len(fields) < 2:
                    yield None, [], line_num
                    continue
                yield fields[0], fields[1:], line_num


def ingest(filepath: Path | str, file_ref: Optional[str] = None):
    """Convenience function to ingest a text dictionary.

    Args:
        filepath: Path to the dictionary file.
        file_ref: Reference name recorded on the table.

    Returns:
        DictionaryTable with the parsed entries.
    """
    return TextIngestor().ingest(filepath, file_ref=file_ref)
