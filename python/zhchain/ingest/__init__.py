"""Dictionary ingestion module.

Ingestors are selected by the "type" of a leaf dictionary node:
- text: whitespace-separated plain text (default)
- ocd, ocd2: accepted as names and read as plain text

Usage:
    from zhchain.ingest import get_ingestor, text

    table = text.ingest("data/dictionary/STCharacters.txt")
    table = get_ingestor("text")().ingest("data/dictionary/STPhrases.txt")
"""

from .base import DictionaryTable, Ingestor
from . import text

# Register available ingestors
INGESTORS: dict[str, type[Ingestor]] = {
    "text": text.TextIngestor,
    "ocd": text.TextIngestor,
    "ocd2": text.TextIngestor,
}


def get_ingestor(name: str) -> type[Ingestor]:
    """Get ingestor class by dictionary node type."""
    if name not in INGESTORS:
        raise ValueError(f"Unknown ingestor: {name}. Available: {list(INGESTORS.keys())}")
    return INGESTORS[name]


def register_ingestor(name: str, ingestor_cls: type[Ingestor]) -> None:
    """Register a custom ingestor."""
    INGESTORS[name] = ingestor_cls


__all__ = [
    "DictionaryTable",
    "Ingestor",
    "text",
    "get_ingestor",
    "register_ingestor",
    "INGESTORS",
]
