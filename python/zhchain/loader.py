"""Dictionary loader.

Walks a ConversionProfile depth-first (segmentation dictionary, then the
conversion chain in order), reads every referenced file at most once and
merges each file into one table as it is read.

Each DictionaryLoader owns its state. Build one per load.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
import logging

from . import config as cfg
from .builder.table import BuildStats, LengthBounds, TableBuilder
from .errors import MalformedConfig
from .ingest import INGESTORS, DictionaryTable
from .schema import ConversionProfile, DictNode

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """What a load read and skipped."""

    profile_name: str
    data_root: str
    files_read: list[str] = field(default_factory=list)
    duplicates_skipped: list[str] = field(default_factory=list)
    tables: dict[str, DictionaryTable] = field(default_factory=dict)
    stats: BuildStats = field(default_factory=BuildStats)

    def __repr__(self) -> str:
        return (
            f"LoadReport({self.profile_name}: "
            f"{len(self.files_read)} files, "
            f"{self.stats.total_entries} entries, "
            f"{len(self.duplicates_skipped)} duplicate refs)"
        )


class DictionaryLoader:
    """Reads the dictionaries of one profile into a merged table."""

    def __init__(
        self,
        data_root: Path | str,
        encoding: Optional[str] = None,
        keep_tables: bool = False,
    ):
        """Initialize loader.

        Args:
            data_root: Directory holding dictionary/ (and config/).
            encoding: Dictionary file encoding.
            keep_tables: Keep per-file tables on the report after loading.
        """
        self.data_root = Path(data_root)
        self.encoding = encoding or cfg.default_encoding()
        self.keep_tables = keep_tables

        self._visited: set[str] = set()
        self._path: set[int] = set()        # ids of nodes on the current walk path
        self._builder = TableBuilder()
        self._report: Optional[LoadReport] = None

    def load(self, profile: ConversionProfile) -> tuple[Mapping[str, str], LengthBounds, LoadReport]:
        """Read every dictionary of a profile.

        Returns:
            (merged table, length bounds, report).

        Raises:
            DictFileNotFound: If a referenced file does not exist.
            DictIOError: If a file cannot be read.
            MalformedConfig: If a leaf type has no ingestor or the tree is cyclic.
        """
        if self._report is not None:
            raise RuntimeError("DictionaryLoader instances are single-use")

        self._report = LoadReport(profile_name=profile.name, data_root=str(self.data_root))

        self._walk(profile.segmentation, is_segmentation=True)
        for node in profile.conversion_chain:
            self._walk(node)

        table, bounds = self._builder.build()
        self._report.stats = self._builder.stats
        logger.info(
            "Loaded profile '%s': %d entries from %d files (keys %d-%d chars)",
            profile.name, len(table), len(self._report.files_read),
            bounds.min_key_len, bounds.max_key_len,
        )
        return table, bounds, self._report

    def _walk(self, node: DictNode, is_segmentation: bool = False) -> None:
        node_id = id(node)
        if node_id in self._path:
            raise MalformedConfig(f"Cyclic dictionary tree at node of type '{node.type}'")

        if node.is_leaf:
            self._read_leaf(node, is_segmentation)
            return

        self._path.add(node_id)
        try:
            for child in node.children:
                self._walk(child, is_segmentation)
        finally:
            self._path.discard(node_id)

    def _read_leaf(self, node: DictNode, is_segmentation: bool) -> None:
        file_ref = node.file
        if file_ref in self._visited:
            logger.debug("Skipping already loaded dictionary %s", file_ref)
            self._report.duplicates_skipped.append(file_ref)
            return

        ingestor_cls = INGESTORS.get(node.type)
        if ingestor_cls is None:
            raise MalformedConfig(
                f"No ingestor for dictionary type '{node.type}' ({file_ref}). "
                f"Available: {list(INGESTORS.keys())}"
            )

        filepath = cfg.dictionary_path(file_ref, self.data_root)
        table = ingestor_cls(encoding=self.encoding).ingest(filepath, file_ref=file_ref)
        table.is_segmentation = is_segmentation
        self._visited.add(file_ref)

        added = self._builder.add_table(table)
        logger.debug("Read %r, %d new keys", table, added)

        self._report.files_read.append(file_ref)
        if self.keep_tables:
            self._report.tables[file_ref] = table


def load_tables(
    profile: ConversionProfile,
    data_root: Path | str,
    keep_tables: bool = False,
) -> tuple[Mapping[str, str], LengthBounds, LoadReport]:
    """Load a profile's dictionaries with a fresh loader."""
    return DictionaryLoader(data_root, keep_tables=keep_tables).load(profile)

