"""Converter: the compiled, read-only conversion object.

Usage:
    from zhchain import new_converter

    cc = new_converter("s2t")
    cc.convert("开源的编程语言")      # -> "開源的編程語言"

A Converter never changes after construction and performs no I/O, so one
instance can be shared by any number of threads.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional
import logging

from . import config as cfg
from .builder.table import LengthBounds
from .engine import convert_segment
from .errors import ConvertError
from .loader import LoadReport, load_tables
from .schema import ConversionProfile, load_profile
from .segmenter import is_blank, is_numeric, split_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Converter:
    """Merged substitution table plus its key length bounds.

    Converters compare and hash by identity. Bounds left unset are
    computed from the table's keys.
    """

    name: str
    table: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), repr=False)
    bounds: Optional[LengthBounds] = None
    report: Optional[LoadReport] = field(default=None, repr=False)

    def __post_init__(self):
        if not isinstance(self.table, MappingProxyType):
            object.__setattr__(self, "table", MappingProxyType(dict(self.table)))
        if self.bounds is None:
            lengths = [len(key) for key in self.table if key]
            object.__setattr__(self, "bounds", LengthBounds(
                max_key_len=max(lengths, default=0),
                min_key_len=min(lengths, default=0),
            ))

    @classmethod
    def from_table(cls, table: Mapping[str, str], name: str = "") -> "Converter":
        """Build a converter directly from a key -> replacement mapping."""
        return cls(name=name, table={k: v for k, v in table.items() if k})

    @classmethod
    def from_profile(
        cls,
        profile: ConversionProfile,
        data_root: Path | str,
        keep_tables: bool = False,
    ) -> "Converter":
        """Load a parsed profile's dictionaries from a data root."""
        table, bounds, report = load_tables(profile, data_root, keep_tables=keep_tables)
        return cls(name=profile.name, table=table, bounds=bounds, report=report)

    def convert(self, text: str) -> str:
        """Convert text.

        Empty or whitespace-only input, numeric literals and input for an
        empty table are returned unchanged. If any segment fails, the
        original text is returned.
        """
        if not self.table:
            return text
        if is_blank(text) or is_numeric(text):
            return text

        try:
            return self._split_convert(text)
        except ConvertError as e:
            logger.warning("Conversion failed in segment %r, returning input unchanged: %s", e.segment, e)
            return text

    def _split_convert(self, text: str) -> str:
        parts = []
        for segment in split_segments(text):
            if segment.convertible:
                parts.append(convert_segment(segment.text, self.table, self.bounds))
            else:
                parts.append(segment.text)
        return "".join(parts)

    def convert_many(self, texts: Iterable[str]) -> Iterator[str]:
        """Convert each text in turn."""
        for text in texts:
            yield self.convert(text)

    __call__ = convert

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, key: object) -> bool:
        return key in self.table


def load(profile: ConversionProfile, data_root: Path | str) -> Converter:
    """Build a Converter from a parsed profile.

    Raises:
        LoadError: If any dictionary cannot be read; no converter is returned.
    """
    return Converter.from_profile(profile, data_root)


def new_converter(
    profile_name: Optional[str] = None,
    data_root: Optional[Path | str] = None,
) -> Converter:
    """Build a Converter for a named profile.

    Args:
        profile_name: Profile name, read from <root>/config/<name>.json.
        data_root: Data directory (default from config / ZHCHAIN_DATA_DIR).

    Returns:
        Converter.

    Raises:
        DictFileNotFound: If the profile or a dictionary file is missing.
        DictIOError: If a file cannot be read.
        MalformedConfig: If the profile cannot be parsed.
    """
    profile_name = profile_name or cfg.default_profile()
    data_root = Path(data_root) if data_root is not None else cfg.default_data_dir()

    profile = load_profile(cfg.profile_path(profile_name, data_root))
    return load(profile, data_root)
