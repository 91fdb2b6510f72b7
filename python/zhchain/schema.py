"""Dictionary tree schema for zhchain.

Core concept:
    - A conversion profile names one segmentation dictionary and an
      ordered conversion chain of dictionaries
    - Each dictionary is either a leaf (one file under dictionary/) or a
      group of child dictionaries, nested to any depth

Example (config/s2t.json):
    {
      "name": "Simplified Chinese to Traditional Chinese",
      "segmentation": {"type": "mmseg", "dict": {"type": "text", "file": "STPhrases.txt"}},
      "conversion_chain": [{"dict": {"type": "group", "dicts": [
          {"type": "text", "file": "STPhrases.txt"},
          {"type": "text", "file": "STCharacters.txt"}
      ]}}]
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Optional
import json

from .errors import DictFileNotFound, DictIOError, MalformedConfig

GROUP_TYPE = "group"
DEFAULT_LEAF_TYPE = "text"
DEFAULT_SEGMENTATION_TYPE = "mmseg"


class NodeKind(Enum):
    """Dictionary node kind."""

    LEAF = "leaf"
    COMPOSITE = "composite"


@dataclass
class DictNode:
    """A dictionary reference: a single file or an ordered group."""

    type: str = DEFAULT_LEAF_TYPE
    file: Optional[str] = None              # Relative to <root>/dictionary/
    children: list["DictNode"] = field(default_factory=list)

    def __post_init__(self):
        """Enforce that a node is exactly one of leaf or composite.

        A composite is typed "group"; any other type names a leaf format.
        """
        if self.file and self.children:
            raise MalformedConfig(
                f"Dictionary node has both a file ({self.file}) and child dictionaries"
            )
        if not self.file and not self.children:
            raise MalformedConfig(
                f"Dictionary node of type '{self.type}' has neither a file nor child dictionaries"
            )
        if self.children and self.type != GROUP_TYPE:
            raise MalformedConfig(
                f"Dictionary node with child dictionaries must have type '{GROUP_TYPE}', not '{self.type}'"
            )
        if self.file and self.type == GROUP_TYPE:
            raise MalformedConfig(
                f"Dictionary node of type '{GROUP_TYPE}' needs child dictionaries, not a file ({self.file})"
            )

    @property
    def kind(self) -> NodeKind:
        return NodeKind.LEAF if self.file else NodeKind.COMPOSITE

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def files(self) -> Iterator[str]:
        """Yield leaf file references depth-first, duplicates included."""
        if self.is_leaf:
            yield self.file
            return
        for child in self.children:
            yield from child.files()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if self.is_leaf:
            return {"type": self.type, "file": self.file}
        return {
            "type": self.type,
            "dicts": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "DictNode":
        """Create from a decoded JSON object."""
        if not isinstance(data, dict):
            raise MalformedConfig(f"Dictionary node must be an object, got {type(data).__name__}")

        default_type = GROUP_TYPE if "dicts" in data else DEFAULT_LEAF_TYPE
        node_type = data.get("type", default_type)
        if not isinstance(node_type, str):
            raise MalformedConfig(f"Dictionary node type must be a string: {node_type!r}")

        file_ref = data.get("file")
        if file_ref is not None and not isinstance(file_ref, str):
            raise MalformedConfig(f"Dictionary file must be a string: {file_ref!r}")

        raw_children = data.get("dicts") or []
        if not isinstance(raw_children, list):
            raise MalformedConfig("Dictionary 'dicts' must be a list")

        return cls(
            type=node_type,
            file=file_ref or None,
            children=[cls.from_dict(child) for child in raw_children],
        )


@dataclass
class ConversionProfile:
    """A named conversion: segmentation dictionary plus conversion chain."""

    name: str
    segmentation: DictNode
    conversion_chain: list[DictNode] = field(default_factory=list)
    segmentation_type: str = DEFAULT_SEGMENTATION_TYPE

    def walk(self) -> Iterator[DictNode]:
        """Yield the top-level nodes in load order."""
        yield self.segmentation
        yield from self.conversion_chain

    def files(self) -> list[str]:
        """All leaf file references in load order, duplicates included."""
        return [ref for node in self.walk() for ref in node.files()]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "segmentation": {
                "type": self.segmentation_type,
                "dict": self.segmentation.to_dict(),
            },
            "conversion_chain": [{"dict": node.to_dict()} for node in self.conversion_chain],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ConversionProfile":
        """Create from a decoded JSON object."""
        if not isinstance(data, dict):
            raise MalformedConfig("Profile must be a JSON object")

        name = data.get("name", "")
        if not isinstance(name, str):
            raise MalformedConfig(f"Profile name must be a string: {name!r}")

        segmentation = data.get("segmentation")
        if not isinstance(segmentation, dict) or "dict" not in segmentation:
            raise MalformedConfig(f"Profile '{name}' has no segmentation dictionary")

        chain = data.get("conversion_chain", [])
        if not isinstance(chain, list):
            raise MalformedConfig(f"Profile '{name}' conversion_chain must be a list")

        nodes = []
        for step in chain:
            if not isinstance(step, dict) or "dict" not in step:
                raise MalformedConfig(f"Profile '{name}' has a conversion step without 'dict'")
            nodes.append(DictNode.from_dict(step["dict"]))

        return cls(
            name=name,
            segmentation=DictNode.from_dict(segmentation["dict"]),
            conversion_chain=nodes,
            segmentation_type=segmentation.get("type", DEFAULT_SEGMENTATION_TYPE),
        )


def parse_profile(raw: bytes | str) -> ConversionProfile:
    """Parse profile JSON into a ConversionProfile.

    Raises:
        MalformedConfig: If the JSON is invalid or does not match the schema.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedConfig(f"Invalid profile JSON: {e}") from e
    return ConversionProfile.from_dict(data)


def load_profile(filepath: Path | str) -> ConversionProfile:
    """Read and parse a profile file."""
    filepath = Path(filepath)
    try:
        raw = filepath.read_bytes()
    except FileNotFoundError as e:
        raise DictFileNotFound(f"Profile not found: {filepath}", filepath) from e
    except OSError as e:
        raise DictIOError(f"Cannot read profile {filepath}: {e}", filepath) from e

    try:
        return parse_profile(raw)
    except MalformedConfig as e:
        e.path = str(filepath)
        raise
