"""Pytest configuration and fixtures."""

import json
import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def write_data_root(root: Path, profiles: dict, dictionaries: dict) -> Path:
    """Lay out <root>/config/*.json and <root>/dictionary/* files."""
    (root / "config").mkdir(parents=True, exist_ok=True)
    (root / "dictionary").mkdir(parents=True, exist_ok=True)
    for name, profile in profiles.items():
        (root / "config" / f"{name}.json").write_text(
            json.dumps(profile, ensure_ascii=False), encoding="utf-8"
        )
    for filename, content in dictionaries.items():
        (root / "dictionary" / filename).write_text(content, encoding="utf-8")
    return root


def leaf(filename: str, node_type: str = "text") -> dict:
    return {"type": node_type, "file": filename}


def group(*children: dict) -> dict:
    return {"type": "group", "dicts": list(children)}


def profile_json(name: str, segmentation: dict, *chain: dict) -> dict:
    return {
        "name": name,
        "segmentation": {"type": "mmseg", "dict": segmentation},
        "conversion_chain": [{"dict": node} for node in chain],
    }


@pytest.fixture
def sample_phrases_content():
    """Sample phrase dictionary content."""
    return """开源	開源
编程语言	編程語言
发布	發佈
"""


@pytest.fixture
def sample_characters_content():
    """Sample character dictionary content."""
    return """个	個
开	開
编	編
语	語
发	發 髮
干	幹 乾 干
"""


@pytest.fixture
def data_root(tmp_path, sample_phrases_content, sample_characters_content):
    """Data root with an s2t profile over phrases + characters."""
    return write_data_root(
        tmp_path,
        profiles={
            "s2t": profile_json(
                "test s2t",
                leaf("STPhrases.txt"),
                group(leaf("STPhrases.txt"), leaf("STCharacters.txt")),
            ),
        },
        dictionaries={
            "STPhrases.txt": sample_phrases_content,
            "STCharacters.txt": sample_characters_content,
        },
    )
