"""Configuration loader for zhchain.

Loads defaults from zhchain.json at project root, with hardcoded fallbacks.
The ZHCHAIN_DATA_DIR environment variable overrides the data directory.
"""

import json
import os
from pathlib import Path
from typing import Any

DATA_DIR_ENV = "ZHCHAIN_DATA_DIR"
CONFIG_FILENAME = "zhchain.json"
BUNDLED_DATA_DIR = Path(__file__).parent / "data"

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "data_dir": str(BUNDLED_DATA_DIR),
    "profile": "s2t",
    "encoding": "utf-8",
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find zhchain.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / CONFIG_FILENAME,  # python/zhchain -> root
        Path.cwd() / CONFIG_FILENAME,
        Path.cwd().parent / CONFIG_FILENAME,
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from zhchain.json or use fallbacks.

    A file that is not a JSON object with an object "defaults" is ignored.
    """
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict) and isinstance(data.get("defaults", {}), dict):
                _config = data
                return _config
        except (json.JSONDecodeError, UnicodeDecodeError, OSError):
            pass

    # Fallback
    _config = {"defaults": FALLBACK_DEFAULTS}
    return _config


def reset() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_data_dir() -> Path:
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env)
    return Path(get_default("data_dir", FALLBACK_DEFAULTS["data_dir"]))


def default_profile() -> str:
    return get_default("profile", FALLBACK_DEFAULTS["profile"])


def default_encoding() -> str:
    return get_default("encoding", FALLBACK_DEFAULTS["encoding"])


def profile_path(profile_name: str, data_root: Path | str) -> Path:
    """Location of a profile: <root>/config/<name>.json."""
    return Path(data_root) / "config" / f"{profile_name}.json"


def dictionary_path(file_ref: str, data_root: Path | str) -> Path:
    """Location of a dictionary file: <root>/dictionary/<file>."""
    return Path(data_root) / "dictionary" / file_ref


def available_profiles(data_root: Path | str | None = None) -> list[str]:
    """Names of the profiles under <root>/config."""
    root = Path(data_root) if data_root is not None else default_data_dir()
    config_dir = root / "config"
    if not config_dir.is_dir():
        return []
    return sorted(p.stem for p in config_dir.glob("*.json"))
