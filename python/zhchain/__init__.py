"""zhchain - Chinese script conversion with chained dictionaries.

Converts text between Chinese script variants (e.g. Simplified to
Traditional) using ordered, file-backed substitution dictionaries
described by a JSON profile.

Core concepts:
    - A profile lists a segmentation dictionary and a conversion chain
    - Dictionaries are merged into one table; the first file to define a
      key wins
    - Text is split at punctuation and each Han segment is converted by
      longest match

Data directory layout:
    <root>/config/<profile>.json
    <root>/dictionary/<file>.txt

Usage:
    from zhchain import new_converter

    cc = new_converter("s2t")                       # bundled data
    cc = new_converter("s2t", data_root="/usr/share/opencc")
    cc.convert("开源的编程语言")                     # -> "開源的編程語言"
"""

from .converter import Converter, load, new_converter
from .errors import ConvertError, DictFileNotFound, DictIOError, LoadError, MalformedConfig
from .schema import ConversionProfile, DictNode, parse_profile

__version__ = "0.1.0"

__all__ = [
    "Converter",
    "ConversionProfile",
    "ConvertError",
    "DictFileNotFound",
    "DictIOError",
    "DictNode",
    "LoadError",
    "MalformedConfig",
    "load",
    "new_converter",
    "parse_profile",
]
