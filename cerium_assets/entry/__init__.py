from .entry_map import BLOCKS_BUNDLE, BLOCKS_EDITOR_ENTRY, build_entry_map
from .webpack_config import build_webpack_config

__all__ = [
    "BLOCKS_BUNDLE",
    "BLOCKS_EDITOR_ENTRY",
    "build_entry_map",
    "build_webpack_config",
]
