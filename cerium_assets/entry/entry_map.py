"""Webpack entry points derived from bundle names.

Each bundle `<name>` lives at `./js/<name>/<name>.js` relative to the assets
context. The `blocks` bundle also ships a separate editor-only entry.

Names are not validated here; callers pass names from a trusted static list
(see `cerium_assets.config.check_bundle_name` for the config gate).
"""

from __future__ import annotations

from collections.abc import Iterable


BLOCKS_BUNDLE = "blocks"
BLOCKS_EDITOR_ENTRY = "blocks-editor"


def entry_path(name: str) -> str:
    return f"./js/{name}/{name}.js"  # ex: ./js/frontend/frontend.js


def build_entry_map(bundle_names: Iterable[str]) -> dict[str, str]:
    entry: dict[str, str] = {}
    for name in bundle_names:
        entry[name] = entry_path(name)
        if name == BLOCKS_BUNDLE:
            entry[BLOCKS_EDITOR_ENTRY] = (
                f"./js/{BLOCKS_BUNDLE}/{BLOCKS_EDITOR_ENTRY}.js"
            )
    return entry
