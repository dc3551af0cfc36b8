"""Assemble the webpack configuration object for the theme's JS bundles.

The result is plain JSON data; loader/minimizer option payloads are left to
the JS side.
"""

from __future__ import annotations

from typing import Any

from ..config import BuildConfig
from .entry_map import build_entry_map


JS_TEST = r"\.js$"

# Plugins are named; the JS side instantiates them.
PLUGINS: tuple[str, ...] = ("NoEmitOnErrorsPlugin",)

EXTERNALS: dict[str, str] = {
    # jQuery is enqueued from a CDN by the theme, never bundled.
    "jquery": "jQuery",
}


def _module_rules(assets: str) -> list[dict[str, Any]]:
    return [
        {
            "test": JS_TEST,
            "enforce": "pre",
            "include": assets,
            "loader": "eslint-loader",
        },
        {
            "test": JS_TEST,
            "exclude": ["/node_modules/"],
            "use": [{"loader": "babel-loader"}],
        },
    ]


def build_webpack_config(config: BuildConfig) -> dict[str, Any]:
    out: dict[str, Any] = {
        "entry": build_entry_map(config.js_files),
        "mode": config.env if (config.is_dev or config.is_prod) else "production",
        "externals": dict(EXTERNALS),
        "output": {
            "path": config.dist,
            "publicPath": config.public_path,
            "filename": "[name].min.js",
        },
        "context": config.assets + "/",
        "cache": True,
        "resolve": {"modules": ["node_modules"]},
        "devtool": "source-map",
        "module": {"rules": _module_rules(config.assets)},
        "plugins": list(PLUGINS),
        "stats": {"colors": True, "warnings": False},
    }
    if config.is_prod:
        out["optimization"] = {"minimize": True}
    return out
