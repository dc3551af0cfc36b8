from __future__ import annotations

import json
import unittest

from cerium_assets.config import BuildConfig
from cerium_assets.entry.webpack_config import build_webpack_config


class TestWebpackConfig(unittest.TestCase):
    def test_production_config(self) -> None:
        cfg = BuildConfig(
            assets="assets",
            dist="dist/js",
            public_path="/dist/js/",
            js_files=("frontend", "blocks"),
            env="production",
        )
        out = build_webpack_config(cfg)

        self.assertEqual(
            out["entry"],
            {
                "frontend": "./js/frontend/frontend.js",
                "blocks": "./js/blocks/blocks.js",
                "blocks-editor": "./js/blocks/blocks-editor.js",
            },
        )
        self.assertEqual(out["mode"], "production")
        self.assertEqual(out["externals"], {"jquery": "jQuery"})
        self.assertEqual(
            out["output"],
            {"path": "dist/js", "publicPath": "/dist/js/", "filename": "[name].min.js"},
        )
        self.assertEqual(out["context"], "assets/")
        self.assertEqual(out["devtool"], "source-map")
        self.assertEqual(out["optimization"], {"minimize": True})
        self.assertEqual(out["plugins"], ["NoEmitOnErrorsPlugin"])

        loaders = [
            r.get("loader") or r["use"][0]["loader"] for r in out["module"]["rules"]
        ]
        self.assertEqual(loaders, ["eslint-loader", "babel-loader"])

        # Must stay JSON-serialisable for the JS side.
        json.dumps(out)

    def test_development_has_no_optimization(self) -> None:
        out = build_webpack_config(BuildConfig(env="development"))
        self.assertEqual(out["mode"], "development")
        self.assertNotIn("optimization", out)

    def test_unknown_env_falls_back_to_production_mode(self) -> None:
        out = build_webpack_config(BuildConfig(env="staging"))
        self.assertEqual(out["mode"], "production")
        self.assertNotIn("optimization", out)


if __name__ == "__main__":
    raise SystemExit(unittest.main())
