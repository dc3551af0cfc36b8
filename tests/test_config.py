from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path

from cerium_assets.config import (
    BuildConfig,
    build_config_from_payload,
    check_bundle_name,
    load_build_config,
)
from cerium_assets.entry.webpack_config import build_webpack_config
from cerium_assets.errors import ConfigError


class TestBuildConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = build_config_from_payload({}, environ={})
        self.assertEqual(cfg, BuildConfig())
        self.assertTrue(cfg.is_prod)
        self.assertFalse(cfg.is_dev)

    def test_node_env_is_read(self) -> None:
        cfg = build_config_from_payload({}, environ={"NODE_ENV": "development"})
        self.assertEqual(cfg.env, "development")
        self.assertTrue(cfg.is_dev)

        cfg = build_config_from_payload({}, environ={"NODE_ENV": "staging"})
        self.assertFalse(cfg.is_dev or cfg.is_prod)

    def test_payload_values(self) -> None:
        cfg = build_config_from_payload(
            {
                "assets": "src",
                "dist": "build/js",
                "publicPath": "/wp-content/themes/cerium/dist/js/",
                "jsFiles": ["frontend", "blocks"],
            },
            environ={},
        )
        self.assertEqual(cfg.assets, "src")
        self.assertEqual(cfg.dist, "build/js")
        self.assertEqual(cfg.public_path, "/wp-content/themes/cerium/dist/js/")
        self.assertEqual(cfg.js_files, ("frontend", "blocks"))

    def test_bundle_names_keep_case_and_underscores(self) -> None:
        cfg = build_config_from_payload(
            {"jsFiles": ["myWidget", "admin_bar"]}, environ={}
        )
        self.assertEqual(cfg.js_files, ("myWidget", "admin_bar"))
        self.assertEqual(
            build_webpack_config(cfg)["entry"],
            {
                "myWidget": "./js/myWidget/myWidget.js",
                "admin_bar": "./js/admin_bar/admin_bar.js",
            },
        )

    def test_check_bundle_name_returns_name_unchanged(self) -> None:
        for name in ["frontend", "Blocks", "admin_bar", "my-widget", "v2"]:
            with self.subTest(name=name):
                self.assertEqual(check_bundle_name(name), name)

    def test_check_bundle_name_rejects_path_like_names(self) -> None:
        for name in ["", " frontend", "../etc", "a/b", "a\\b", ".hidden", "-x", "a b"]:
            with self.subTest(name=name):
                with self.assertRaises(ConfigError):
                    check_bundle_name(name)

    def test_names_differing_only_by_case_are_distinct(self) -> None:
        cfg = build_config_from_payload(
            {"jsFiles": ["frontend", "Frontend"]}, environ={}
        )
        self.assertEqual(cfg.js_files, ("frontend", "Frontend"))

    def test_rejects_invalid_payloads(self) -> None:
        cases: list[object] = [
            [],
            {"jsFiles": "frontend"},
            {"jsFiles": ["../secret"]},
            {"jsFiles": ["frontend", "frontend"]},
            {"unknown": True},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                with self.assertRaises(ConfigError):
                    build_config_from_payload(payload, environ={})

    def test_load_without_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cwd = os.getcwd()
            os.chdir(td)
            try:
                cfg = load_build_config(environ={})
            finally:
                os.chdir(cwd)
        self.assertEqual(cfg, BuildConfig())

    def test_load_reads_default_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            Path(td, "cerium.build.json").write_text(
                json.dumps({"jsFiles": ["blocks"]}), encoding="utf-8"
            )
            cwd = os.getcwd()
            os.chdir(td)
            try:
                cfg = load_build_config(environ={})
            finally:
                os.chdir(cwd)
        self.assertEqual(cfg.js_files, ("blocks",))

    def test_explicit_missing_path_fails(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_build_config(os.path.join(td, "nope.json"), environ={})

    def test_malformed_json_fails(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "cfg.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_build_config(str(p), environ={})


if __name__ == "__main__":
    raise SystemExit(unittest.main())
