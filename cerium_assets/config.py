"""Build configuration.

Values come from an optional JSON file (validated against
`schemas/build-config.schema.json`) and the `NODE_ENV` environment variable.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError
from .validate.schema import check_build_config, read_json


DEFAULT_CONFIG_PATH = "cerium.build.json"

DEFAULT_ASSETS = "assets"
DEFAULT_DIST = "dist/js"
DEFAULT_PUBLIC_PATH = "/dist/js/"
DEFAULT_JS_FILES: tuple[str, ...] = ("frontend",)
DEFAULT_ENV = "production"

# Bundle names become `./js/<name>/<name>.js`, so they must be a single
# path segment. Case and underscores are kept as written.
_BUNDLE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class BuildConfig:
    assets: str = DEFAULT_ASSETS
    dist: str = DEFAULT_DIST
    public_path: str = DEFAULT_PUBLIC_PATH
    js_files: tuple[str, ...] = DEFAULT_JS_FILES
    env: str = DEFAULT_ENV

    @property
    def is_dev(self) -> bool:
        return self.env == "development"

    @property
    def is_prod(self) -> bool:
        return self.env == "production"


def check_bundle_name(name: str) -> str:
    """Return `name` unchanged, or raise ConfigError if it is not a plain segment."""

    if "/" in name or "\\" in name:
        raise ConfigError(f"Bundle name must not contain path separators: {name!r}")
    if not _BUNDLE_NAME_RE.match(name):
        raise ConfigError(f"Invalid bundle name: {name!r}")
    return name


def build_config_from_payload(
    payload: object, *, environ: Optional[Mapping[str, str]] = None
) -> BuildConfig:
    # The schema also rejects duplicate jsFiles entries.
    data = check_build_config(payload)

    env_map = os.environ if environ is None else environ
    env = (env_map.get("NODE_ENV") or "").strip() or DEFAULT_ENV

    js_files = data.get("jsFiles")
    return BuildConfig(
        assets=str(data.get("assets", DEFAULT_ASSETS)),
        dist=str(data.get("dist", DEFAULT_DIST)),
        public_path=str(data.get("publicPath", DEFAULT_PUBLIC_PATH)),
        js_files=(
            tuple(check_bundle_name(n) for n in js_files)
            if isinstance(js_files, list)
            else DEFAULT_JS_FILES
        ),
        env=env,
    )


def load_build_config(
    path: Optional[str] = None, *, environ: Optional[Mapping[str, str]] = None
) -> BuildConfig:
    """Load the build config.

    An explicit `path` must exist. Without one, `cerium.build.json` in the
    current directory is used when present, otherwise defaults apply.
    """

    if path is None:
        if not os.path.isfile(DEFAULT_CONFIG_PATH):
            return build_config_from_payload({}, environ=environ)
        path = DEFAULT_CONFIG_PATH

    payload = read_json(path, error=ConfigError, what="Build config")
    return build_config_from_payload(payload, environ=environ)
