"""Schema checks for the two JSON payloads read from disk.

- build config (`cerium.build.json`) -> ConfigError
- script registry (`--registry` file) -> RegistryError
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import CeriumError, ConfigError, RegistryError


BUILD_CONFIG_SCHEMA = "build-config.schema.json"
SCRIPT_REGISTRY_SCHEMA = "script-registry.schema.json"

_MAX_REPORTED = 5


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> Any:
    # Schemas ship inside the package; a broken one is a packaging bug.
    path = Path(__file__).resolve().parents[1] / "schemas" / schema_name
    schema = json.loads(path.read_text(encoding="utf-8"))
    cls = jsonschema.validators.validator_for(schema)
    cls.check_schema(schema)
    return cls(schema)


def _problems(payload: object, schema_name: str) -> str:
    errors = sorted(
        _validator(schema_name).iter_errors(payload), key=lambda e: e.json_path
    )
    if not errors:
        return ""
    shown = "; ".join(f"{e.json_path}: {e.message}" for e in errors[:_MAX_REPORTED])
    rest = len(errors) - _MAX_REPORTED
    return shown + (f" (+{rest} more)" if rest > 0 else "")


def check_build_config(payload: object) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ConfigError("Build config must be a JSON object")
    problems = _problems(payload, BUILD_CONFIG_SCHEMA)
    if problems:
        raise ConfigError(f"Build config is invalid: {problems}")
    return payload


def check_script_registry(payload: object) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise RegistryError("Script registry must be a JSON object")
    problems = _problems(payload, SCRIPT_REGISTRY_SCHEMA)
    if problems:
        raise RegistryError(f"Script registry is invalid: {problems}")
    return payload


def read_json(path: str, *, error: type[CeriumError], what: str) -> object:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise error(f"{what} not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise error(f"Failed to read {what}: {path}: {exc}") from exc
