"""Artifacts writer.

Run records are written under `./.cerium/`.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone


ARTIFACTS_DIRNAME = ".cerium"


def now_utc_z() -> str:
    return (
        datetime.now(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")
    )


def ensure_artifacts_dir(base_dir: str) -> str:
    out_dir = os.path.join(base_dir, ARTIFACTS_DIRNAME)
    os.makedirs(out_dir, exist_ok=True)
    return out_dir


def dump_json(payload: object) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def atomic_write_json(path: str, payload: object) -> None:
    dir_name = os.path.dirname(path) or "."
    base = os.path.basename(path)
    if dir_name != ".":
        os.makedirs(dir_name, exist_ok=True)

    tmp = ""
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            delete=False,
            dir=dir_name,
            prefix=f".{base}.tmp.",
        ) as fh:
            tmp = fh.name
            fh.write(dump_json(payload))

        os.replace(tmp, path)
        tmp = ""
    finally:
        if tmp:
            try:
                os.remove(tmp)
            except OSError:
                pass


def write_run_json(out_dir: str, payload: dict[str, object]) -> str:
    path = os.path.join(out_dir, "run.json")
    atomic_write_json(path, payload)
    return path
