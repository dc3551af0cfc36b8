"""CLI entrypoint for cerium-assets.

Every invocation leaves `.cerium/run.json` behind: the command, the build env
and config it used, what it produced, and the status/exit code of the run.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, NoReturn, Optional

from .artifacts import (
    atomic_write_json,
    dump_json,
    ensure_artifacts_dir,
    now_utc_z,
    write_run_json,
)
from .config import BuildConfig, load_build_config
from .entry.entry_map import build_entry_map
from .entry.webpack_config import build_webpack_config
from .errors import (
    CeriumError,
    ExitCode,
    OutputWriteError,
    RegistryError,
    UnknownHandleError,
    UsageError,
)
from .hooks import setup
from .scripts.registry import (
    ScriptExecutionMode,
    ScriptRegistry,
    default_theme_scripts,
    set_script_execution,
)
from .validate.schema import read_json


PROG = "cerium-assets"


@dataclass
class AssetRun:
    argv: list[str]
    started_at: str
    command: str = ""
    status: str = "failed"
    exit_code: int = int(ExitCode.FAILED)
    config_path: str = ""
    env: str = ""
    outputs: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def to_payload(self, duration_ms: int) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "schema_version": 1,
            "command": self.command,
            "argv": self.argv,
            "started_at": self.started_at,
            "ended_at": now_utc_z(),
            "duration_ms": duration_ms,
            "status": self.status,
            "exit_code": self.exit_code,
            "config_path": self.config_path,
            "env": self.env,
            "outputs": self.outputs,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise UsageError(message)


def parse_handle(value: str) -> str:
    v = value.strip()
    if not v:
        raise argparse.ArgumentTypeError("--handle must be non-empty")
    return v


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog=PROG)
    sub = parser.add_subparsers(dest="command", required=True, parser_class=_Parser)

    entries = sub.add_parser("entries", help="Print the webpack entry map")
    entries.add_argument("--config", default=None)
    entries.set_defaults(_handler=handle_entries)

    webpack = sub.add_parser("webpack-config", help="Emit the webpack config as JSON")
    webpack.add_argument("--config", default=None)
    webpack.add_argument("--out", default=None)
    webpack.set_defaults(_handler=handle_webpack_config)

    tag = sub.add_parser("tag", help="Run a script tag through script_loader_tag")
    tag.add_argument("--handle", required=True, type=parse_handle)
    # Same spelling the filter accepts; `DEFER` is not a mode.
    tag.add_argument(
        "--mode", default=None, choices=[m.value for m in ScriptExecutionMode]
    )
    tag.add_argument("--registry", default=None)
    tag.add_argument("--tag", default=None)
    tag.set_defaults(_handler=handle_tag)

    return parser


def _use_config(args: argparse.Namespace, run: AssetRun) -> BuildConfig:
    config = load_build_config(args.config)
    run.config_path = args.config or ""
    run.env = config.env
    return config


def handle_entries(args: argparse.Namespace, run: AssetRun) -> None:
    config = _use_config(args, run)
    entry = build_entry_map(config.js_files)
    sys.stdout.write(dump_json(entry))
    run.outputs = {"entries": sorted(entry)}


def handle_webpack_config(args: argparse.Namespace, run: AssetRun) -> None:
    config = _use_config(args, run)
    payload = build_webpack_config(config)
    run.outputs = {"mode": payload["mode"], "entries": sorted(payload["entry"])}
    if not args.out:
        sys.stdout.write(dump_json(payload))
        return
    try:
        atomic_write_json(args.out, payload)
    except OSError as exc:
        raise OutputWriteError(f"Failed to write webpack config: {exc}") from exc
    run.outputs["file"] = os.path.relpath(args.out, os.getcwd())


def load_registry(path: Optional[str]) -> ScriptRegistry:
    if path is None:
        return default_theme_scripts()
    return ScriptRegistry.from_payload(
        read_json(path, error=RegistryError, what="Script registry")
    )


def handle_tag(args: argparse.Namespace, run: AssetRun) -> None:
    registry = load_registry(args.registry)
    if args.handle not in registry:
        raise UnknownHandleError(args.handle)
    if args.mode is not None:
        registry = set_script_execution(registry, args.handle, args.mode)

    tag = args.tag
    if tag is None:
        tag = f"<script src=\"{args.handle}.js\"></script>"

    out = setup().apply_filters("script_loader_tag", tag, args.handle, registry)
    sys.stdout.write(out + "\n")
    run.outputs = {
        "handle": args.handle,
        "mode": registry.get_data(args.handle, "script_execution") or "none",
        "changed": out != tag,
        "tag": out,
    }


def main(argv: Iterable[str] | None = None) -> int:
    argv_list = list(argv) if argv is not None else sys.argv[1:]
    run = AssetRun(argv=argv_list, started_at=now_utc_z())
    t0 = time.monotonic()

    try:
        try:
            args = build_parser().parse_args(argv_list)
        except SystemExit as exc:
            # --help; argument errors raise UsageError instead.
            run.status = "help"
            run.exit_code = int(exc.code or 0)
        else:
            run.command = args.command
            args._handler(args, run)
            run.status = "ok"
            run.exit_code = int(ExitCode.OK)
    except CeriumError as exc:
        run.status = exc.status
        run.exit_code = int(exc.exit_code)
        run.error = str(exc)
        print(f"[{PROG}] {exc.status}: {exc}", file=sys.stderr)
    except Exception as exc:  # noqa: BLE001
        run.status = "crashed"
        run.exit_code = int(ExitCode.FAILED)
        run.error = f"{type(exc).__name__}: {exc}"
        print(f"[{PROG}] crashed: {run.error}", file=sys.stderr)

    duration_ms = int((time.monotonic() - t0) * 1000)
    try:
        write_run_json(ensure_artifacts_dir(os.getcwd()), run.to_payload(duration_ms))
    except OSError as exc:
        print(f"[{PROG}] write_error: cannot record run: {exc}", file=sys.stderr)
        return int(ExitCode.FAILED)

    return run.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
