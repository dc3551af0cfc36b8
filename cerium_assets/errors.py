"""Errors raised by asset runs.

Each error names the run status it produces in `.cerium/run.json` and the
process exit code the CLI returns for it. The pure helpers (entry map, tag
filter, hooks) never raise any of these.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    # The script handle must be registered before its tag can be filtered.
    UNKNOWN_HANDLE = 1
    FAILED = 2


class CeriumError(Exception):
    status = "failed"
    exit_code = ExitCode.FAILED


class UsageError(CeriumError):
    """Command line arguments were rejected."""

    status = "usage"


class ConfigError(CeriumError):
    """The build config file is missing, unreadable or invalid."""

    status = "config_error"


class RegistryError(CeriumError):
    """A script registry payload is unreadable or invalid."""

    status = "registry_error"


class OutputWriteError(CeriumError):
    status = "write_error"


class UnknownHandleError(CeriumError):
    status = "unknown_handle"
    exit_code = ExitCode.UNKNOWN_HANDLE

    def __init__(self, handle: str) -> None:
        super().__init__(f"Script handle is not registered: {handle}")
        self.handle = handle
