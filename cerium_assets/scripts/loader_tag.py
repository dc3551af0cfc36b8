"""Add async/defer attributes to enqueued script tags.

See https://core.trac.wordpress.org/ticket/12009.

This runs as a page-rendering filter, so it never raises: anything it cannot
handle is returned unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Optional

from .registry import (
    SCRIPT_EXECUTION_KEY,
    RegisteredScript,
    ScriptExecutionMode,
    ScriptRegistry,
)


_ALLOWED_MODES = frozenset(
    {ScriptExecutionMode.ASYNC.value, ScriptExecutionMode.DEFER.value}
)

_CLOSE_RE = re.compile(r"(?=></script>)")


def _mode_value(mode: object) -> str:
    if isinstance(mode, ScriptExecutionMode):
        return mode.value
    if isinstance(mode, str):
        return mode
    return ""


def annotate_script_tag(
    tag: str,
    handle: str,
    mode: Optional[object],
    registered_scripts: Iterable[RegisteredScript],
) -> str:
    m = _mode_value(mode)
    if not m or m == ScriptExecutionMode.NONE.value:
        return tag
    if m not in _ALLOWED_MODES:
        return tag

    # Scripts that others depend on keep ordered loading; async/defer would
    # let a dependent run first.
    for script in registered_scripts:
        if handle in script.deps:
            return tag

    # Add the attribute if it hasn't already been added.
    if re.search(rf"\s{re.escape(m)}(=|>|\s)", tag):
        return tag
    return _CLOSE_RE.sub(f" {m}", tag, count=1)


def script_loader_tag(tag: str, handle: str, registry: ScriptRegistry) -> str:
    """Filter callback: look up the handle's `script_execution` flag and apply it."""

    mode = registry.get_data(handle, SCRIPT_EXECUTION_KEY)
    return annotate_script_tag(tag, handle, mode, registry)
