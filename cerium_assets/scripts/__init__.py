"""Script registry and `script_loader_tag` filtering."""

from .loader_tag import annotate_script_tag, script_loader_tag
from .registry import (
    RegisteredScript,
    ScriptExecutionMode,
    ScriptRegistry,
    default_theme_scripts,
    set_script_execution,
)

__all__ = [
    "RegisteredScript",
    "ScriptExecutionMode",
    "ScriptRegistry",
    "annotate_script_tag",
    "default_theme_scripts",
    "script_loader_tag",
    "set_script_execution",
]
