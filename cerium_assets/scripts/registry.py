"""Read-only table of registered scripts.

Mirrors the host's script registry: each handle has ordered dependencies and
a small `extra` map (e.g. `script_execution`). Tables are immutable; updates
return a new registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Optional

from ..validate.schema import check_script_registry


SCRIPT_EXECUTION_KEY = "script_execution"


class ScriptExecutionMode(str, Enum):
    NONE = "none"
    ASYNC = "async"
    DEFER = "defer"


@dataclass(frozen=True)
class RegisteredScript:
    handle: str
    deps: tuple[str, ...] = ()
    extra: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "deps", tuple(self.deps))
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


class ScriptRegistry:
    def __init__(self, scripts: Iterable[RegisteredScript] = ()) -> None:
        by_handle: dict[str, RegisteredScript] = {}
        for s in scripts:
            by_handle[s.handle] = s
        self._by_handle = by_handle

    def __iter__(self) -> Iterator[RegisteredScript]:
        return iter(self._by_handle.values())

    def __len__(self) -> int:
        return len(self._by_handle)

    def __contains__(self, handle: object) -> bool:
        return handle in self._by_handle

    def get(self, handle: str) -> Optional[RegisteredScript]:
        return self._by_handle.get(handle)

    def get_data(self, handle: str, key: str) -> Optional[str]:
        s = self._by_handle.get(handle)
        if s is None:
            return None
        return s.extra.get(key)

    def dependents_of(self, handle: str) -> list[str]:
        """Handles whose dependency list names `handle` (linear scan)."""

        return [s.handle for s in self if handle in s.deps]

    def to_payload(self) -> dict[str, object]:
        return {
            "scripts": [
                {"handle": s.handle, "deps": list(s.deps), "extra": dict(s.extra)}
                for s in self
            ]
        }

    @classmethod
    def from_payload(cls, payload: object) -> "ScriptRegistry":
        data = check_script_registry(payload)
        scripts: list[RegisteredScript] = []
        for item in data["scripts"]:
            scripts.append(
                RegisteredScript(
                    handle=item["handle"],
                    deps=tuple(item.get("deps", [])),
                    extra=dict(item.get("extra", {})),
                )
            )
        return cls(scripts)


def set_script_execution(
    registry: ScriptRegistry, handle: str, mode: str
) -> ScriptRegistry:
    """Return a copy of `registry` with `script_execution` set for `handle`.

    Unknown handles are left alone, matching the host's `add_data` which
    refuses data for unregistered scripts.
    """

    current = registry.get(handle)
    if current is None:
        return registry

    extra = dict(current.extra)
    extra[SCRIPT_EXECUTION_KEY] = mode
    updated = replace(current, extra=extra)
    return ScriptRegistry(updated if s.handle == handle else s for s in registry)


def default_theme_scripts() -> ScriptRegistry:
    """Scripts the theme itself registers on the front end."""

    return ScriptRegistry(
        [
            # CDN hosted jQuery stays in the header; plugins expect it there.
            RegisteredScript("jquery"),
            RegisteredScript("jquery-migrate", deps=("jquery",)),
            RegisteredScript("frontend"),
            RegisteredScript("comment-reply"),
        ]
    )
