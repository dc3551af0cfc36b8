"""Theme hook wiring.

Handlers are registered once in `setup()` into a static table. A handler that
is not available is stored as `None` and skipped on dispatch.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from .scripts.loader_tag import script_loader_tag


Handler = Callable[..., Any]

DEFAULT_PRIORITY = 10

JS_DETECTION_SNIPPET = (
    "<script>(function(html){html.className = "
    "html.className.replace(/\\bno-js\\b/,'js')})(document.documentElement);</script>\n"
)


@dataclass(frozen=True)
class HookEntry:
    handler: Optional[Handler]
    priority: int
    seq: int


@dataclass
class HookTable:
    _entries: dict[str, list[HookEntry]] = field(default_factory=dict)
    _seq: int = 0

    def add(
        self, event: str, handler: Optional[Handler], priority: int = DEFAULT_PRIORITY
    ) -> None:
        self._seq += 1
        self._entries.setdefault(event, []).append(
            HookEntry(handler=handler, priority=priority, seq=self._seq)
        )

    def handlers(self, event: str) -> list[Handler]:
        """Available handlers for `event`, by priority then registration order."""

        entries = sorted(
            self._entries.get(event, []), key=lambda e: (e.priority, e.seq)
        )
        return [e.handler for e in entries if e.handler is not None]

    def events(self) -> list[str]:
        return sorted(self._entries.keys())

    def apply_filters(self, event: str, value: Any, *args: Any) -> Any:
        for handler in self.handlers(event):
            value = handler(value, *args)
        return value

    def do_action(self, event: str, *args: Any) -> list[Any]:
        return [handler(*args) for handler in self.handlers(event)]


def js_detection() -> str:
    """Inline script that swaps the root `no-js` class for `js`."""

    return JS_DETECTION_SNIPPET


def setup(
    handlers: Optional[dict[str, Optional[Handler]]] = None,
) -> HookTable:
    """Register the theme's hooks.

    `handlers` overrides the default handler per name; mapping a name to None
    disables it while keeping the registration visible in the table.
    """

    available: dict[str, Optional[Handler]] = {
        "js_detection": js_detection,
        "script_loader_tag": script_loader_tag,
    }
    if handlers:
        available.update(handlers)

    table = HookTable()
    table.add("wp_head", available.get("js_detection"), priority=0)
    table.add("script_loader_tag", available.get("script_loader_tag"))
    return table
