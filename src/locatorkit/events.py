from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable

from .dom import DomElement

logger = logging.getLogger("locatorkit.engine")

Listener = Callable[["DomEvent"], None]


@dataclass(slots=True)
class DomEvent:
    type: str
    target: DomElement | None
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


@dataclass(slots=True)
class EventHub:
    """Listener registry for one document; the host forwards its pointer events here."""

    _listeners: dict[str, list[tuple[Listener, bool]]] = field(default_factory=dict)

    def add_listener(self, event_type: str, listener: Listener, capture: bool = True) -> None:
        entries = self._listeners.setdefault(event_type, [])
        if (listener, capture) not in entries:
            entries.append((listener, capture))

    def remove_listener(self, event_type: str, listener: Listener, capture: bool = True) -> None:
        entries = self._listeners.get(event_type, [])
        if (listener, capture) in entries:
            entries.remove((listener, capture))
        if not entries:
            self._listeners.pop(event_type, None)

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is None:
            return sum(len(entries) for entries in self._listeners.values())
        return len(self._listeners.get(event_type, []))

    def dispatch(self, event: DomEvent) -> DomEvent:
        entries = list(self._listeners.get(event.type, []))
        # Capturing listeners run before bubbling ones. All listeners on this hub
        # see the event; propagation_stopped only tells the host not to forward it.
        for listener, _capture in sorted(entries, key=lambda item: not item[1]):
            listener(event)
        return event

    def move(self, target: DomElement | None) -> DomEvent:
        return self.dispatch(DomEvent("mousemove", target))

    def click(self, target: DomElement | None) -> DomEvent:
        return self.dispatch(DomEvent("click", target))


def deliver(observer: Callable[[Any], Any] | None, payload: Any, *, channel: str = "observer") -> bool:
    """Hand ``payload`` to ``observer``; failures are logged and reported as ``False``."""
    if observer is None:
        return False
    try:
        observer(payload)
    except Exception as exc:
        logger.warning("Delivery to %s failed: %s", channel, exc)
        logger.debug("Delivery failure details", exc_info=True)
        return False
    return True
