from __future__ import annotations

import logging
from typing import Callable, Literal

from .dom import DomElement, is_element
from .dom_extractor import describe
from .events import DomEvent, EventHub, deliver
from .locator_generator import synthesize
from .models import PickResult

PickState = Literal["idle", "armed"]

DEFAULT_OUTLINE = "2px solid #3b82f6"
DEFAULT_MARKER_CLASS = "qa-picker-active"

logger = logging.getLogger("locatorkit.engine")


class OutlineTracker:
    """Owns the set of outlined elements and restores their prior outline on clear."""

    def __init__(self, outline_style: str = DEFAULT_OUTLINE) -> None:
        self.outline_style = outline_style
        self._touched: list[tuple[DomElement, str]] = []

    def __len__(self) -> int:
        return len(self._touched)

    def is_tracking(self, element: DomElement) -> bool:
        return any(item.same_node(element) for item, _previous in self._touched)

    def outline(self, element: DomElement | None) -> None:
        if not is_element(element):
            return
        if not self.is_tracking(element):
            self._touched.append((element, element.get_style("outline")))
        element.set_style("outline", self.outline_style)

    def clear(self) -> None:
        touched, self._touched = self._touched, []
        for element, previous in touched:
            try:
                element.set_style("outline", previous)
            except Exception:
                logger.warning("Could not restore outline on <%s>", element.tag)


class ElementPicker:
    """Interactive pick mode: idle -> armed -> (picked | stopped) -> idle."""

    def __init__(
        self,
        events: EventHub,
        on_picked: Callable[[PickResult], None] | None,
        *,
        root: Callable[[], DomElement | None] | None = None,
        outlines: OutlineTracker | None = None,
        marker_class: str = DEFAULT_MARKER_CLASS,
        clipboard: Callable[[str], None] | None = None,
    ) -> None:
        self.events = events
        self.on_picked = on_picked
        self.outlines = outlines or OutlineTracker()
        self.marker_class = marker_class
        self.clipboard = clipboard
        self._root = root or (lambda: None)
        self._state: PickState = "idle"
        self._marked: DomElement | None = None
        self.logger = logger

    @property
    def state(self) -> PickState:
        return self._state

    @property
    def armed(self) -> bool:
        return self._state == "armed"

    def start(self) -> bool:
        if self._state == "armed":
            return True
        self._state = "armed"
        root = self._root()
        if is_element(root):
            root.add_class(self.marker_class)
            self._marked = root
        self.events.add_listener("mousemove", self.handle_move, capture=True)
        self.events.add_listener("click", self.handle_click, capture=True)
        self.logger.info("Picker armed.")
        return True

    def stop(self) -> None:
        if self._state != "armed":
            return
        self._teardown()
        self.logger.info("Picker stopped without a pick.")

    def handle_move(self, event: DomEvent) -> None:
        if self._state != "armed":
            return
        self.outlines.clear()
        self.outlines.outline(event.target)

    def handle_click(self, event: DomEvent) -> PickResult | None:
        if self._state != "armed":
            return None
        event.prevent_default()
        event.stop_propagation()

        # Restore host styling first so the descriptor markup is unaffected.
        self._teardown()
        target = event.target
        locator = synthesize(target)
        descriptor = describe(target, locator) if locator else None

        if not locator:
            self.logger.info("Pick ignored: click target is not an element.")
            return None

        result = PickResult(locator=locator, descriptor=descriptor)
        if self.clipboard is not None:
            deliver(self.clipboard, locator, channel="clipboard")
        deliver(self.on_picked, result, channel="pick observer")
        self.logger.info("Picked %s", locator)
        return result

    def _teardown(self) -> None:
        self._state = "idle"
        self.outlines.clear()
        if self._marked is not None:
            self._marked.remove_class(self.marker_class)
            self._marked = None
        self.events.remove_listener("mousemove", self.handle_move, capture=True)
        self.events.remove_listener("click", self.handle_click, capture=True)
