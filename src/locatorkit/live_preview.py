from __future__ import annotations

from dataclasses import dataclass, field
import itertools
import logging
from typing import Any, Callable, Iterable, Iterator, Protocol

from .dialect_catalog import PREVIEW_DIALECTS
from .dom import DomElement, is_element
from .events import DomEvent, EventHub, deliver
from .locator_generator import synthesize
from .models import PreviewFrame
from .snippet_formatter import SnippetOptions, build_selector_preview

logger = logging.getLogger("locatorkit.engine")


class FrameScheduler(Protocol):
    def request(self, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


@dataclass(slots=True)
class ManualFrameScheduler:
    """Frame scheduler driven by explicit ``flush`` calls (one call == one display frame)."""

    _pending: dict[int, Callable[[], None]] = field(default_factory=dict)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))

    def request(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def flush(self) -> int:
        callbacks, self._pending = list(self._pending.values()), {}
        for callback in callbacks:
            callback()
        return len(callbacks)


class LivePreviewPipeline:
    """Streams locator + all-dialect snippets for the hovered element.

    Pointer samples are coalesced to one recomputation per display frame and a
    sample that hovers the last processed element again is dropped.
    """

    def __init__(
        self,
        events: EventHub,
        scheduler: FrameScheduler,
        on_frame: Callable[[PreviewFrame], None] | None,
        *,
        dialects: Iterable[str] = PREVIEW_DIALECTS,
        options: SnippetOptions | None = None,
    ) -> None:
        self.events = events
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.dialects = tuple(dialects)
        self.options = options
        self._running = False
        self._pending_handle: Any = None
        self._last_target: DomElement | None = None
        self.emitted = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def has_pending(self) -> bool:
        return self._pending_handle is not None

    def start(self) -> bool:
        if self._running:
            return True
        self._running = True
        self.events.add_listener("mousemove", self.handle_move, capture=True)
        logger.info("Live preview started.")
        return True

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._cancel_pending()
        self._last_target = None
        self.events.remove_listener("mousemove", self.handle_move, capture=True)
        logger.info("Live preview stopped.")

    def handle_move(self, event: DomEvent) -> None:
        if not self._running:
            return
        target = event.target
        self._cancel_pending()
        self._pending_handle = self.scheduler.request(lambda: self._process(target))

    def _cancel_pending(self) -> None:
        if self._pending_handle is not None:
            self.scheduler.cancel(self._pending_handle)
            self._pending_handle = None

    def _process(self, target: DomElement | None) -> PreviewFrame | None:
        self._pending_handle = None
        if not self._running or not is_element(target):
            return None
        if self._last_target is not None and self._last_target.same_node(target):
            return None
        self._last_target = target

        locator = synthesize(target) or ""
        frame = build_selector_preview(locator, target, self.dialects, self.options)
        self.emitted += 1
        deliver(self.on_frame, frame, channel="preview observer")
        return frame
