from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .dom import DomElement, is_element
from .events import EventHub, deliver
from .live_preview import FrameScheduler, LivePreviewPipeline
from .locator_generator import synthesize
from .messages import (
    Ack,
    CopyActionSnippetRequest,
    CopySnippetRequest,
    PingRequest,
    PreviewResponse,
    Request,
    Response,
    SelectorPreviewRequest,
    SnippetResponse,
    StartPickRequest,
    StartPreviewRequest,
    StopPickRequest,
    StopPreviewRequest,
    parse_request,
)
from .models import PickResult, PreviewFrame
from .picker import ElementPicker, OutlineTracker
from .qt_bridge import QtClipboard, QtFrameScheduler, QtObserverBridge
from .settings import EngineSettings
from .snippet_formatter import build_selector_preview, format_action_snippet, format_strategy_snippet

ElementProvider = Callable[[], DomElement | None]


class InspectorSession:
    """Per-document engine state: one picker, one preview pipeline, one outline tracker."""

    def __init__(
        self,
        events: EventHub,
        *,
        active_element: ElementProvider | None = None,
        root: ElementProvider | None = None,
        on_picked: Callable[[PickResult], None] | None = None,
        on_preview: Callable[[PreviewFrame], None] | None = None,
        clipboard: Callable[[str], None] | None = None,
        scheduler: FrameScheduler | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.events = events
        self.clipboard = clipboard
        self.logger = logging.getLogger("locatorkit.engine")
        self._active_element = active_element or (lambda: None)
        self.options = self.settings.snippet_options()
        self.outlines = OutlineTracker(self.settings.outline_style)
        self.picker = ElementPicker(
            events,
            on_picked,
            root=root,
            outlines=self.outlines,
            marker_class=self.settings.picker_marker_class,
            clipboard=clipboard if self.settings.copy_on_pick else None,
        )
        self.preview = LivePreviewPipeline(
            events,
            scheduler or QtFrameScheduler(self.settings.frame_interval_ms),
            on_preview,
            dialects=self.settings.preview_dialects,
            options=self.options,
        )

    def handle_message(self, payload: Mapping[str, Any] | None) -> dict[str, Any] | None:
        request = parse_request(payload)
        if request is None:
            message_type = payload.get("type") if isinstance(payload, Mapping) else None
            self.logger.info("Ignoring unknown message: %r", message_type)
            return None
        return self.handle(request).to_payload()

    def handle(self, request: Request) -> Response:
        if isinstance(request, PingRequest):
            return Ack(True)
        if isinstance(request, StartPickRequest):
            return Ack(self.picker.start())
        if isinstance(request, StopPickRequest):
            self.picker.stop()
            return Ack(True)
        if isinstance(request, StartPreviewRequest):
            return Ack(self.preview.start())
        if isinstance(request, StopPreviewRequest):
            self.preview.stop()
            return Ack(True)
        if isinstance(request, CopySnippetRequest):
            element = self._active_element()
            locator = self._resolve_locator(request.locator, element)
            snippet = format_strategy_snippet(locator, request.dialect, element, self.options)
            return SnippetResponse(snippet=snippet, copied=self._copy(snippet))
        if isinstance(request, CopyActionSnippetRequest):
            locator = self._resolve_locator(request.locator, self._active_element())
            snippet = format_action_snippet(locator, request.dialect, request.action, self.options)
            return SnippetResponse(snippet=snippet, copied=self._copy(snippet))
        if isinstance(request, SelectorPreviewRequest):
            element = self._active_element()
            locator = self._resolve_locator(request.locator, element)
            frame = build_selector_preview(locator, element, self.settings.preview_dialects, self.options)
            return PreviewResponse(locator=frame.locator, preview=frame.preview)
        return Ack(False)

    def close(self) -> None:
        self.picker.stop()
        self.preview.stop()
        self.outlines.clear()

    @staticmethod
    def _resolve_locator(stored: str | None, element: DomElement | None) -> str:
        if stored:
            return stored
        if is_element(element):
            return synthesize(element) or ""
        return ""

    def _copy(self, snippet: str) -> bool:
        if not snippet or self.clipboard is None:
            return False
        return deliver(self.clipboard, snippet, channel="clipboard")


def create_qt_session(
    events: EventHub,
    *,
    active_element: ElementProvider | None = None,
    root: ElementProvider | None = None,
    settings: EngineSettings | None = None,
) -> tuple[InspectorSession, QtObserverBridge]:
    """Session whose observers are Qt signals and whose clipboard is the system one."""
    bridge = QtObserverBridge()
    session = InspectorSession(
        events,
        active_element=active_element,
        root=root,
        on_picked=bridge.emit_pick,
        on_preview=bridge.emit_preview,
        clipboard=QtClipboard(),
        settings=settings,
    )
    return session, bridge
