from typing import Any

from PySide6.QtCore import QCoreApplication
from PySide6.QtTest import QTest

from locatorkit.events import EventHub
from locatorkit.html_tree import HtmlDocument, HtmlElement
from locatorkit.live_preview import ManualFrameScheduler
from locatorkit.messages import (
    Ack,
    CopyActionSnippetRequest,
    CopySnippetRequest,
    PingRequest,
    PreviewResponse,
    SelectorPreviewRequest,
    SnippetResponse,
    StartPickRequest,
    StartPreviewRequest,
    StopPickRequest,
    StopPreviewRequest,
    parse_request,
)
from locatorkit.models import PickResult, PreviewFrame
from locatorkit.session import InspectorSession, create_qt_session
from locatorkit.settings import EngineSettings


def _doc(body: str) -> HtmlDocument:
    return HtmlDocument.from_html(f"<html><head></head><body>{body}</body></html>")


def _session(
    document: HtmlDocument,
    active: HtmlElement | None = None,
    settings: EngineSettings | None = None,
) -> tuple[InspectorSession, list[str], list[PickResult], list[PreviewFrame], ManualFrameScheduler]:
    copied: list[str] = []
    picked: list[PickResult] = []
    frames: list[PreviewFrame] = []
    scheduler = ManualFrameScheduler()
    session = InspectorSession(
        EventHub(),
        active_element=lambda: active,
        root=lambda: document.root,
        on_picked=picked.append,
        on_preview=frames.append,
        clipboard=copied.append,
        scheduler=scheduler,
        settings=settings,
    )
    return session, copied, picked, frames, scheduler


def test_parse_request_maps_wire_names() -> None:
    assert parse_request({"type": "QA_PING"}) == PingRequest()
    assert parse_request({"type": "QA_START_PICK_SELECTOR"}) == StartPickRequest()
    assert parse_request({"type": "QA_STOP_PICK_SELECTOR"}) == StopPickRequest()
    assert parse_request({"type": "QA_START_LIVE_PREVIEW"}) == StartPreviewRequest()
    assert parse_request({"type": "QA_STOP_LIVE_PREVIEW"}) == StopPreviewRequest()
    assert parse_request({"type": "QA_COPY_SNIPPET", "target": "cypress", "selector": " #a "}) == CopySnippetRequest(
        dialect="cypress", locator="#a"
    )
    assert parse_request(
        {"type": "QA_COPY_ACTION_SNIPPET", "target": "playwright", "action": "hover"}
    ) == CopyActionSnippetRequest(dialect="playwright", action="hover", locator=None)
    assert parse_request({"type": "QA_SELECTOR_PREVIEW", "selector": ""}) == SelectorPreviewRequest(locator=None)


def test_parse_request_rejects_unknown_messages() -> None:
    assert parse_request({"type": "QA_SELF_DESTRUCT"}) is None
    assert parse_request({}) is None
    assert parse_request(None) is None
    assert parse_request(["QA_PING"]) is None  # type: ignore[arg-type]


def test_ping_and_pick_lifecycle() -> None:
    document = _doc('<button class="btn">Save</button><button class="btn">Cancel</button>')
    session, copied, picked, _, _ = _session(document)
    assert session.handle(PingRequest()) == Ack(True)
    assert session.handle(StartPickRequest()) == Ack(True)
    assert session.picker.armed

    second = document.query_all("button")[1]
    session.events.move(second)
    session.events.click(second)
    assert [item.locator for item in picked] == ["button.btn:nth-of-type(2)"]
    assert copied == ["button.btn:nth-of-type(2)"]
    assert not session.picker.armed
    assert session.handle(StopPickRequest()) == Ack(True)


def test_copy_on_pick_can_be_disabled() -> None:
    document = _doc("<p>x</p>")
    session, copied, picked, _, _ = _session(document, settings=EngineSettings(copy_on_pick=False))
    session.handle(StartPickRequest())
    session.events.click(document.query_one("p"))
    assert len(picked) == 1
    assert copied == []


def test_copy_snippet_uses_stored_locator_or_active_element() -> None:
    document = _doc('<input id="email" type="email">')
    session, copied, _, _, _ = _session(document, active=document.query_one("input"))

    stored = session.handle(CopySnippetRequest(dialect="cypress", locator="#stored"))
    assert stored == SnippetResponse(snippet="cy.get('#stored').click();", copied=True)

    synthesized = session.handle(CopySnippetRequest(dialect="playwright-role"))
    assert synthesized == SnippetResponse(snippet="await page.locator('#email').click();", copied=True)
    assert copied == ["cy.get('#stored').click();", "await page.locator('#email').click();"]


def test_copy_action_snippet_reports_missing_target() -> None:
    document = _doc("<p>x</p>")
    session, copied, _, _, _ = _session(document)
    response = session.handle(CopyActionSnippetRequest(dialect="selenium-js", action="press-tab"))
    assert response == SnippetResponse(snippet="", copied=False)
    assert copied == []

    response = session.handle(CopyActionSnippetRequest(dialect="selenium-js", action="press-tab", locator="#q"))
    assert response.snippet == "await driver.findElement(By.css('#q')).sendKeys(Key.TAB);"
    assert response.copied


def test_clipboard_failure_is_reported_not_raised(qt_app: QCoreApplication) -> None:
    def _denied(_text: str) -> None:
        raise PermissionError("clipboard denied")

    session = InspectorSession(EventHub(), clipboard=_denied)
    response = session.handle(CopySnippetRequest(dialect="js", locator="#a"))
    assert response == SnippetResponse(snippet="document.querySelector('#a')?.click();", copied=False)


def test_selector_preview_request_uses_settings_dialects() -> None:
    document = _doc('<input id="email">')
    settings = EngineSettings(preview_dialects=["css", "cypress"])
    session, _, _, _, _ = _session(document, active=document.query_one("input"), settings=settings)
    response = session.handle(SelectorPreviewRequest())
    assert isinstance(response, PreviewResponse)
    assert response.to_payload() == {
        "selector": "#email",
        "preview": [
            {"target": "css", "code": "#email"},
            {"target": "cypress", "code": "cy.get('#email').click();"},
        ],
    }


def test_live_preview_through_messages() -> None:
    document = _doc("<p>a</p>")
    session, _, _, frames, scheduler = _session(document)
    assert session.handle_message({"type": "QA_START_LIVE_PREVIEW"}) == {"ok": True}
    session.events.move(document.query_one("p"))
    scheduler.flush()
    assert [frame.locator for frame in frames] == ["p"]
    assert session.handle_message({"type": "QA_STOP_LIVE_PREVIEW"}) == {"ok": True}
    assert not session.preview.running
    assert session.handle_message({"type": "QA_UNKNOWN"}) is None


def test_close_releases_picker_and_preview() -> None:
    document = _doc("<p>a</p>")
    session, _, _, _, _ = _session(document)
    session.handle(StartPickRequest())
    session.handle(StartPreviewRequest())
    session.events.move(document.query_one("p"))
    session.close()
    assert session.events.listener_count() == 0
    assert document.query_one("p").get_attribute("style") is None
    assert "qa-picker-active" not in document.root.class_list()


def test_snippet_response_payload_carries_both_keys() -> None:
    response = SnippetResponse(snippet="cy.get('#a').click();", copied=True)
    assert response.to_payload() == {
        "snippet": "cy.get('#a').click();",
        "code": "cy.get('#a').click();",
        "copied": True,
    }


def test_default_session_emits_preview_frames_on_qt_timer(qt_app: QCoreApplication) -> None:
    document = _doc("<p>a</p>")
    frames: list[PreviewFrame] = []
    session = InspectorSession(
        EventHub(),
        root=lambda: document.root,
        on_preview=frames.append,
        settings=EngineSettings(frame_interval_ms=5),
    )
    assert session.handle(StartPreviewRequest()) == Ack(True)
    session.events.move(document.query_one("p"))
    for _ in range(50):
        if frames:
            break
        QTest.qWait(10)
    assert [frame.locator for frame in frames] == ["p"]
    session.close()


def test_qt_session_routes_observers_through_signals(qt_app: QCoreApplication) -> None:
    document = _doc('<button class="btn">Save</button>')
    session, bridge = create_qt_session(
        EventHub(),
        root=lambda: document.root,
        settings=EngineSettings(copy_on_pick=False),
    )
    picked: list[Any] = []
    bridge.picked.connect(picked.append)
    session.handle(StartPickRequest())
    session.events.click(document.query_one("button"))
    assert [payload["selector"] for payload in picked] == ["button.btn"]

    response = session.handle(CopySnippetRequest(dialect="css", locator="#a"))
    assert response == SnippetResponse(snippet="#a", copied=False)
