from __future__ import annotations

import logging
from typing import Any

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Frame, Page

logger = logging.getLogger("locatorkit.engine")

_MISSING_BROWSER_HINTS = (
    "executable doesn't exist",
    "executable does not exist",
    "download new browsers",
    "playwright install",
    "could not find browser",
    "failed to launch chromium because executable",
)

_GET_STYLE_JS = "(el, prop) => el.style.getPropertyValue(prop)"
_SET_STYLE_JS = """
(el, [prop, value]) => {
  if (value) {
    el.style.setProperty(prop, value);
  } else {
    el.style.removeProperty(prop);
  }
  if (!el.getAttribute('style')) {
    el.removeAttribute('style');
  }
}
"""


def is_missing_browser_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return any(hint in message for hint in _MISSING_BROWSER_HINTS)


class PlaywrightElement:
    """Element capability backed by a Playwright ``ElementHandle``."""

    __slots__ = ("_handle", "_document")

    def __init__(self, handle: ElementHandle, document: PlaywrightDocument) -> None:
        self._handle = handle
        self._document = document

    def __repr__(self) -> str:
        return f"<PlaywrightElement {self.tag}>"

    @property
    def tag(self) -> str:
        return str(self._handle.evaluate("el => el.tagName.toLowerCase()") or "")

    @property
    def parent(self) -> PlaywrightElement | None:
        parent = self._handle.evaluate_handle("el => el.parentElement").as_element()
        return self._document.wrap(parent) if parent is not None else None

    @property
    def children(self) -> list[PlaywrightElement]:
        return [self._document.wrap(child) for child in self._handle.query_selector_all(":scope > *")]

    @property
    def document(self) -> PlaywrightDocument:
        return self._document

    def get_attribute(self, name: str) -> str | None:
        return self._handle.get_attribute(name)

    def text_content(self) -> str:
        return self._handle.text_content() or ""

    def outer_html(self) -> str:
        return str(self._handle.evaluate("el => el.outerHTML") or "")

    def get_style(self, prop: str) -> str:
        return str(self._handle.evaluate(_GET_STYLE_JS, prop) or "")

    def set_style(self, prop: str, value: str) -> None:
        self._handle.evaluate(_SET_STYLE_JS, [prop, value or ""])

    def class_list(self) -> list[str]:
        return list(self._handle.evaluate("el => Array.from(el.classList)") or [])

    def add_class(self, name: str) -> None:
        self._handle.evaluate("(el, name) => el.classList.add(name)", name)

    def remove_class(self, name: str) -> None:
        self._handle.evaluate("(el, name) => el.classList.remove(name)", name)

    def same_node(self, other: Any) -> bool:
        if not isinstance(other, PlaywrightElement):
            return False
        if other._handle is self._handle:
            return True
        try:
            return bool(self._handle.evaluate("(el, other) => el === other", other._handle))
        except PlaywrightError:
            return False


class PlaywrightDocument:
    """Document capability for one Playwright frame (main frame or iframe)."""

    def __init__(self, frame: Frame) -> None:
        self._frame = frame

    @classmethod
    def for_page(cls, page: Page) -> PlaywrightDocument:
        return cls(page.main_frame)

    @property
    def frame(self) -> Frame:
        return self._frame

    def wrap(self, handle: ElementHandle) -> PlaywrightElement:
        return PlaywrightElement(handle, self)

    @property
    def root(self) -> PlaywrightElement | None:
        handle = self._frame.query_selector("html")
        return self.wrap(handle) if handle is not None else None

    @property
    def frame_element(self) -> PlaywrightElement | None:
        parent_frame = self._frame.parent_frame
        if parent_frame is None:
            return None
        try:
            handle = self._frame.frame_element()
        except PlaywrightError:
            return None
        return PlaywrightDocument(parent_frame).wrap(handle)

    def query_all(self, selector: str) -> list[PlaywrightElement]:
        text = (selector or "").strip()
        if not text:
            return []
        try:
            handles = self._frame.query_selector_all(text)
        except PlaywrightError as exc:
            logger.debug("Selector probe failed for %s: %s", text, exc)
            return []
        return [self.wrap(handle) for handle in handles]

    def query_one(self, selector: str) -> PlaywrightElement | None:
        matches = self.query_all(selector)
        return matches[0] if matches else None

    def count(self, selector: str) -> int:
        return len(self.query_all(selector))

    def get_element_by_id(self, element_id: str) -> PlaywrightElement | None:
        if not element_id:
            return None
        try:
            handle = self._frame.evaluate_handle("id => document.getElementById(id)", element_id).as_element()
        except PlaywrightError:
            return None
        return self.wrap(handle) if handle is not None else None

