from __future__ import annotations

from typing import Any

from cssselect import SelectorError
from lxml import etree
from lxml import html as lxml_html

_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


def _parse_style(raw: str | None) -> list[tuple[str, str]]:
    declarations: list[tuple[str, str]] = []
    for chunk in (raw or "").split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        prop = prop.strip().lower()
        if prop:
            declarations.append((prop, value.strip()))
    return declarations


def _render_style(declarations: list[tuple[str, str]]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in declarations)


class HtmlElement:
    """lxml-backed element handle. Obtain instances through ``HtmlDocument``."""

    __slots__ = ("_node", "_document")

    def __init__(self, node: lxml_html.HtmlElement, document: HtmlDocument) -> None:
        self._node = node
        self._document = document

    def __repr__(self) -> str:
        return f"<HtmlElement {self.tag}>"

    def __eq__(self, other: object) -> bool:
        return self.same_node(other)

    def __hash__(self) -> int:
        return id(self._node)

    @property
    def tag(self) -> str:
        return str(self._node.tag).lower()

    @property
    def parent(self) -> HtmlElement | None:
        parent = self._node.getparent()
        if parent is None:
            return None
        return self._document.wrap(parent)

    @property
    def children(self) -> list[HtmlElement]:
        return [self._document.wrap(child) for child in self._node if isinstance(child.tag, str)]

    @property
    def document(self) -> HtmlDocument:
        return self._document

    def get_attribute(self, name: str) -> str | None:
        return self._node.get(name)

    def set_attribute(self, name: str, value: str | None) -> None:
        if value is None:
            self._node.attrib.pop(name, None)
        else:
            self._node.set(name, value)

    def text_content(self) -> str:
        return self._node.text_content() or ""

    def outer_html(self) -> str:
        return lxml_html.tostring(self._node, encoding="unicode", with_tail=False)

    def get_style(self, prop: str) -> str:
        wanted = prop.strip().lower()
        for name, value in _parse_style(self._node.get("style")):
            if name == wanted:
                return value
        return ""

    def set_style(self, prop: str, value: str) -> None:
        wanted = prop.strip().lower()
        declarations = [item for item in _parse_style(self._node.get("style")) if item[0] != wanted]
        if value:
            declarations.append((wanted, value))
        self.set_attribute("style", _render_style(declarations) or None)

    def class_list(self) -> list[str]:
        return [item for item in (self._node.get("class") or "").split() if item]

    def add_class(self, name: str) -> None:
        classes = self.class_list()
        if name not in classes:
            classes.append(name)
        self.set_attribute("class", " ".join(classes))

    def remove_class(self, name: str) -> None:
        classes = [item for item in self.class_list() if item != name]
        self.set_attribute("class", " ".join(classes) or None)

    def same_node(self, other: Any) -> bool:
        return isinstance(other, HtmlElement) and other._node is self._node


class HtmlDocument:
    """In-memory document parsed with lxml; selectors are resolved with cssselect."""

    def __init__(self, root: lxml_html.HtmlElement, frame_element: HtmlElement | None = None) -> None:
        self._root = root
        self._frame_element = frame_element
        self._wrappers: dict[int, HtmlElement] = {}
        self._frames: dict[int, HtmlDocument] = {}

    @classmethod
    def from_html(cls, markup: str, frame_element: HtmlElement | None = None) -> HtmlDocument:
        text = markup if markup and markup.strip() else _EMPTY_DOCUMENT
        return cls(lxml_html.document_fromstring(text), frame_element=frame_element)

    def wrap(self, node: lxml_html.HtmlElement) -> HtmlElement:
        key = id(node)
        wrapper = self._wrappers.get(key)
        if wrapper is None or wrapper._node is not node:
            wrapper = HtmlElement(node, self)
            self._wrappers[key] = wrapper
        return wrapper

    @property
    def root(self) -> HtmlElement:
        return self.wrap(self._root)

    @property
    def frame_element(self) -> HtmlElement | None:
        return self._frame_element

    def query_all(self, selector: str) -> list[HtmlElement]:
        text = (selector or "").strip()
        if not text:
            return []
        try:
            nodes = self._root.cssselect(text)
        except (SelectorError, etree.XPathError, ValueError):
            return []
        return [self.wrap(node) for node in nodes]

    def query_one(self, selector: str) -> HtmlElement | None:
        matches = self.query_all(selector)
        return matches[0] if matches else None

    def count(self, selector: str) -> int:
        return len(self.query_all(selector))

    def query_xpath(self, expression: str) -> list[HtmlElement]:
        try:
            nodes = self._root.xpath(expression)
        except etree.XPathError:
            return []
        return [self.wrap(node) for node in nodes if isinstance(node, etree._Element) and isinstance(node.tag, str)]

    def get_element_by_id(self, element_id: str) -> HtmlElement | None:
        if not element_id:
            return None
        nodes = self._root.xpath("//*[@id=$value]", value=element_id)
        return self.wrap(nodes[0]) if nodes else None

    def attach_frame(self, frame_element: HtmlElement, markup: str) -> HtmlDocument:
        """Load ``markup`` as the same-origin content document of ``frame_element``."""
        child = HtmlDocument.from_html(markup, frame_element=frame_element)
        self._frames[id(frame_element._node)] = child
        return child

    def frame_document(self, frame_element: HtmlElement) -> HtmlDocument | None:
        return self._frames.get(id(frame_element._node))
