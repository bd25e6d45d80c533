"""Minimal read-only view of a DOM tree used by the locator engine.

The synthesizer and the descriptor extractor only need to walk ancestors,
inspect siblings and read attributes. The only mutation allowed is transient
styling (outline highlight, picker marker class) which callers must restore.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

_ELEMENT_MEMBERS = ("tag", "parent", "children", "document", "get_attribute", "same_node")


class DomElement(Protocol):
    @property
    def tag(self) -> str: ...

    @property
    def parent(self) -> DomElement | None: ...

    @property
    def children(self) -> Sequence[DomElement]: ...

    @property
    def document(self) -> DomDocument: ...

    def get_attribute(self, name: str) -> str | None: ...

    def text_content(self) -> str: ...

    def outer_html(self) -> str: ...

    def get_style(self, prop: str) -> str: ...

    def set_style(self, prop: str, value: str) -> None: ...

    def class_list(self) -> list[str]: ...

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...

    def same_node(self, other: Any) -> bool: ...


class DomDocument(Protocol):
    @property
    def root(self) -> DomElement | None: ...

    @property
    def frame_element(self) -> DomElement | None: ...

    def query_all(self, selector: str) -> list[DomElement]: ...

    def count(self, selector: str) -> int: ...

    def get_element_by_id(self, element_id: str) -> DomElement | None: ...


def is_element(value: Any) -> bool:
    if value is None:
        return False
    kind = type(value)
    return all(hasattr(kind, member) for member in _ELEMENT_MEMBERS)


def same_tag_siblings(element: DomElement) -> list[DomElement]:
    parent = element.parent
    if parent is None:
        return [element]
    return [child for child in parent.children if child.tag == element.tag]


def ordinal_among_same_tag(element: DomElement) -> int:
    for index, sibling in enumerate(same_tag_siblings(element), start=1):
        if sibling.same_node(element):
            return index
    return 1


def closest(element: DomElement, tag: str) -> DomElement | None:
    current: DomElement | None = element
    while current is not None:
        if current.tag == tag:
            return current
        current = current.parent
    return None
