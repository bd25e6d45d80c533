from __future__ import annotations

import logging

from .dom import DomElement, is_element, ordinal_among_same_tag, same_tag_siblings
from .selector_rules import (
    MAX_CLASS_PREDICATES,
    PATH_SEPARATOR,
    SEGMENT_ATTRS,
    attribute_predicate,
    css_escape,
    first_test_attribute,
    id_selector,
    xpath_literal,
)

logger = logging.getLogger("locatorkit.engine")


def synthesize(element: DomElement | None) -> str | None:
    """Build the shortest unique structural (CSS) path for ``element``.

    Walks from the element toward the document root and returns as soon as the
    accumulated path matches exactly one node. When no prefix is unique the full
    chain is returned, so callers must treat the result as best effort.
    """
    if not is_element(element):
        return None

    document = element.document
    element_id = element.get_attribute("id")
    if element_id:
        candidate = id_selector(element_id)
        if document.count(candidate) == 1:
            return candidate

    root = document.root
    parts: list[str] = []
    node: DomElement | None = element
    while node is not None and not (root is not None and node.same_node(root)):
        segment, stop_walk = build_segment(node)
        parts.insert(0, segment)
        if stop_walk:
            return PATH_SEPARATOR.join(parts)

        candidate = PATH_SEPARATOR.join(parts)
        if document.count(candidate) == 1:
            return candidate

        node = node.parent

    fallback = PATH_SEPARATOR.join(parts)
    logger.debug("No unique structural path for <%s>; returning %s", element.tag, fallback)
    return fallback


def build_segment(node: DomElement) -> tuple[str, bool]:
    """Return ``(segment, stop_walk)`` for one level of the structural path.

    A test attribute is assumed globally unique, so it ends the walk.
    """
    segment = node.tag
    test_attr = first_test_attribute(node.get_attribute)
    if test_attr:
        attr, value = test_attr
        return segment + attribute_predicate(attr, value), True

    for attr in SEGMENT_ATTRS:
        value = node.get_attribute(attr)
        if value:
            segment += attribute_predicate(attr, value)

    classes = node.class_list()
    if classes:
        segment += "." + ".".join(css_escape(item) for item in classes[:MAX_CLASS_PREDICATES])

    if node.parent is not None:
        siblings = same_tag_siblings(node)
        if len(siblings) > 1:
            segment += f":nth-of-type({ordinal_among_same_tag(node)})"

    return segment, False


def absolute_path(element: DomElement | None) -> str:
    """Index-qualified XPath from the document root, anchored at a unique id when one is in scope."""
    if not is_element(element):
        return ""

    document = element.document
    parts: list[str] = []
    node: DomElement | None = element
    while node is not None:
        node_id = node.get_attribute("id")
        if node_id and document.count(id_selector(node_id)) == 1:
            return f"//*[@id={xpath_literal(node_id)}]" + "".join(parts)
        parts.insert(0, f"/{node.tag}[{ordinal_among_same_tag(node)}]")
        node = node.parent
    return "".join(parts)


def resolves_uniquely(element: DomElement, locator: str) -> bool:
    if not is_element(element) or not locator:
        return False
    matches = element.document.query_all(locator)
    return len(matches) == 1 and matches[0].same_node(element)
