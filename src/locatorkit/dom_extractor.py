from __future__ import annotations

from .dom import DomElement, closest, is_element
from .models import ElementDescriptor
from .selector_rules import attribute_predicate, first_test_attribute, id_selector, normalize_space

MAX_CLASSES = 6
MAX_TEXT = 120
MAX_OUTER_HTML = 240

_TAG_ROLES = {
    "button": "button",
    "a": "link",
    "select": "combobox",
    "textarea": "textbox",
}

_INPUT_TYPE_ROLES = {
    "checkbox": "checkbox",
    "radio": "radio",
    "submit": "button",
    "button": "button",
    "reset": "button",
}

FRAME_LOCATOR_ATTRS = ("name", "title", "src")


def infer_role(element: DomElement | None) -> str | None:
    if not is_element(element):
        return None
    explicit = element.get_attribute("role")
    if explicit:
        return explicit
    tag = element.tag
    if tag == "input":
        input_type = (element.get_attribute("type") or "text").strip().lower()
        return _INPUT_TYPE_ROLES.get(input_type, "textbox")
    return _TAG_ROLES.get(tag)


def accessible_name(element: DomElement | None) -> str:
    if not is_element(element):
        return ""

    aria_label = (element.get_attribute("aria-label") or "").strip()
    if aria_label:
        return aria_label

    document = element.document
    labelled_by = (element.get_attribute("aria-labelledby") or "").strip()
    if labelled_by:
        chunks = []
        for ref in labelled_by.split():
            target = document.get_element_by_id(ref)
            if target is not None:
                text = target.text_content().strip()
                if text:
                    chunks.append(text)
        if chunks:
            return " ".join(chunks)

    element_id = element.get_attribute("id")
    if element_id:
        for label in document.query_all("label" + attribute_predicate("for", element_id)):
            text = label.text_content().strip()
            if text:
                return text

    wrapping = closest(element, "label")
    if wrapping is not None:
        return wrapping.text_content().strip()
    return ""


def resolve_test_id(element: DomElement | None) -> str:
    if not is_element(element):
        return ""
    found = first_test_attribute(element.get_attribute)
    return found[1] if found else ""


def frame_locator(element: DomElement | None) -> str:
    """Locator of the frame hosting ``element``; empty for top-level documents."""
    if not is_element(element):
        return ""
    frame = element.document.frame_element
    if not is_element(frame):
        return ""

    frame_id = frame.get_attribute("id")
    if frame_id:
        return id_selector(frame_id)
    for attr in FRAME_LOCATOR_ATTRS:
        value = frame.get_attribute(attr)
        if value:
            return frame.tag + attribute_predicate(attr, value)
    return frame.tag


def describe(element: DomElement | None, locator: str | None) -> ElementDescriptor | None:
    if not is_element(element):
        return None

    text = normalize_space(element.text_content(), MAX_TEXT)
    markup = element.outer_html()[:MAX_OUTER_HTML]
    return ElementDescriptor(
        locator=locator or "",
        tag=element.tag,
        id=element.get_attribute("id") or "",
        classes=tuple(element.class_list()[:MAX_CLASSES]),
        name=element.get_attribute("name") or "",
        role=infer_role(element) or "",
        accessible_name=accessible_name(element),
        aria_label=element.get_attribute("aria-label") or "",
        placeholder=element.get_attribute("placeholder") or "",
        input_type=element.get_attribute("type") or "",
        test_id=resolve_test_id(element),
        text=text,
        outer_html=markup,
        frame=frame_locator(element),
    )
