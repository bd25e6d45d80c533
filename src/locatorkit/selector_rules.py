from __future__ import annotations

import re
import string
from typing import Callable

TEST_ATTR_PRIORITY = (
    "data-testid",
    "data-test",
    "data-cy",
    "data-qa",
    "data-qaid",
)

SEGMENT_ATTRS = ("name", "aria-label", "placeholder")
MAX_CLASS_PREDICATES = 2
PATH_SEPARATOR = " > "

_CSS_PLAIN_CHARS = frozenset(string.ascii_letters + string.digits + "-_")

def normalize_space(value: str | None, limit: int = 200) -> str:
    if not value:
        return ""
    compact = re.sub(r"\s+", " ", str(value)).strip()
    return compact[:limit] if compact else ""


def css_escape(value: str) -> str:
    """Escape ``value`` for use as a CSS identifier (id or class name).

    Characters outside ``[A-Za-z0-9_-]`` get a backslash, non-ASCII passes
    through and a leading digit is written as a hex escape.
    """
    if value == "-":
        return "\\-"
    escaped: list[str] = []
    for index, char in enumerate(value):
        code = ord(char)
        if code == 0:
            escaped.append("\ufffd")
        elif char in string.digits and (index == 0 or (index == 1 and value[0] == "-")):
            escaped.append(f"\\{code:x} ")
        elif code >= 0x80 or char in _CSS_PLAIN_CHARS:
            escaped.append(char)
        elif char in "\n\r\f\t":
            escaped.append(f"\\{code:x} ")
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def css_attribute_value(value: str) -> str:
    escaped: list[str] = []
    for char in value:
        code = ord(char)
        if code >= 0x80 or char in _CSS_PLAIN_CHARS:
            escaped.append(char)
        elif char in "\n\r\f\t":
            escaped.append(f"\\{code:x} ")
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def attribute_predicate(attr: str, value: str) -> str:
    return f'[{attr}="{css_attribute_value(value)}"]'


def id_selector(value: str) -> str:
    return f"#{css_escape(value)}"


def xpath_literal(value: str) -> str:
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    pieces = value.split("'")
    quoted = [f"'{piece}'" for piece in pieces]
    return "concat(" + ", \"'\", ".join(quoted) + ")"


def js_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def first_test_attribute(get_attribute: Callable[[str], str | None]) -> tuple[str, str] | None:
    for attr in TEST_ATTR_PRIORITY:
        value = get_attribute(attr)
        if value:
            return attr, value
    return None
