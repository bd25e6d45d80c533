from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class ElementDescriptor:
    locator: str
    tag: str
    id: str
    classes: tuple[str, ...]
    name: str
    role: str
    accessible_name: str
    aria_label: str
    placeholder: str
    input_type: str
    test_id: str
    text: str
    outer_html: str
    frame: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "selector": self.locator,
            "tag": self.tag,
            "id": self.id,
            "classes": list(self.classes),
            "name": self.name,
            "role": self.role,
            "accessibleName": self.accessible_name,
            "ariaLabel": self.aria_label,
            "placeholder": self.placeholder,
            "type": self.input_type,
            "testId": self.test_id,
            "text": self.text,
            "outerHTML": self.outer_html,
            "frame": self.frame,
        }


@dataclass(frozen=True, slots=True)
class PreviewEntry:
    dialect: str
    snippet: str


@dataclass(frozen=True, slots=True)
class PreviewFrame:
    locator: str
    preview: tuple[PreviewEntry, ...] = field(default_factory=tuple)

    def snippet_for(self, dialect: str) -> str | None:
        for entry in self.preview:
            if entry.dialect == dialect:
                return entry.snippet
        return None

    def to_payload(self) -> dict[str, Any]:
        return {
            "selector": self.locator,
            "preview": [{"target": entry.dialect, "code": entry.snippet} for entry in self.preview],
        }


@dataclass(frozen=True, slots=True)
class PickResult:
    locator: str
    descriptor: ElementDescriptor | None

    def to_payload(self) -> dict[str, Any]:
        return {
            "selector": self.locator,
            "meta": self.descriptor.to_payload() if self.descriptor else None,
        }
