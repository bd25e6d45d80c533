from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from .models import PreviewEntry


@dataclass(frozen=True, slots=True)
class PingRequest:
    pass


@dataclass(frozen=True, slots=True)
class StartPickRequest:
    pass


@dataclass(frozen=True, slots=True)
class StopPickRequest:
    pass


@dataclass(frozen=True, slots=True)
class StartPreviewRequest:
    pass


@dataclass(frozen=True, slots=True)
class StopPreviewRequest:
    pass


@dataclass(frozen=True, slots=True)
class CopySnippetRequest:
    dialect: str
    locator: str | None = None


@dataclass(frozen=True, slots=True)
class CopyActionSnippetRequest:
    dialect: str
    action: str
    locator: str | None = None


@dataclass(frozen=True, slots=True)
class SelectorPreviewRequest:
    locator: str | None = None


Request = Union[
    PingRequest,
    StartPickRequest,
    StopPickRequest,
    StartPreviewRequest,
    StopPreviewRequest,
    CopySnippetRequest,
    CopyActionSnippetRequest,
    SelectorPreviewRequest,
]


@dataclass(frozen=True, slots=True)
class Ack:
    ok: bool

    def to_payload(self) -> dict[str, Any]:
        return {"ok": self.ok}


@dataclass(frozen=True, slots=True)
class SnippetResponse:
    snippet: str
    copied: bool = False

    def to_payload(self) -> dict[str, Any]:
        # "code" is the key existing extension pages read.
        return {"snippet": self.snippet, "code": self.snippet, "copied": self.copied}


@dataclass(frozen=True, slots=True)
class PreviewResponse:
    locator: str
    preview: tuple[PreviewEntry, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "selector": self.locator,
            "preview": [{"target": entry.dialect, "code": entry.snippet} for entry in self.preview],
        }


Response = Union[Ack, SnippetResponse, PreviewResponse]

_SIMPLE_REQUESTS: dict[str, Request] = {
    "QA_PING": PingRequest(),
    "QA_START_PICK_SELECTOR": StartPickRequest(),
    "QA_STOP_PICK_SELECTOR": StopPickRequest(),
    "QA_START_LIVE_PREVIEW": StartPreviewRequest(),
    "QA_STOP_LIVE_PREVIEW": StopPreviewRequest(),
}


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_request(payload: Mapping[str, Any] | None) -> Request | None:
    """Build a typed request from a wire message; unknown or malformed messages yield ``None``."""
    if not isinstance(payload, Mapping):
        return None
    message_type = str(payload.get("type") or "").strip()
    if message_type in _SIMPLE_REQUESTS:
        return _SIMPLE_REQUESTS[message_type]

    locator = _optional_text(payload.get("selector"))
    if message_type == "QA_COPY_SNIPPET":
        return CopySnippetRequest(dialect=str(payload.get("target") or ""), locator=locator)
    if message_type == "QA_COPY_ACTION_SNIPPET":
        return CopyActionSnippetRequest(
            dialect=str(payload.get("target") or ""),
            action=str(payload.get("action") or ""),
            locator=locator,
        )
    if message_type == "QA_SELECTOR_PREVIEW":
        return SelectorPreviewRequest(locator=locator)
    return None
