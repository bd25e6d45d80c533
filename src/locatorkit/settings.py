from __future__ import annotations

from dataclasses import asdict, dataclass, field
import json
from pathlib import Path
import tempfile

from .dialect_catalog import PREVIEW_DIALECTS, normalize_dialects
from .picker import DEFAULT_MARKER_CLASS, DEFAULT_OUTLINE
from .snippet_formatter import SnippetOptions

CONFIG_DIR = Path.home() / ".locatorkit"
CONFIG_PATH = CONFIG_DIR / "config.json"


@dataclass(slots=True)
class EngineSettings:
    outline_style: str = DEFAULT_OUTLINE
    picker_marker_class: str = DEFAULT_MARKER_CLASS
    frame_interval_ms: int = 16
    target_placeholder: str = "TARGET_SELECTOR"
    file_placeholder: str = "path/to/file"
    option_placeholder: str = "OPTION_VALUE"
    long_press_ms: int = 1000
    preview_dialects: list[str] = field(default_factory=lambda: list(PREVIEW_DIALECTS))
    copy_on_pick: bool = True

    def snippet_options(self) -> SnippetOptions:
        return SnippetOptions(
            target_placeholder=self.target_placeholder,
            file_placeholder=self.file_placeholder,
            option_placeholder=self.option_placeholder,
            long_press_ms=self.long_press_ms,
        )


def _positive_int(value: object, default: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _text(value: object, default: str) -> str:
    text = str(value or "").strip()
    return text or default


def _flag(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def load_settings(config_path: Path | None = None) -> EngineSettings:
    path = config_path or CONFIG_PATH
    defaults = EngineSettings()
    if not path.exists() or not path.is_file():
        return defaults

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, TypeError, UnicodeDecodeError):
        return defaults

    if not isinstance(payload, dict):
        return defaults

    raw_dialects = payload.get("preview_dialects")
    dialects = normalize_dialects(raw_dialects) if isinstance(raw_dialects, list) else []

    return EngineSettings(
        outline_style=_text(payload.get("outline_style"), defaults.outline_style),
        picker_marker_class=_text(payload.get("picker_marker_class"), defaults.picker_marker_class),
        frame_interval_ms=_positive_int(payload.get("frame_interval_ms"), defaults.frame_interval_ms),
        target_placeholder=_text(payload.get("target_placeholder"), defaults.target_placeholder),
        file_placeholder=_text(payload.get("file_placeholder"), defaults.file_placeholder),
        option_placeholder=_text(payload.get("option_placeholder"), defaults.option_placeholder),
        long_press_ms=_positive_int(payload.get("long_press_ms"), defaults.long_press_ms),
        preview_dialects=dialects or list(defaults.preview_dialects),
        copy_on_pick=_flag(payload.get("copy_on_pick"), defaults.copy_on_pick),
    )


def save_settings(settings: EngineSettings, config_path: Path | None = None) -> tuple[bool, str | None]:
    path = config_path or CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, f"Could not create config folder: {exc}"

    payload = json.dumps(asdict(settings), ensure_ascii=True, indent=2, sort_keys=True)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
            handle.flush()
            temp_path = Path(handle.name)

        if temp_path is None:
            return False, "Could not create temporary config file."
        temp_path.replace(path)
    except OSError as exc:
        if temp_path and temp_path.exists():
            temp_path.unlink(missing_ok=True)
        return False, f"Could not write settings: {exc}"

    return True, None
