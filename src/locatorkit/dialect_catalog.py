from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

DialectFamily = Literal[
    "raw-css",
    "playwright",
    "playwright-semantic",
    "xpath",
    "cypress",
    "selenium",
    "browser-events",
]
ActionBackend = Literal["playwright", "browser-events", "cypress", "selenium"]

DEFAULT_DIALECT = "js"
DEFAULT_ACTION = "click"


@dataclass(frozen=True, slots=True)
class DialectSpec:
    key: str
    label: str
    family: DialectFamily
    action_backend: ActionBackend
    semantic: bool = False
    offers_actions: bool = False


@dataclass(frozen=True, slots=True)
class ActionSpec:
    key: str
    label: str
    needs_target: bool = False
    aliases: tuple[str, ...] = ()


DIALECT_CATALOG: tuple[DialectSpec, ...] = (
    DialectSpec(key="css", label="CSS selector", family="raw-css", action_backend="browser-events"),
    DialectSpec(
        key="playwright",
        label="Playwright",
        family="playwright",
        action_backend="playwright",
        offers_actions=True,
    ),
    DialectSpec(
        key="playwright-ts",
        label="Playwright (TypeScript)",
        family="playwright",
        action_backend="playwright",
        offers_actions=True,
    ),
    DialectSpec(
        key="playwright-role",
        label="Playwright getByRole",
        family="playwright-semantic",
        action_backend="playwright",
        semantic=True,
    ),
    DialectSpec(
        key="playwright-label",
        label="Playwright getByLabel",
        family="playwright-semantic",
        action_backend="playwright",
        semantic=True,
    ),
    DialectSpec(
        key="playwright-testid",
        label="Playwright getByTestId",
        family="playwright-semantic",
        action_backend="playwright",
        semantic=True,
    ),
    DialectSpec(
        key="playwright-frame",
        label="Playwright frameLocator",
        family="playwright-semantic",
        action_backend="playwright",
        semantic=True,
    ),
    DialectSpec(key="xpath", label="XPath", family="xpath", action_backend="browser-events", semantic=True),
    DialectSpec(key="cypress", label="Cypress", family="cypress", action_backend="cypress", offers_actions=True),
    DialectSpec(
        key="cypress-ts",
        label="Cypress (TypeScript)",
        family="cypress",
        action_backend="cypress",
        offers_actions=True,
    ),
    DialectSpec(
        key="selenium-js",
        label="Selenium (JavaScript)",
        family="selenium",
        action_backend="selenium",
        offers_actions=True,
    ),
    DialectSpec(
        key="selenium-ts",
        label="Selenium (TypeScript)",
        family="selenium",
        action_backend="selenium",
        offers_actions=True,
    ),
    DialectSpec(
        key="js",
        label="Vanilla JS",
        family="browser-events",
        action_backend="browser-events",
        offers_actions=True,
    ),
)

ACTION_CATALOG: tuple[ActionSpec, ...] = (
    ActionSpec(key="click", label="Click"),
    ActionSpec(key="double-click", label="Double click", aliases=("double",)),
    ActionSpec(key="triple-click", label="Triple click", aliases=("triple",)),
    ActionSpec(key="hover", label="Hover"),
    ActionSpec(key="right-click", label="Right click", aliases=("right",)),
    ActionSpec(key="long-press", label="Long press"),
    ActionSpec(key="swipe", label="Swipe", needs_target=True),
    ActionSpec(key="drag", label="Drag & drop", needs_target=True),
    ActionSpec(key="file-upload", label="File upload"),
    ActionSpec(key="type", label="Type"),
    ActionSpec(key="select-option", label="Select option", aliases=("select",)),
    ActionSpec(key="check", label="Check"),
    ActionSpec(key="uncheck", label="Uncheck"),
    ActionSpec(key="press-enter", label="Press Enter", aliases=("key-enter",)),
    ActionSpec(key="press-escape", label="Press Escape", aliases=("key-escape",)),
    ActionSpec(key="press-tab", label="Press Tab", aliases=("key-tab",)),
    ActionSpec(key="scroll-into-view", label="Scroll into view", aliases=("scroll",)),
)

ACTION_BACKENDS: tuple[ActionBackend, ...] = ("playwright", "browser-events", "cypress", "selenium")

PREVIEW_DIALECTS: tuple[str, ...] = tuple(spec.key for spec in DIALECT_CATALOG)

_DIALECT_BY_KEY: dict[str, DialectSpec] = {spec.key: spec for spec in DIALECT_CATALOG}
_ACTION_BY_KEY: dict[str, ActionSpec] = {spec.key: spec for spec in ACTION_CATALOG}
_ACTION_ALIASES: dict[str, str] = {alias: spec.key for spec in ACTION_CATALOG for alias in spec.aliases}


def list_dialects() -> tuple[DialectSpec, ...]:
    return DIALECT_CATALOG


def list_actions() -> tuple[ActionSpec, ...]:
    return ACTION_CATALOG


def get_dialect_spec(dialect: str) -> DialectSpec | None:
    return _DIALECT_BY_KEY.get(str(dialect or "").strip().lower())


def resolve_dialect(dialect: str | None) -> DialectSpec:
    """Catalog entry for ``dialect``; unknown keys fall back to vanilla JS."""
    return get_dialect_spec(dialect or "") or _DIALECT_BY_KEY[DEFAULT_DIALECT]


def resolve_action(action: str | None) -> ActionSpec:
    """Catalog entry for a verb key or legacy alias; unknown verbs fall back to click."""
    key = str(action or "").strip().lower()
    key = _ACTION_ALIASES.get(key, key)
    return _ACTION_BY_KEY.get(key) or _ACTION_BY_KEY[DEFAULT_ACTION]


def action_dialects() -> tuple[DialectSpec, ...]:
    return tuple(spec for spec in DIALECT_CATALOG if spec.offers_actions)


def dialect_label(dialect: str) -> str:
    spec = get_dialect_spec(dialect)
    if spec:
        return spec.label
    return dialect


def normalize_dialects(dialects: Iterable[str]) -> list[str]:
    normalized: list[str] = []
    for key in dialects:
        spec = get_dialect_spec(key)
        if not spec:
            continue
        if spec.key in normalized:
            continue
        normalized.append(spec.key)
    return normalized
