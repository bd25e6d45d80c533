"""Render locators as automation snippets for every supported dialect.

Formatting is pure text work: identical inputs always yield identical output
and the DOM is only read (never mutated) when a semantic dialect recomputes
its locator from the live element.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import Template
from typing import Callable, Iterable

from .dialect_catalog import (
    ACTION_BACKENDS,
    ACTION_CATALOG,
    PREVIEW_DIALECTS,
    ActionBackend,
    DialectSpec,
    resolve_action,
    resolve_dialect,
)
from .dom import DomElement, is_element
from .dom_extractor import accessible_name, frame_locator, infer_role, resolve_test_id
from .locator_generator import absolute_path
from .models import PreviewEntry, PreviewFrame
from .selector_rules import js_string


@dataclass(frozen=True, slots=True)
class SnippetOptions:
    target_placeholder: str = "TARGET_SELECTOR"
    file_placeholder: str = "path/to/file"
    option_placeholder: str = "OPTION_VALUE"
    long_press_ms: int = 1000


DEFAULT_OPTIONS = SnippetOptions()

_PLAYWRIGHT_TEMPLATES = {
    "click": "await page.locator($loc).click();",
    "double-click": "await page.locator($loc).dblclick();",
    "triple-click": "await page.locator($loc).click({ clickCount: 3 });",
    "hover": "await page.locator($loc).hover();",
    "right-click": "await page.locator($loc).click({ button: 'right' });",
    "long-press": "await page.locator($loc).click({ delay: $delay });",
    "swipe": "await page.locator($loc).dragTo(page.locator($target));",
    "drag": "await page.locator($loc).dragTo(page.locator($target));",
    "file-upload": "await page.setInputFiles($loc, $file);",
    "type": "await page.locator($loc).fill('');",
    "select-option": "await page.locator($loc).selectOption('');",
    "check": "await page.locator($loc).check();",
    "uncheck": "await page.locator($loc).uncheck();",
    "press-enter": "await page.locator($loc).press('Enter');",
    "press-escape": "await page.locator($loc).press('Escape');",
    "press-tab": "await page.locator($loc).press('Tab');",
    "scroll-into-view": "await page.locator($loc).scrollIntoViewIfNeeded();",
}

_CYPRESS_TEMPLATES = {
    "click": "cy.get($loc).click();",
    "double-click": "cy.get($loc).dblclick();",
    "triple-click": "cy.get($loc).click().click().click();",
    "hover": "cy.get($loc).trigger('mouseover');",
    "right-click": "cy.get($loc).rightclick();",
    "long-press": "cy.get($loc).trigger('mousedown');\ncy.wait($delay);\ncy.get($loc).trigger('mouseup');",
    "swipe": "cy.get($loc).trigger('pointerdown');\ncy.get($target).trigger('pointermove').trigger('pointerup');",
    "drag": "cy.get($loc).trigger('mousedown');\ncy.get($target).trigger('mousemove').trigger('mouseup');",
    "file-upload": "cy.get($loc).selectFile($file);",
    "type": "cy.get($loc).type('');",
    "select-option": "cy.get($loc).select('');",
    "check": "cy.get($loc).check();",
    "uncheck": "cy.get($loc).uncheck();",
    "press-enter": "cy.get($loc).type('{enter}');",
    "press-escape": "cy.get($loc).type('{esc}');",
    "press-tab": "cy.get($loc).type('{tab}');",
    "scroll-into-view": "cy.get($loc).scrollIntoView();",
}

_SELENIUM_FIND = "await driver.findElement(By.css($loc))"
_SELENIUM_BIND = "const el = " + _SELENIUM_FIND + ";\n"
_SELENIUM_TEMPLATES = {
    "click": _SELENIUM_FIND + ".click();",
    "double-click": _SELENIUM_BIND + "await driver.actions().doubleClick(el).perform();",
    "triple-click": _SELENIUM_BIND + "await el.click();\nawait el.click();\nawait el.click();",
    "hover": _SELENIUM_BIND + "await driver.actions().move({ origin: el }).perform();",
    "right-click": _SELENIUM_BIND + "await driver.actions().contextClick(el).perform();",
    "long-press": _SELENIUM_BIND + "await driver.actions().clickAndHold(el).pause($delay).release().perform();",
    "swipe": (
        _SELENIUM_BIND
        + "const target = await driver.findElement(By.css($target));\n"
        + "await driver.actions().dragAndDrop(el, target).perform();"
    ),
    "drag": (
        _SELENIUM_BIND
        + "const target = await driver.findElement(By.css($target));\n"
        + "await driver.actions().dragAndDrop(el, target).perform();"
    ),
    "file-upload": _SELENIUM_FIND + ".sendKeys($file);",
    "type": _SELENIUM_FIND + ".sendKeys('');",
    "select-option": _SELENIUM_FIND + ".sendKeys($option);",
    "check": _SELENIUM_FIND + ".click();",
    "uncheck": _SELENIUM_FIND + ".click();",
    "press-enter": _SELENIUM_FIND + ".sendKeys(Key.ENTER);",
    "press-escape": _SELENIUM_FIND + ".sendKeys(Key.ESCAPE);",
    "press-tab": _SELENIUM_FIND + ".sendKeys(Key.TAB);",
    "scroll-into-view": (
        _SELENIUM_BIND + "await driver.executeScript('arguments[0].scrollIntoView({block: \"center\"});', el);"
    ),
}

_QUERY = "document.querySelector($loc)"
_QUERY_BIND = "const el = " + _QUERY + ";\n"
_BROWSER_EVENT_TEMPLATES = {
    "click": _QUERY + "?.click();",
    "double-click": _QUERY + "?.dispatchEvent(new MouseEvent('dblclick', { bubbles: true }));",
    "triple-click": _QUERY_BIND + "if (el) { el.click(); el.click(); el.click(); }",
    "hover": _QUERY + "?.dispatchEvent(new MouseEvent('mouseover', { bubbles: true }));",
    "right-click": _QUERY + "?.dispatchEvent(new MouseEvent('contextmenu', { bubbles: true }));",
    "long-press": (
        _QUERY_BIND
        + "if (el) { el.dispatchEvent(new MouseEvent('mousedown', { bubbles: true }));\n"
        + "setTimeout(() => el.dispatchEvent(new MouseEvent('mouseup', { bubbles: true })), $delay); }"
    ),
    "swipe": _QUERY_BIND + "if (el) { el.dispatchEvent(new PointerEvent('pointerdown', { bubbles: true })); }",
    "drag": _QUERY_BIND + "if (el) { el.dispatchEvent(new DragEvent('dragstart', { bubbles: true })); }",
    "file-upload": _QUERY + "?.dispatchEvent(new Event('change', { bubbles: true }));",
    "type": (
        _QUERY_BIND
        + "if (el) { el.focus(); el.value = ''; el.dispatchEvent(new Event('input', { bubbles: true })); }"
    ),
    "select-option": (
        _QUERY_BIND + "if (el) { el.value = ''; el.dispatchEvent(new Event('change', { bubbles: true })); }"
    ),
    "check": _QUERY_BIND + "if (el) { el.checked = true; el.dispatchEvent(new Event('change', { bubbles: true })); }",
    "uncheck": (
        _QUERY_BIND + "if (el) { el.checked = false; el.dispatchEvent(new Event('change', { bubbles: true })); }"
    ),
    "press-enter": _QUERY + "?.dispatchEvent(new KeyboardEvent('keydown', { key: 'Enter', bubbles: true }));",
    "press-escape": _QUERY + "?.dispatchEvent(new KeyboardEvent('keydown', { key: 'Escape', bubbles: true }));",
    "press-tab": _QUERY + "?.dispatchEvent(new KeyboardEvent('keydown', { key: 'Tab', bubbles: true }));",
    "scroll-into-view": _QUERY + "?.scrollIntoView({ behavior: 'smooth', block: 'center' });",
}

_TEMPLATES_BY_BACKEND: dict[ActionBackend, dict[str, str]] = {
    "playwright": _PLAYWRIGHT_TEMPLATES,
    "browser-events": _BROWSER_EVENT_TEMPLATES,
    "cypress": _CYPRESS_TEMPLATES,
    "selenium": _SELENIUM_TEMPLATES,
}

ACTION_TEMPLATES: dict[tuple[ActionBackend, str], Template] = {
    (backend, spec.key): Template(_TEMPLATES_BY_BACKEND[backend][spec.key])
    for backend in ACTION_BACKENDS
    for spec in ACTION_CATALOG
}

_PASSTHROUGH_FAMILIES = frozenset({"raw-css", "xpath"})


def _render(template: Template, locator: str, options: SnippetOptions) -> str:
    return template.substitute(
        loc=js_string(locator),
        target=js_string(options.target_placeholder),
        file=js_string(options.file_placeholder),
        option=js_string(options.option_placeholder),
        delay=str(int(options.long_press_ms)),
    )


def format_snippet(locator: str | None, dialect: str | None, options: SnippetOptions | None = None) -> str:
    """Passive form: a neutral click snippet for the dialect's family."""
    if not locator:
        return ""
    spec = resolve_dialect(dialect)
    if spec.family in _PASSTHROUGH_FAMILIES:
        return locator
    return _render(ACTION_TEMPLATES[(spec.action_backend, "click")], locator, options or DEFAULT_OPTIONS)


def format_action_snippet(
    locator: str | None,
    dialect: str | None,
    action: str | None,
    options: SnippetOptions | None = None,
) -> str:
    if not locator:
        return ""
    spec = resolve_dialect(dialect)
    verb = resolve_action(action)
    return _render(ACTION_TEMPLATES[(spec.action_backend, verb.key)], locator, options or DEFAULT_OPTIONS)


def _role_snippet(locator: str, element: DomElement) -> str | None:
    role = infer_role(element)
    name = accessible_name(element)
    if not role or not name:
        return None
    return f"await page.getByRole({js_string(role)}, {{ name: {js_string(name)} }}).click();"


def _label_snippet(locator: str, element: DomElement) -> str | None:
    name = accessible_name(element)
    if not name:
        return None
    return f"await page.getByLabel({js_string(name)}).fill('');"


def _test_id_snippet(locator: str, element: DomElement) -> str | None:
    value = resolve_test_id(element)
    if not value:
        return None
    return f"await page.getByTestId({js_string(value)}).click();"


def _frame_snippet(locator: str, element: DomElement) -> str | None:
    frame = frame_locator(element)
    if not frame:
        return None
    return f"await page.frameLocator({js_string(frame)}).locator({js_string(locator)}).click();"


def _xpath_snippet(locator: str, element: DomElement) -> str | None:
    return absolute_path(element) or None


_SEMANTIC_BUILDERS: dict[str, Callable[[str, DomElement], str | None]] = {
    "playwright-role": _role_snippet,
    "playwright-label": _label_snippet,
    "playwright-testid": _test_id_snippet,
    "playwright-frame": _frame_snippet,
    "xpath": _xpath_snippet,
}


def format_strategy_snippet(
    locator: str | None,
    dialect: str | None,
    element: DomElement | None,
    options: SnippetOptions | None = None,
) -> str:
    """Strategy form: semantic dialects recompute their locator from ``element``.

    When the semantic value is missing the structural snippet of the dialect's
    family is returned instead.
    """
    if not locator:
        return ""
    spec: DialectSpec = resolve_dialect(dialect)
    builder = _SEMANTIC_BUILDERS.get(spec.key)
    if builder is not None and is_element(element):
        semantic = builder(locator, element)
        if semantic:
            return semantic
    return format_snippet(locator, spec.key, options)


def render_snippet(
    locator: str | None,
    dialect: str | None,
    action: str | None = None,
    element: DomElement | None = None,
    options: SnippetOptions | None = None,
) -> str:
    if action:
        return format_action_snippet(locator, dialect, action, options)
    if element is not None:
        return format_strategy_snippet(locator, dialect, element, options)
    return format_snippet(locator, dialect, options)


def build_selector_preview(
    locator: str | None,
    element: DomElement | None = None,
    dialects: Iterable[str] = PREVIEW_DIALECTS,
    options: SnippetOptions | None = None,
) -> PreviewFrame:
    text = locator or ""
    entries = tuple(
        PreviewEntry(dialect=dialect, snippet=format_strategy_snippet(text, dialect, element, options))
        for dialect in dialects
    )
    return PreviewFrame(locator=text, preview=entries)
