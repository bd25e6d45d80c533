from locatorkit.dialect_catalog import ACTION_BACKENDS, PREVIEW_DIALECTS, list_actions, list_dialects
from locatorkit.html_tree import HtmlDocument
from locatorkit.locator_generator import synthesize
from locatorkit.snippet_formatter import (
    ACTION_TEMPLATES,
    SnippetOptions,
    build_selector_preview,
    format_action_snippet,
    format_snippet,
    format_strategy_snippet,
    render_snippet,
)


def _doc(body: str) -> HtmlDocument:
    return HtmlDocument.from_html(f"<html><head></head><body>{body}</body></html>")


def test_empty_locator_renders_nothing_for_every_dialect() -> None:
    for spec in list_dialects():
        assert format_snippet("", spec.key) == ""
        assert format_snippet(None, spec.key) == ""
        assert format_action_snippet("", spec.key, "hover") == ""


def test_every_backend_and_verb_pair_renders() -> None:
    assert len(ACTION_TEMPLATES) == len(ACTION_BACKENDS) * len(list_actions())
    for spec in list_dialects():
        for action in list_actions():
            snippet = format_action_snippet("#email", spec.key, action.key)
            assert snippet
            assert "'#email'" in snippet


def test_passive_snippets_per_family() -> None:
    assert format_snippet("#email", "css") == "#email"
    assert format_snippet("#email", "xpath") == "#email"
    assert format_snippet("#email", "playwright") == "await page.locator('#email').click();"
    assert format_snippet("#email", "cypress-ts") == "cy.get('#email').click();"
    assert format_snippet("#email", "selenium-js") == "await driver.findElement(By.css('#email')).click();"
    assert format_snippet("#email", "js") == "document.querySelector('#email')?.click();"
    assert format_snippet("#email", "unknown") == format_snippet("#email", "js")


def test_action_snippets_use_options_and_aliases() -> None:
    options = SnippetOptions(target_placeholder="#drop", long_press_ms=750)
    assert (
        format_action_snippet("#card", "playwright", "drag", options)
        == "await page.locator('#card').dragTo(page.locator('#drop'));"
    )
    assert format_action_snippet("#card", "cypress", "long-press", options) == (
        "cy.get('#card').trigger('mousedown');\ncy.wait(750);\ncy.get('#card').trigger('mouseup');"
    )
    assert format_action_snippet("#f", "playwright", "file-upload") == "await page.setInputFiles('#f', 'path/to/file');"
    assert format_action_snippet("#q", "cypress", "key-enter") == "cy.get('#q').type('{enter}');"
    assert format_action_snippet("#q", "cypress", "teleport") == "cy.get('#q').click();"


def test_locator_quotes_are_escaped_in_snippets() -> None:
    snippet = format_snippet("input[name='q']", "playwright")
    assert snippet == "await page.locator('input[name=\\'q\\']').click();"


def test_email_input_role_snippet_falls_back_to_structural() -> None:
    document = _doc('<input id="email" type="email">')
    element = document.query_one("input")
    locator = synthesize(element)
    assert locator == "#email"
    snippet = format_strategy_snippet(locator, "playwright-role", element)
    assert snippet == "await page.locator('#email').click();"


def test_semantic_strategies_use_element_metadata() -> None:
    document = _doc(
        '<label for="user">User name</label><input id="user">'
        '<button data-testid="submit">Send</button>'
    )
    user = document.query_one("#user")
    button = document.query_one("button")
    assert format_strategy_snippet("#user", "playwright-role", user) == (
        "await page.getByRole('textbox', { name: 'User name' }).click();"
    )
    assert format_strategy_snippet("#user", "playwright-label", user) == "await page.getByLabel('User name').fill('');"
    assert format_strategy_snippet("x", "playwright-testid", button) == "await page.getByTestId('submit').click();"
    assert format_strategy_snippet("#user", "xpath", user) == "//*[@id='user']"
    assert format_strategy_snippet("#user", "playwright-frame", user) == "await page.locator('#user').click();"


def test_frame_strategy_wraps_locator_in_frame_locator() -> None:
    document = _doc('<iframe title="checkout"></iframe>')
    child = document.attach_frame(document.query_one("iframe"), "<html><body><button>Pay</button></body></html>")
    button = child.query_one("button")
    locator = synthesize(button)
    assert format_strategy_snippet(locator, "playwright-frame", button) == (
        "await page.frameLocator('iframe[title=\"checkout\"]').locator('button').click();"
    )


def test_render_snippet_dispatches_on_action_and_element() -> None:
    document = _doc('<input id="email" aria-label="Email">')
    element = document.query_one("input")
    assert render_snippet("#email", "cypress", "check") == "cy.get('#email').check();"
    assert render_snippet("#email", "playwright-label", element=element) == "await page.getByLabel('Email').fill('');"
    assert render_snippet("#email", "playwright-label") == "await page.locator('#email').click();"


def test_formatting_is_pure() -> None:
    document = _doc('<button class="btn">A</button><button class="btn">B</button>')
    element = document.query_all("button")[1]
    before = document.root.outer_html()
    first = build_selector_preview(synthesize(element), element)
    second = build_selector_preview(synthesize(element), element)
    assert first == second
    assert document.root.outer_html() == before


def test_selector_preview_covers_requested_dialects() -> None:
    frame = build_selector_preview("#email")
    assert [entry.dialect for entry in frame.preview] == list(PREVIEW_DIALECTS)
    assert frame.snippet_for("css") == "#email"
    assert frame.snippet_for("missing") is None
    narrowed = build_selector_preview("#email", dialects=("cypress",))
    assert narrowed.to_payload() == {
        "selector": "#email",
        "preview": [{"target": "cypress", "code": "cy.get('#email').click();"}],
    }
    assert build_selector_preview(None).locator == ""
