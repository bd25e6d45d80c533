from locatorkit.selector_rules import (
    attribute_predicate,
    css_escape,
    first_test_attribute,
    id_selector,
    js_string,
    normalize_space,
    xpath_literal,
)


def test_css_escape_handles_leading_digit_and_punctuation() -> None:
    assert css_escape("email") == "email"
    assert css_escape("1col") == "\\31 col"
    assert css_escape("-2x") == "-\\32 x"
    assert css_escape("a.b:c") == "a\\.b\\:c"
    assert css_escape("has space") == "has\\ space"
    assert css_escape("-") == "\\-"
    assert css_escape("çerez") == "çerez"


def test_id_selector_escapes_value() -> None:
    assert id_selector("submitBtn") == "#submitBtn"
    assert id_selector("form:email") == "#form\\:email"


def test_attribute_predicate_quotes_and_escapes() -> None:
    assert attribute_predicate("name", "email") == '[name="email"]'
    assert attribute_predicate("aria-label", 'Say "hi"') == '[aria-label="Say\\ \\"hi\\""]'


def test_xpath_literal_picks_safe_quotes() -> None:
    assert xpath_literal("main") == "'main'"
    assert xpath_literal("it's") == '"it\'s"'
    assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"


def test_js_string_escapes_quotes_and_newlines() -> None:
    assert js_string("#email") == "'#email'"
    assert js_string("a'b") == "'a\\'b'"
    assert js_string("line\nnext") == "'line\\nnext'"
    assert js_string("back\\slash") == "'back\\\\slash'"


def test_first_test_attribute_uses_priority_order() -> None:
    attrs = {"data-cy": "cy-save", "data-test": "save"}
    assert first_test_attribute(attrs.get) == ("data-test", "save")
    assert first_test_attribute({"data-qaid": "x"}.get) == ("data-qaid", "x")
    assert first_test_attribute({}.get) is None


def test_normalize_space_collapses_and_limits() -> None:
    assert normalize_space("  Save \n  changes ") == "Save changes"
    assert normalize_space(None) == ""
    assert normalize_space("abcdef", limit=3) == "abc"
