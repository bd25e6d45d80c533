from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys
from typing import Sequence

from .dialect_catalog import DEFAULT_DIALECT, list_actions, list_dialects
from .dom import DomElement
from .dom_extractor import describe
from .html_tree import HtmlDocument
from .locator_generator import synthesize
from .log_utils import build_logger
from .settings import EngineSettings, load_settings
from .snippet_formatter import build_selector_preview, render_snippet

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locatorkit",
        description="Synthesize a CSS locator for one element and render it as automation snippets.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--html", type=Path, help="Local HTML file to load.")
    source.add_argument("--url", help="Page to open in headless Chromium (Playwright).")
    parser.add_argument("--select", required=True, help="CSS selector choosing the element to inspect.")
    parser.add_argument(
        "--dialect",
        default=DEFAULT_DIALECT,
        help="Snippet dialect: " + ", ".join(spec.key for spec in list_dialects()),
    )
    parser.add_argument(
        "--action",
        default=None,
        help="Action verb: " + ", ".join(spec.key for spec in list_actions()),
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--preview", action="store_true", help="Print snippets for every preview dialect as JSON.")
    output.add_argument("--describe", action="store_true", help="Print the element descriptor as JSON.")
    return parser


def _render(element: DomElement | None, args: argparse.Namespace, settings: EngineSettings) -> tuple[int, str]:
    if element is None:
        return EXIT_NOT_FOUND, f"No element matches {args.select!r}."
    locator = synthesize(element)
    if not locator:
        return EXIT_NOT_FOUND, f"Could not build a locator for {args.select!r}."

    options = settings.snippet_options()
    if args.describe:
        descriptor = describe(element, locator)
        return EXIT_OK, json.dumps(descriptor.to_payload() if descriptor else None, indent=2)
    if args.preview:
        frame = build_selector_preview(locator, element, settings.preview_dialects, options)
        return EXIT_OK, json.dumps(frame.to_payload(), indent=2)
    return EXIT_OK, render_snippet(locator, args.dialect, args.action, element, options)


def _run_html(path: Path, args: argparse.Namespace, settings: EngineSettings) -> tuple[int, str]:
    try:
        markup = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return EXIT_USAGE, f"Could not read {path}: {exc}"
    document = HtmlDocument.from_html(markup)
    return _render(document.query_one(args.select), args, settings)


def _run_url(url: str, args: argparse.Namespace, settings: EngineSettings) -> tuple[int, str]:
    try:
        from playwright.sync_api import Error as PlaywrightError, sync_playwright
        from .playwright_tree import PlaywrightDocument, is_missing_browser_error
    except ModuleNotFoundError as exc:
        if exc.name == "playwright":
            raise SystemExit(
                "playwright is not installed in this interpreter. "
                "Run `pip install playwright` and `playwright install chromium`."
            ) from exc
        raise

    with sync_playwright() as playwright:
        try:
            browser = playwright.chromium.launch(headless=True)
        except PlaywrightError as exc:
            if is_missing_browser_error(exc):
                return EXIT_USAGE, "Chromium is not installed for Playwright. Run `playwright install chromium`."
            raise
        try:
            page = browser.new_page()
            try:
                page.goto(url, wait_until="domcontentloaded")
            except PlaywrightError as exc:
                return EXIT_USAGE, f"Could not open {url}: {exc}"
            document = PlaywrightDocument.for_page(page)
            return _render(document.query_one(args.select), args, settings)
        finally:
            browser.close()


def main(argv: Sequence[str] | None = None) -> int:
    if sys.version_info < (3, 11):
        raise SystemExit(
            "locatorkit requires Python 3.11+. "
            f"Current interpreter: {sys.executable} (Python {sys.version.split()[0]})"
        )
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    logger = build_logger()
    settings = load_settings()
    if args.html is not None:
        code, text = _run_html(args.html, args, settings)
    else:
        code, text = _run_url(args.url, args, settings)

    stream = sys.stdout if code == EXIT_OK else sys.stderr
    print(text, file=stream)
    logger.info("CLI finished with exit code %s", code)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
