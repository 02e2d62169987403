"""
Trace-line generation: locator expressions and `expect(...)` statements.

The trace records the Playwright statement equivalent to each check, either
in JavaScript (as the Playwright MCP transcript shows it) or in Python.
"""

from __future__ import annotations

import json
import re
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from playwright.async_api import Locator

LocatorGenerator = Callable[["Locator", str], Awaitable[str]]

_DESCRIBE_ELEMENT_JS = """
(el) => ({
    testId: el.getAttribute('data-testid'),
    id: el.id || null,
    tag: el.tagName.toLowerCase(),
    role: el.getAttribute('role'),
    name: el.getAttribute('aria-label'),
    text: (el.textContent || '').trim(),
})
"""

# Bounds the describe step; a detached element would otherwise wait out
# the default action timeout.
DESCRIBE_TIMEOUT_MS = 2_000

_FORM_TAGS = {"input", "textarea", "select"}
_MAX_TEXT_LEN = 80
_CSS_IDENT = re.compile(r"^[A-Za-z_][\w-]*$")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def quote(text: str, language: str = "javascript") -> str:
    """Quote `text` as a string literal of the target language."""
    if language == "python":
        return json.dumps(text, ensure_ascii=False)
    escaped = (
        text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n").replace("\r", "\\r")
    )
    return f"'{escaped}'"


def matcher_name(matcher: str, language: str = "javascript") -> str:
    """`toHaveURL` -> `to_have_url` for Python; unchanged for JavaScript."""
    if language == "python":
        return _CAMEL_BOUNDARY.sub("_", matcher).lower()
    return matcher


def assert_comment(
    subject: str, matcher: str, expected: str | None = None, language: str = "javascript"
) -> str:
    prefix = "#" if language == "python" else "//"
    line = f"{prefix} Assert {subject} {matcher_name(matcher, language)}"
    if expected is not None:
        line += f' "{expected}"'
    return line


def expect_line(
    target: str, matcher: str, expected: str | None = None, language: str = "javascript"
) -> str:
    """
    One `expect` statement against `target` (`page` or `page.<locator>`).
    """
    args = "" if expected is None else quote(expected, language)
    stmt = f"await expect({target}).{matcher_name(matcher, language)}({args})"
    return stmt if language == "python" else stmt + ";"


def format_locator(info: dict[str, Any], language: str = "javascript") -> str:
    """
    Pick the most readable locator expression for a described element.

    Preference: test id, role with accessible name, visible text (not for form
    fields), element id, tag name.
    """
    py = language == "python"
    test_id = info.get("testId")
    role = info.get("role")
    name = info.get("name")
    text = info.get("text") or ""
    tag = info.get("tag") or "*"
    element_id = info.get("id")

    if test_id:
        fn = "get_by_test_id" if py else "getByTestId"
        return f"{fn}({quote(test_id, language)})"
    if role and name:
        if py:
            return f"get_by_role({quote(role, language)}, name={quote(name, language)})"
        return f"getByRole({quote(role, language)}, {{ name: {quote(name, language)} }})"
    if text and tag not in _FORM_TAGS and len(text) <= _MAX_TEXT_LEN and "\n" not in text:
        fn = "get_by_text" if py else "getByText"
        return f"{fn}({quote(text, language)})"
    if element_id and _CSS_IDENT.match(element_id):
        return f"locator({quote('#' + element_id, language)})"
    return f"locator({quote(tag, language)})"


def ref_locator(ref: str, language: str = "javascript") -> str:
    """Locator expression addressing a snapshot ref directly."""
    return f"locator({quote('aria-ref=' + ref, language)})"


async def generate_locator(locator: Locator, language: str = "javascript") -> str:
    """Describe a live element as a locator expression relative to `page`."""
    info = await locator.evaluate(_DESCRIBE_ELEMENT_JS, timeout=DESCRIBE_TIMEOUT_MS)
    return format_locator(info or {}, language)
