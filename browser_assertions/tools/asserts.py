"""
Assertion tools: checked, visible, contain text, have text, have value,
have title and have URL.

Each handler resolves its target (an element by snapshot ref, or the whole
page), records the equivalent Playwright statement, and returns the live check
as a deferred action. The trace is produced before the check runs, so it is
identical whether the check passes or fails.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import expect

from ..codegen import assert_comment, expect_line
from ..errors import AssertionFailedError
from ..models import (
    ContainTextInput,
    ElementAssertInput,
    HaveTextInput,
    HaveTitleInput,
    HaveURLInput,
    HaveValueInput,
    ToolResult,
)
from .registry import ToolContext, ToolRegistry, ToolSpec

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page


async def _element_trace(
    ctx: ToolContext,
    locator: Locator,
    params: ElementAssertInput,
    matcher: str,
    expected: str | None = None,
) -> list[str]:
    target = f"page.{await ctx.generate_locator(locator, params.ref)}"
    return [
        assert_comment(params.element, matcher, expected, ctx.language),
        expect_line(target, matcher, expected, ctx.language),
    ]


def _page_trace(ctx: ToolContext, matcher: str, expected: str) -> list[str]:
    return [
        assert_comment("page", matcher, expected, ctx.language),
        expect_line("page", matcher, expected, ctx.language),
    ]


# ========== Live checks ==========


async def check_checked(locator: Locator, element: str) -> None:
    try:
        await expect(locator).to_be_checked()
    except (AssertionError, PlaywrightError) as e:
        raise AssertionFailedError(
            f"Expected element {element} to be checked, but it was not. Error: {e}",
            expected="checked",
        ) from e


async def check_visible(locator: Locator, element: str) -> None:
    try:
        await expect(locator).to_be_visible()
    except (AssertionError, PlaywrightError) as e:
        raise AssertionFailedError(
            f"Expected element {element} to be visible, but it was not. Error: {e}",
            expected="visible",
        ) from e


async def check_contain_text(locator: Locator, expected: str) -> None:
    actual = await locator.text_content()
    # Empty or missing text never satisfies the check, even for "".
    if not actual or expected not in actual:
        raise AssertionFailedError(
            f'Expected element to contain text "{expected}", but got "{actual}"',
            expected=expected,
            actual=actual,
        )


async def check_have_text(locator: Locator, expected: str) -> None:
    actual = await locator.text_content()
    if actual != expected:
        raise AssertionFailedError(
            f'Expected element to have text "{expected}", but got "{actual}"',
            expected=expected,
            actual=actual,
        )


async def check_have_value(locator: Locator, expected: str) -> None:
    actual = await locator.input_value()
    if actual != expected:
        raise AssertionFailedError(
            f'Expected element to have value "{expected}", but got "{actual}"',
            expected=expected,
            actual=actual,
        )


async def check_have_title(page: Page, expected: str) -> None:
    actual = await page.title()
    if actual != expected:
        raise AssertionFailedError(
            f'Expected page title to be "{expected}", but got "{actual}"',
            expected=expected,
            actual=actual,
        )


async def check_have_url(page: Page, expected: str) -> None:
    actual = page.url
    if actual != expected:
        raise AssertionFailedError(
            f'Expected page URL to be "{expected}", but got "{actual}"',
            expected=expected,
            actual=actual,
        )


# ========== Handlers ==========


def _resolve(ctx: ToolContext, params: ElementAssertInput) -> Locator:
    tab = ctx.current_tab_or_die()
    return tab.snapshot_or_die().ref_locator(params.element, params.ref)


async def assert_checked(ctx: ToolContext, params: ElementAssertInput) -> ToolResult:
    locator = _resolve(ctx, params)
    code = await _element_trace(ctx, locator, params, "toBeChecked")
    return ToolResult(code=code, action=partial(check_checked, locator, params.element))


async def assert_visible(ctx: ToolContext, params: ElementAssertInput) -> ToolResult:
    locator = _resolve(ctx, params)
    code = await _element_trace(ctx, locator, params, "toBeVisible")
    return ToolResult(code=code, action=partial(check_visible, locator, params.element))


async def assert_contain_text(ctx: ToolContext, params: ContainTextInput) -> ToolResult:
    locator = _resolve(ctx, params)
    code = await _element_trace(ctx, locator, params, "toContainText", params.expected)
    return ToolResult(code=code, action=partial(check_contain_text, locator, params.expected))


async def assert_have_text(ctx: ToolContext, params: HaveTextInput) -> ToolResult:
    locator = _resolve(ctx, params)
    code = await _element_trace(ctx, locator, params, "toHaveText", params.expected)
    return ToolResult(code=code, action=partial(check_have_text, locator, params.expected))


async def assert_have_value(ctx: ToolContext, params: HaveValueInput) -> ToolResult:
    locator = _resolve(ctx, params)
    code = await _element_trace(ctx, locator, params, "toHaveValue", params.expected)
    return ToolResult(code=code, action=partial(check_have_value, locator, params.expected))


async def assert_have_title(ctx: ToolContext, params: HaveTitleInput) -> ToolResult:
    tab = ctx.current_tab_or_die()
    code = _page_trace(ctx, "toHaveTitle", params.expected)
    return ToolResult(code=code, action=partial(check_have_title, tab.page, params.expected))


async def assert_have_url(ctx: ToolContext, params: HaveURLInput) -> ToolResult:
    tab = ctx.current_tab_or_die()
    code = _page_trace(ctx, "toHaveURL", params.expected)
    return ToolResult(code=code, action=partial(check_have_url, tab.page, params.expected))


ASSERT_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="browser_assert_checked",
        title="Assert checked",
        description="Assert that an element is checked or unchecked",
        input_model=ElementAssertInput,
        handler=assert_checked,
    ),
    ToolSpec(
        name="browser_assert_visible",
        title="Assert visible",
        description="Assert that an element is visible",
        input_model=ElementAssertInput,
        handler=assert_visible,
    ),
    ToolSpec(
        name="browser_assert_contain_text",
        title="Assert contain text",
        description="Assert that an element contains specific text",
        input_model=ContainTextInput,
        handler=assert_contain_text,
    ),
    ToolSpec(
        name="browser_assert_have_text",
        title="Assert have text",
        description="Assert that an element has exact text",
        input_model=HaveTextInput,
        handler=assert_have_text,
    ),
    ToolSpec(
        name="browser_assert_have_value",
        title="Assert have value",
        description="Assert that an input element has specific value",
        input_model=HaveValueInput,
        handler=assert_have_value,
    ),
    ToolSpec(
        name="browser_assert_have_title",
        title="Assert have title",
        description="Assert that the page has specific title",
        input_model=HaveTitleInput,
        handler=assert_have_title,
    ),
    ToolSpec(
        name="browser_assert_have_url",
        title="Assert have URL",
        description="Assert that the page has specific URL",
        input_model=HaveURLInput,
        handler=assert_have_url,
    ),
)


def register_assert_tools(
    registry: ToolRegistry, capabilities: frozenset[str] | set[str] | None = None
) -> list[ToolSpec]:
    """
    Register the assertion tools whose capability is enabled.

    Args:
        registry: target registry
        capabilities: enabled capability tags; None registers every tool

    Returns:
        The specs that were registered.
    """
    registered = []
    for spec in ASSERT_TOOLS:
        if capabilities is not None and spec.capability not in capabilities:
            continue
        registered.append(registry.register(spec))
    return registered
