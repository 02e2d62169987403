"""
Run the assertion tools against a local page.

The snapshot here is built from CSS selectors; a real client gets refs from
its page snapshot tool instead.

Usage:
    pip install -e . && playwright install chromium
    python examples/assert_checkbox_page.py
"""

import asyncio
import logging

from playwright.async_api import async_playwright

from browser_assertions import (
    AssertToolsConfig,
    BrowserSession,
    MemoryTraceSink,
    PageSnapshot,
    ToolContext,
    ToolRegistry,
    Tracer,
    register_assert_tools,
)

HTML = """
<title>Test Page</title>
<input type="checkbox" id="checked-box" checked />
<input type="text" id="name" value="Ada" />
<p id="greeting">Hello World</p>
"""


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    registry = ToolRegistry()
    register_assert_tools(registry)
    sink = MemoryTraceSink()

    async with async_playwright() as p:
        browser = await p.chromium.launch()
        page = await browser.new_page()
        await page.set_content(HTML)

        snapshot = PageSnapshot.from_selectors(
            page,
            {"e2": "#checked-box", "e3": "#name", "e4": "#greeting"},
            text="- checkbox [checked] [ref=e2]\n- textbox [ref=e3]: Ada\n- paragraph [ref=e4]: Hello World",
        )
        ctx = ToolContext(
            BrowserSession.from_page(page, snapshot),
            config=AssertToolsConfig.from_env(),
            tracer=Tracer(run_id="example", sink=sink),
        )

        calls = [
            ("browser_assert_checked", {"element": "checked checkbox", "ref": "e2"}),
            ("browser_assert_have_value", {"element": "name field", "ref": "e3", "expected": "Ada"}),
            ("browser_assert_have_text", {"element": "greeting", "ref": "e4", "expected": "Hello"}),
            ("browser_assert_have_title", {"expected": "Test Page"}),
        ]
        for name, args in calls:
            result = await registry.call(name, args, ctx=ctx)
            print(result.render())
            print()

        await browser.close()

    print(f"{len(sink.events)} trace events recorded")


if __name__ == "__main__":
    asyncio.run(main())
