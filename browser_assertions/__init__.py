"""
Declarative browser assertion tools for automation clients.

    from browser_assertions import (
        BrowserSession, PageSnapshot, ToolContext, ToolRegistry, register_assert_tools,
    )

    registry = ToolRegistry()
    register_assert_tools(registry)

    snap = PageSnapshot.from_selectors(page, {"e2": "#checked-box"})
    ctx = ToolContext(BrowserSession.from_page(page, snap))
    result = await registry.call(
        "browser_assert_checked", {"element": "checked checkbox", "ref": "e2"}, ctx=ctx
    )
    print(result.render())
"""

from .config import AssertToolsConfig
from .context import BrowserSession, PageSnapshot, Tab
from .errors import (
    AssertionFailedError,
    NoOpenTabError,
    NoSnapshotError,
    RefNotFoundError,
    ToolError,
    UnknownToolError,
    UnsupportedCapabilityError,
)
from .models import ToolCallResult, ToolResult
from .tools import ASSERT_TOOLS, ToolContext, ToolRegistry, ToolSpec, register_assert_tools
from .tracing import JsonlTraceSink, MemoryTraceSink, TraceSink, Tracer

__version__ = "0.1.0"

__all__ = [
    "ASSERT_TOOLS",
    "AssertToolsConfig",
    "AssertionFailedError",
    "BrowserSession",
    "JsonlTraceSink",
    "MemoryTraceSink",
    "NoOpenTabError",
    "NoSnapshotError",
    "PageSnapshot",
    "RefNotFoundError",
    "Tab",
    "ToolCallResult",
    "ToolContext",
    "ToolError",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "TraceSink",
    "Tracer",
    "UnknownToolError",
    "UnsupportedCapabilityError",
    "register_assert_tools",
]
