from .asserts import ASSERT_TOOLS, register_assert_tools
from .registry import ToolContext, ToolRegistry, ToolSpec

__all__ = [
    "ASSERT_TOOLS",
    "ToolContext",
    "ToolRegistry",
    "ToolSpec",
    "register_assert_tools",
]
