"""
Error types raised by the assertion tools.

Precondition errors (missing tab, snapshot or ref) come from the collaborating
runtime and are surfaced unchanged. Only assertion failures are wrapped.
"""

from __future__ import annotations

from typing import Any


class ToolError(RuntimeError):
    """Base error carrying a machine-readable `error` code."""

    error = "tool_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RefNotFoundError(ToolError):
    error = "ref_not_found"

    def __init__(self, ref: str) -> None:
        super().__init__(
            f"Ref {ref} not found in the current page snapshot. Try capturing new snapshot."
        )
        self.ref = ref


class NoOpenTabError(ToolError):
    error = "no_open_tab"

    def __init__(self) -> None:
        super().__init__(
            'No open pages available. Use the "browser_navigate" tool to navigate to a page first.'
        )


class NoSnapshotError(ToolError):
    error = "no_snapshot"

    def __init__(self) -> None:
        super().__init__(
            'No snapshot available. Use the "browser_snapshot" tool to capture the page first.'
        )


class AssertionFailedError(ToolError):
    """The live check ran and its expected condition did not hold."""

    error = "assertion_failed"

    def __init__(self, message: str, *, expected: Any = None, actual: Any = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnknownToolError(ToolError):
    error = "unknown_tool"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UnsupportedCapabilityError(ToolError):
    error = "unsupported_capability"

    def __init__(self, capability: str) -> None:
        super().__init__(f"Capability '{capability}' is not enabled")
        self.capability = capability
