"""
Pydantic models for assertion tool inputs and call results.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ELEMENT_DESCRIPTION = (
    "Human-readable element description used to obtain permission to interact with the element"
)
REF_DESCRIPTION = "Exact target element reference from the page snapshot"


# ========== Tool inputs ==========


class ElementAssertInput(BaseModel):
    """Target a single element from the most recent page snapshot"""

    model_config = ConfigDict(extra="forbid")

    element: str = Field(..., min_length=1, description=ELEMENT_DESCRIPTION)
    ref: str = Field(..., min_length=1, description=REF_DESCRIPTION)


class ContainTextInput(ElementAssertInput):
    expected: str = Field(..., description="Expected text substring")


class HaveTextInput(ElementAssertInput):
    expected: str = Field(..., description="Expected exact text")


class HaveValueInput(ElementAssertInput):
    expected: str = Field(..., description="Expected value")


class HaveTitleInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    expected: str = Field(..., description="Expected page title")


class HaveURLInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    expected: str = Field(..., description="Expected page URL")


# ========== Tool outputs ==========

Action = Callable[[], Awaitable[None]]


@dataclass
class ToolResult:
    """
    What a tool handler hands back before anything runs against the page.

    `code` is the trace of the equivalent Playwright statement. `action` is the
    deferred live check; it raises AssertionFailedError when the condition does
    not hold.
    """

    code: list[str] = field(default_factory=list)
    action: Action | None = None
    capture_snapshot: bool = True
    wait_for_network: bool = False


class ToolCallResult(BaseModel):
    """Outcome of a tool call, as reported to the client"""

    name: str
    code: list[str]
    capture_snapshot: bool
    wait_for_network: bool
    passed: bool
    error: Optional[str] = None
    page_url: Optional[str] = None
    page_title: Optional[str] = None
    snapshot: Optional[str] = None
    duration_ms: int = 0
    language: str = "javascript"

    def render(self) -> str:
        """Render the markdown response shown to the client."""
        fence = "js" if self.language == "javascript" else self.language
        lines: list[str] = []
        if self.code:
            lines += ["### Ran Playwright code", f"```{fence}", *self.code, "```"]

        if self.error is not None:
            if lines:
                lines.append("")
            lines += ["### Result", self.error]

        if self.page_url is not None or self.page_title is not None:
            if lines:
                lines.append("")
            lines.append("### Page state")
            lines.append(f"- Page URL: {self.page_url or ''}")
            lines.append(f"- Page Title: {self.page_title or ''}")
            if self.snapshot:
                lines += ["- Page Snapshot:", "```yaml", self.snapshot, "```"]

        return "\n".join(lines)
