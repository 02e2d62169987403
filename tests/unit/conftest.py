from __future__ import annotations

from typing import Any

import pytest

from browser_assertions import ToolRegistry
from browser_assertions.tools import register_assert_tools


class _FakeExpect:
    """Replacement for playwright's `expect` used by the checked/visible tools."""

    def __init__(self, locator: Any) -> None:
        self.locator = locator

    async def to_be_checked(self) -> None:
        self.locator.calls.append("to_be_checked")
        if not self.locator.checked:
            raise AssertionError("Locator expected to be checked\nActual value: unchecked")

    async def to_be_visible(self) -> None:
        self.locator.calls.append("to_be_visible")
        if not self.locator.visible:
            raise AssertionError("Locator expected to be visible\nActual value: hidden")


@pytest.fixture
def fake_expect(monkeypatch):
    monkeypatch.setattr("browser_assertions.tools.asserts.expect", _FakeExpect)
    return _FakeExpect


@pytest.fixture
def registry() -> ToolRegistry:
    reg = ToolRegistry()
    register_assert_tools(reg)
    return reg
