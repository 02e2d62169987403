"""
Session, tab and snapshot handles the assertion tools resolve targets from.

The browser runtime owns page lifecycle and snapshot capture. These classes
only hold what it hands over: the open pages, and for each page the most
recent snapshot with its ref -> locator mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import NoOpenTabError, NoSnapshotError, RefNotFoundError

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)


@dataclass
class PageSnapshot:
    """
    Point-in-time capture of a page.

    Attributes:
        refs: ref id -> live locator for every element surfaced by the capture
        text: textual (aria/yaml) rendering of the capture, shown to the client
    """

    refs: Mapping[str, Locator] = field(default_factory=dict)
    text: str = ""

    def ref_locator(self, element: str, ref: str) -> Locator:
        locator = self.refs.get(ref)
        if locator is None:
            logger.debug("ref %s (%s) missing from snapshot", ref, element)
            raise RefNotFoundError(ref)
        return locator

    @classmethod
    def from_selectors(
        cls, page: Page, selectors: Mapping[str, str], text: str = ""
    ) -> PageSnapshot:
        """Build a snapshot whose refs point at `page.locator(selector)`."""
        return cls(
            refs={ref: page.locator(selector) for ref, selector in selectors.items()},
            text=text,
        )


SnapshotProvider = Callable[["Page"], Awaitable[PageSnapshot]]


@dataclass
class Tab:
    page: Page
    snapshot: PageSnapshot | None = None

    def snapshot_or_die(self) -> PageSnapshot:
        if self.snapshot is None:
            raise NoSnapshotError()
        return self.snapshot

    async def capture_snapshot(self, provider: SnapshotProvider) -> PageSnapshot:
        self.snapshot = await provider(self.page)
        return self.snapshot


class BrowserSession:
    """The open tabs of a single client session, one of them current."""

    def __init__(self, tabs: list[Tab] | None = None, current_index: int = 0) -> None:
        self.tabs: list[Tab] = list(tabs or [])
        self._current_index = current_index

    @classmethod
    def from_page(cls, page: Page, snapshot: PageSnapshot | None = None) -> BrowserSession:
        return cls(tabs=[Tab(page=page, snapshot=snapshot)])

    def add_tab(self, page: Page, snapshot: PageSnapshot | None = None) -> Tab:
        tab = Tab(page=page, snapshot=snapshot)
        self.tabs.append(tab)
        self._current_index = len(self.tabs) - 1
        return tab

    def select_tab(self, index: int) -> Tab:
        if index < 0 or index >= len(self.tabs):
            raise IndexError(f"Tab {index} not found")
        self._current_index = index
        return self.tabs[index]

    def current_tab(self) -> Tab | None:
        if not self.tabs:
            return None
        return self.tabs[min(self._current_index, len(self.tabs) - 1)]

    def current_tab_or_die(self) -> Tab:
        tab = self.current_tab()
        if tab is None:
            raise NoOpenTabError()
        return tab
