"""
Page navigation for GFly Dashboard.
Keeps track of which display page the pilot has selected.
"""

import logging
from enum import Enum
from typing import Optional, Union

# Configure logger
logger = logging.getLogger("gfly_dashboard.core.navigation")


class ViewSelection(Enum):
    """Display pages, in menu order"""
    CURRENT = "current"
    MAXMIN = "maxmin"
    TRACK = "track"
    INFO = "info"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def from_name(cls, name: str) -> 'ViewSelection':
        """
        Look up a page by name, case-insensitively.

        Accepts the page value ("maxmin"), the member name ("MAXMIN") or the
        title ("Max/Min").

        Raises:
            ValueError: If no page has that name
        """
        wanted = name.strip().lower()
        for page in cls:
            if wanted in (page.value, page.name.lower(), page.title.lower()):
                return page
        raise ValueError(f"Unknown page: {name}")


_TITLES = {
    ViewSelection.CURRENT: "Current",
    ViewSelection.MAXMIN: "Max/Min",
    ViewSelection.TRACK: "Track",
    ViewSelection.INFO: "Info",
}


class PageNavigator:
    """
    Menu state: the currently selected page.
    Only reads and writes the selection, never the poller's state.
    """

    def __init__(self, initial: Optional[Union[ViewSelection, str]] = None):
        self._page = self._coerce(initial) if initial else ViewSelection.CURRENT

    @staticmethod
    def _coerce(page: Union[ViewSelection, str]) -> ViewSelection:
        if isinstance(page, ViewSelection):
            return page
        return ViewSelection.from_name(page)

    @property
    def page(self) -> ViewSelection:
        return self._page

    def select(self, page: Union[ViewSelection, str]) -> ViewSelection:
        """Jump straight to a page"""
        self._page = self._coerce(page)
        logger.debug(f"Page selected: {self._page.title}")
        return self._page

    def next(self) -> ViewSelection:
        """Move to the following page, wrapping after the last one"""
        return self._step(1)

    def previous(self) -> ViewSelection:
        """Move to the preceding page, wrapping before the first one"""
        return self._step(-1)

    def _step(self, offset: int) -> ViewSelection:
        pages = list(ViewSelection)
        index = (pages.index(self._page) + offset) % len(pages)
        return self.select(pages[index])
