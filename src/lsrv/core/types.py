"""Core type definitions."""

from dataclasses import dataclass
from typing import Literal

Action = Literal["view", "edit", "save"]

PAGE_SUFFIX = ".txt"


@dataclass
class Page:
    """A wiki page.

    The title doubles as the page's file name (``<title>.txt``), so it must
    already have been validated by the router before a Page is built.
    """

    title: str
    body: bytes = b""

    @property
    def filename(self) -> str:
        """File name the page is stored under."""
        return self.title + PAGE_SUFFIX

    @property
    def text(self) -> str:
        """Body decoded for display."""
        return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class RouteMatch:
    """Result of matching a request path against the page routes."""

    action: Action
    title: str
