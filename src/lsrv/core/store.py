"""File-backed page storage.

Each page lives in a single file::

    <pages_dir>/
    ├── FrontPage.txt
    └── TestPage.txt

There is no locking and no atomic rename. Two saves to the same title race
at the filesystem level and the last writer wins.
"""

import logging
import os
from pathlib import Path

from lsrv.core.types import PAGE_SUFFIX, Page
from lsrv.errors import PageNotFoundError

logger = logging.getLogger(__name__)

PAGE_FILE_MODE = 0o600


class PageStore:
    """Loads and saves pages as ``<title>.txt`` files in one directory."""

    def __init__(self, pages_dir: Path) -> None:
        """Initialize store.

        Args:
            pages_dir: Directory holding the page files
        """
        self._pages_dir = pages_dir

    @property
    def pages_dir(self) -> Path:
        """Directory holding the page files."""
        return self._pages_dir

    def path_for(self, title: str) -> Path:
        """Return the file a page with this title is stored in."""
        return self._pages_dir / f"{title}{PAGE_SUFFIX}"

    def load(self, title: str) -> Page:
        """Load a page from disk.

        Args:
            title: Page title, already validated by the router

        Returns:
            Page with the file's full contents as body

        Raises:
            PageNotFoundError: If the file cannot be read for any reason
        """
        try:
            body = self.path_for(title).read_bytes()
        except OSError as e:
            raise PageNotFoundError(title) from e
        return Page(title=title, body=body)

    def save(self, page: Page) -> None:
        """Write a page to disk, creating or truncating its file.

        New files are created readable and writable by the owner only.

        Args:
            page: Page to persist

        Raises:
            OSError: If the file cannot be written
        """
        path = self.path_for(page.title)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, PAGE_FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            f.write(page.body)
        logger.info(f"Saved page {page.title} ({len(page.body)} bytes)")
