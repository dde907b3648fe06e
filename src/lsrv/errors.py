"""Exception hierarchy for lsrv."""


class LsrvError(Exception):
    """Base class for all lsrv errors."""


class PageNotFoundError(LsrvError, LookupError):
    """Raised when a page cannot be read from the page store.

    Every read failure is reported this way, whether the file is missing,
    unreadable, or not a regular file.
    """

    def __init__(self, title: str) -> None:
        super().__init__(f"Page not found: {title}")
        self.title = title


class TemplateLoadError(LsrvError):
    """Raised when the template set cannot be loaded at startup."""


class RenderError(LsrvError):
    """Raised when a template fails to execute."""
