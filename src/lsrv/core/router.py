"""URL path validation for page routes.

Every page handler runs behind the same guard: the path must be exactly
``/<action>/<title>`` where the title is plain alphanumerics. Titles can never
contain ``.`` or ``/``, so they are safe to use as file names.
"""

import functools
import logging
import re
from collections.abc import Awaitable, Callable
from typing import cast

from aiohttp import web

from lsrv.core.types import Action, RouteMatch

logger = logging.getLogger(__name__)

VALID_PATH = re.compile(r"^/(view|edit|save)/([a-zA-Z0-9]+)$")

PageHandler = Callable[[web.Request, str], Awaitable[web.StreamResponse]]


def match_path(path: str) -> RouteMatch | None:
    """Match a URL path against the page routes.

    Args:
        path: Decoded URL path (e.g., "/view/FrontPage")

    Returns:
        RouteMatch with action and title, or None if the path is not a page route
    """
    m = VALID_PATH.fullmatch(path)
    if m is None:
        return None
    return RouteMatch(action=cast(Action, m.group(1)), title=m.group(2))


def make_handler(
    action: Action,
    fn: PageHandler,
) -> Callable[[web.Request], Awaitable[web.StreamResponse]]:
    """Wrap a page handler with the path guard.

    Args:
        action: Action the wrapped handler serves
        fn: Handler taking the request and the extracted title

    Returns:
        aiohttp handler that answers 404 for any path that is not
        ``/<action>/<title>``
    """

    @functools.wraps(fn)
    async def handler(request: web.Request) -> web.StreamResponse:
        match = match_path(request.path)
        if match is None or match.action != action:
            logger.debug(f"No page route for {request.path!r}")
            raise web.HTTPNotFound()
        return await fn(request, match.title)

    return handler
