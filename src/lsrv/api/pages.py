"""Page view, edit and save endpoints.

Each handler runs only after the router has validated the path, so the
title it receives is always a plain alphanumeric string.
"""

import logging

from aiohttp import web

from lsrv.app_keys import store_key, templates_key
from lsrv.core.router import make_handler
from lsrv.core.types import Page
from lsrv.errors import PageNotFoundError, RenderError

logger = logging.getLogger(__name__)


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/view/{title}", make_handler("view", view_page)),
        web.get("/edit/{title}", make_handler("edit", edit_page)),
        web.post("/save/{title}", make_handler("save", save_page)),
    ]


async def view_page(request: web.Request, title: str) -> web.Response:
    store = request.app[store_key]
    try:
        page = store.load(title)
    except PageNotFoundError:
        raise web.HTTPFound(f"/edit/{title}") from None
    return _render(request, "view", page)


async def edit_page(request: web.Request, title: str) -> web.Response:
    store = request.app[store_key]
    try:
        page = store.load(title)
    except PageNotFoundError:
        page = Page(title=title)
    return _render(request, "edit", page)


async def save_page(request: web.Request, title: str) -> web.Response:
    form = await request.post()
    field = form.get("body", "")
    if isinstance(field, str):
        body = field.encode("utf-8")
    elif isinstance(field, bytes):
        body = field
    else:
        body = field.file.read()

    page = Page(title=title, body=body)
    try:
        request.app[store_key].save(page)
    except OSError as e:
        logger.error(f"Failed to save page {title}: {e}")
        raise web.HTTPInternalServerError(text=str(e)) from e

    raise web.HTTPFound(f"/view/{title}")


def _render(request: web.Request, name: str, page: Page) -> web.Response:
    templates = request.app[templates_key]
    try:
        html = templates.render(name, page)
    except RenderError as e:
        logger.error(f"Failed to render {name} template for {page.title}: {e}")
        raise web.HTTPInternalServerError(text=str(e)) from e
    return web.Response(text=html, content_type="text/html")
