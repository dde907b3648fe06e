"""Static file fallback.

Any GET path not claimed by a page route is looked up under the content
root. Paths that resolve outside the content root are treated as missing,
and every other method on an unclaimed path is answered with 404.
"""

from aiohttp import web

from lsrv.app_keys import content_dir_key

INDEX_FILE = "index.html"


def create_static_routes() -> list[web.RouteDef]:
    return [
        web.get("/{path:.*}", serve_content),
        web.route("*", "/{path:.*}", not_found),
    ]


async def serve_content(request: web.Request) -> web.FileResponse:
    """Serve a file from the content root, or 404.

    A directory is served through its index.html when it has one.
    """
    content_dir = request.app[content_dir_key].resolve()
    try:
        target = (content_dir / request.match_info["path"]).resolve()
        if not target.is_relative_to(content_dir):
            raise web.HTTPNotFound()
        if target.is_dir():
            target = target / INDEX_FILE
        if not target.is_file():
            raise web.HTTPNotFound()
    except (OSError, ValueError) as e:
        # e.g. an embedded NUL byte in the decoded path
        raise web.HTTPNotFound() from e
    return web.FileResponse(target)


async def not_found(request: web.Request) -> web.Response:
    raise web.HTTPNotFound()
