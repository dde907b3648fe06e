"""aiohttp server for lsrv.

Application factory and route registration.
"""

import logging
import ssl
from pathlib import Path

from aiohttp import web

from lsrv.api.pages import create_pages_routes
from lsrv.api.static import create_static_routes
from lsrv.app_keys import content_dir_key, store_key, templates_key
from lsrv.config import Config
from lsrv.core.renderer import TemplateSet, bootstrap_templates
from lsrv.core.store import PageStore

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Templates are written to the template directory if missing and
    compiled once here; the resulting set is shared read-only by all
    requests.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        TemplateLoadError: If the templates cannot be compiled
    """
    app = web.Application()

    bootstrap_templates(config.pages.template_dir)

    app[templates_key] = TemplateSet.load(config.pages.template_dir)
    app[store_key] = PageStore(config.pages.pages_dir)
    app[content_dir_key] = config.pages.content_dir

    # Page routes must be registered first to take precedence over static fallback
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_static_routes())

    return app


def create_ssl_context(cert_file: Path, key_file: Path) -> ssl.SSLContext:
    """Create a server-side TLS context.

    Args:
        cert_file: PEM certificate file
        key_file: PEM private key file

    Returns:
        SSL context for the listener

    Raises:
        FileNotFoundError: If either file is missing
        ssl.SSLError: If the certificate or key is invalid
    """
    for path in (cert_file, key_file):
        if not path.is_file():
            raise FileNotFoundError(f"TLS file not found: {path}")

    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    context.load_cert_chain(cert_file, key_file)
    return context


def run_server(config: Config) -> None:
    """Run the server until the listener stops.

    Args:
        config: Application configuration

    Raises:
        OSError: If the listener cannot be started
        ssl.SSLError: If the TLS certificate or key is invalid
    """
    config.pages.pages_dir.mkdir(parents=True, exist_ok=True)

    ssl_context = None
    if config.server.tls:
        ssl_context = create_ssl_context(config.server.cert_file, config.server.key_file)

    app = create_app(config)
    logger.info(
        f"Listening on {config.server.host}:{config.server.port} "
        f"({'https' if ssl_context else 'http'})",
    )
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        ssl_context=ssl_context,
        print=None,
    )
