"""CLI interface for lsrv.

Command-line tool for serving the wiki and generating its TLS certificate.
"""

import logging
import sys
from pathlib import Path

import click

from lsrv.config import Config

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """lsrv - a minimal personal wiki."""


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with error.

    Args:
        config_path: Explicit config file, or None to auto-discover

    Returns:
        Loaded configuration

    Raises:
        SystemExit: If the configuration is invalid
    """
    try:
        return Config.load(config_path)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover lsrv.toml)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to listen on (overrides config)",
)
@click.option(
    "--tls/--notls",
    default=None,
    help="Serve HTTPS or plain HTTP (overrides config, default: HTTPS)",
)
@click.option(
    "--pages-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding page files (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    tls: bool | None,
    pages_dir: Path | None,
    verbose: bool,
) -> None:
    """Start the wiki server."""
    from lsrv.server import run_server

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        tls=tls,
        pages_dir=pages_dir,
    )

    scheme = "https" if config.server.tls else "http"
    click.echo(f"Listening on {scheme}://{config.server.host}:{config.server.port}")
    click.echo(f"Pages directory: {config.pages.pages_dir}")
    click.echo(f"Template directory: {config.pages.template_dir}")
    click.echo(f"Content directory: {config.pages.content_dir}")
    if config.server.tls:
        click.echo(f"Certificate: {config.server.cert_file}")
        click.echo(f"Key: {config.server.key_file}")

    try:
        run_server(config)
    except Exception as e:
        logger.error(f"Server failed: {e}")
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    logger.info("Server stopped")


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover lsrv.toml)",
)
@click.option(
    "--host",
    "hostname",
    default=None,
    help="Comma-separated host names for the certificate (overrides config)",
)
@click.option(
    "--organization",
    "-o",
    default=None,
    help="Certificate organization (overrides config)",
)
def gencert(
    config_path: Path | None,
    hostname: str | None,
    organization: str | None,
) -> None:
    """Generate a self-signed certificate and key, then exit."""
    from lsrv.certs import generate_cert

    logging.basicConfig(level=logging.INFO)

    config = _load_config(config_path).with_overrides(
        hostname=hostname,
        organization=organization,
    )

    try:
        generate_cert(
            config.cert.hostname,
            config.cert.organization,
            config.server.cert_file,
            config.server.key_file,
        )
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error generating certificate: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(click.style("Certificate and key generated!", fg="green", bold=True))
    click.echo(f"Certificate: {config.server.cert_file}")
    click.echo(f"Key: {config.server.key_file}")


if __name__ == "__main__":
    cli()
