"""Shared test fixtures."""

from pathlib import Path

import pytest
from lsrv.config import CertConfig, Config, PagesConfig, ServerConfig


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates pages, templates and content directories and returns a Config
    instance suitable for testing. TLS is off.
    """
    pages_dir = tmp_path / "pages"
    pages_dir.mkdir(exist_ok=True)
    content_dir = tmp_path / "content"
    content_dir.mkdir(exist_ok=True)

    return Config(
        server=ServerConfig(
            host="127.0.0.1",
            tls=False,
            cert_file=tmp_path / "cert.pem",
            key_file=tmp_path / "key.pem",
        ),
        pages=PagesConfig(
            pages_dir=pages_dir,
            template_dir=tmp_path / "templates",
            content_dir=content_dir,
        ),
        cert=CertConfig(),
    )
