"""Configuration management for lsrv.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Self

CONFIG_FILENAME = "lsrv.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8080
    tls: bool = True
    cert_file: Path = field(default_factory=lambda: Path("cert.pem"))
    key_file: Path = field(default_factory=lambda: Path("key.pem"))


@dataclass
class PagesConfig:
    """Page storage and presentation configuration."""

    pages_dir: Path = field(default_factory=lambda: Path("."))
    template_dir: Path = field(default_factory=lambda: Path("."))
    content_dir: Path = field(default_factory=lambda: Path("content"))


@dataclass
class CertConfig:
    """Self-signed certificate generation configuration."""

    hostname: str = "localhost"
    organization: str = ""


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    pages: PagesConfig
    cert: CertConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """Load configuration from config_path, or from a discovered lsrv.toml.

        Falls back to defaults when no file is given or found.

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If a value has the wrong type
        """
        if config_path is None:
            config_path = cls._discover_config()
            if config_path is None:
                return cls._default()
        elif not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        return cls._load_from_file(config_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Return the nearest lsrv.toml in the working directory or its parents."""
        cwd = Path.cwd()
        for directory in (cwd, *cwd.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.exists():
                return candidate
        return None

    @classmethod
    def _default(cls) -> Self:
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            pages=PagesConfig(),
            cert=CertConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server"), config_dir),
            pages=cls._parse_pages(data.get("pages"), config_dir),
            cert=cls._parse_cert(data.get("cert")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object, config_dir: Path) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig(
                cert_file=config_dir / "cert.pem",
                key_file=config_dir / "key.pem",
            )

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "0.0.0.0")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        # bool is an int subclass; reject `port = true`
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        tls = data.get("tls", True)
        if not isinstance(tls, bool):
            raise ValueError("server.tls must be a boolean")

        cert_file = data.get("cert_file", "cert.pem")
        if not isinstance(cert_file, str):
            raise ValueError("server.cert_file must be a string")

        key_file = data.get("key_file", "key.pem")
        if not isinstance(key_file, str):
            raise ValueError("server.key_file must be a string")

        return ServerConfig(
            host=host,
            port=port,
            tls=tls,
            cert_file=config_dir / cert_file,
            key_file=config_dir / key_file,
        )

    @classmethod
    def _parse_pages(cls, data: object, config_dir: Path) -> PagesConfig:
        """Parse pages configuration section.

        Args:
            data: Raw pages section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            PagesConfig instance
        """
        if data is None:
            return PagesConfig(
                pages_dir=config_dir,
                template_dir=config_dir,
                content_dir=config_dir / "content",
            )

        if not isinstance(data, dict):
            raise ValueError("pages section must be a dictionary")

        paths: dict[str, Path] = {}
        for key, default in (
            ("pages_dir", "."),
            ("template_dir", "."),
            ("content_dir", "content"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"pages.{key} must be a string")
            paths[key] = config_dir / value

        return PagesConfig(**paths)

    @classmethod
    def _parse_cert(cls, data: object) -> CertConfig:
        """Parse cert configuration section.

        Args:
            data: Raw cert section data

        Returns:
            CertConfig instance
        """
        if data is None:
            return CertConfig()

        if not isinstance(data, dict):
            raise ValueError("cert section must be a dictionary")

        hostname = data.get("hostname", "localhost")
        if not isinstance(hostname, str):
            raise ValueError("cert.hostname must be a string")

        organization = data.get("organization", "")
        if not isinstance(organization, str):
            raise ValueError("cert.organization must be a string")

        return CertConfig(hostname=hostname, organization=organization)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        tls: bool | None = None,
        pages_dir: Path | None = None,
        hostname: str | None = None,
        organization: str | None = None,
    ) -> Self:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            tls: Override server.tls
            pages_dir: Override pages.pages_dir
            hostname: Override cert.hostname
            organization: Override cert.organization

        Returns:
            New Config instance with overrides applied
        """
        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
            tls=tls if tls is not None else self.server.tls,
        )

        pages = self.pages
        if pages_dir is not None:
            pages = replace(self.pages, pages_dir=pages_dir)

        cert = replace(
            self.cert,
            hostname=hostname if hostname is not None else self.cert.hostname,
            organization=(
                organization if organization is not None else self.cert.organization
            ),
        )

        return replace(self, server=server, pages=pages, cert=cert)
