"""Self-signed certificate generation for the TLS listener."""

import ipaddress
import logging
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

logger = logging.getLogger(__name__)

DEFAULT_ORGANIZATION = "Acme Co"
KEY_SIZE = 2048
VALID_FOR = timedelta(days=365)


def generate_cert(
    hostname: str,
    organization: str,
    cert_path: Path,
    key_path: Path,
) -> None:
    """Generate a self-signed certificate and private key.

    Args:
        hostname: Comma-separated host names and IP addresses to certify
        organization: Subject organization; empty selects a placeholder
        cert_path: Where to write the PEM certificate
        key_path: Where to write the PEM private key (owner-only)

    Raises:
        ValueError: If no host name is given
        OSError: If either file cannot be written
    """
    hosts = [h.strip() for h in hostname.split(",") if h.strip()]
    if not hosts:
        raise ValueError("hostname is required")

    key = rsa.generate_private_key(public_exponent=65537, key_size=KEY_SIZE)
    name = x509.Name(
        [
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, organization or DEFAULT_ORGANIZATION),
            x509.NameAttribute(NameOID.COMMON_NAME, hosts[0]),
        ],
    )
    now = datetime.now(UTC)

    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + VALID_FOR)
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                key_encipherment=True,
                content_commitment=False,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
        .add_extension(
            x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]),
            critical=False,
        )
        .add_extension(
            x509.SubjectAlternativeName([_general_name(h) for h in hosts]),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )

    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    logger.info(f"Wrote certificate {cert_path}")

    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(key_pem)
    logger.info(f"Wrote private key {key_path}")


def _general_name(host: str) -> x509.GeneralName:
    """Return an IP or DNS subject alternative name for a host."""
    try:
        return x509.IPAddress(ipaddress.ip_address(host))
    except ValueError:
        return x509.DNSName(host)
