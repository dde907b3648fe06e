"""lsrv - a minimal personal wiki served over HTTP(S)."""

__version__ = "0.1.0"
