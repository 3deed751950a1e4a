"""pledge - per-identity commitment registry."""

__version__ = "0.1.0"
