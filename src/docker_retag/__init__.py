"""
docker-retag: retag container images by copying their manifest.

The manifest is read under one reference and written under a new tag through
the registry HTTP API; no layer data is transferred.
"""
__version__ = "0.1.0"

from .errors import HttpError, RetagError, TokenDecodeError
from .registry import RegistryClient

__all__ = ["RegistryClient", "RetagError", "HttpError", "TokenDecodeError", "__version__"]
