"""
Retag error classes.

Network failures are not wrapped: they surface as the ``httpx`` exception
raised by the transport. The classes here cover the cases where the registry
or token endpoint answered, but not with what the operation needed.
"""
from __future__ import annotations


class RetagError(Exception):
    """Base class for all retag errors."""
    pass


class HttpError(RetagError):
    """
    Unexpected HTTP status.

    Raised when:
    - manifest GET does not return 200
    - manifest PUT does not return 201
    - the token endpoint refused the exchange, which leaves the original
      request unauthorized

    Attributes:
        status: Status line text, e.g. ``"404 Not Found"``
        url: URL of the request that failed
    """

    def __init__(self, status: str, url: str):
        super().__init__(f'HTTP {status} when accessing "{url}"')
        self.status = status
        self.url = url


class TokenDecodeError(RetagError):
    """
    Token endpoint returned 200 with an unusable body.

    Raised when the body is not JSON or has no string ``token`` field.
    """
    pass


__all__ = [
    "RetagError",
    "HttpError",
    "TokenDecodeError",
]
