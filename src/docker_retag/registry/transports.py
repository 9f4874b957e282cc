"""
Authenticating HTTPX transports for the Docker Registry v2 API.

Two decorators over ``httpx.BaseTransport``, each owning the transport it wraps:

- :class:`BasicAuthTransport` attaches Basic credentials to requests aimed at
  the configured registry, and only those.
- :class:`BearerRetryTransport` answers a single ``401`` bearer challenge by
  exchanging for a token and replaying the request once.

The registry client stacks them as ``BasicAuthTransport(BearerRetryTransport(base))``.
Request bodies are always fully buffered, so replaying a request is safe.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from .challenge import parse_www_authenticate
from .models import AuthChallenge, BearerChallenge, TransportConfig
from .token import apply_basic_auth, exchange_token

logger = logging.getLogger(__name__)

__all__ = ["BasicAuthTransport", "BearerRetryTransport", "find_bearer_challenge", "url_has_prefix"]


def url_has_prefix(url: str, prefix: str) -> bool:
    """
    Check that ``url`` lies under ``prefix``.

    The match must end on a URL boundary so that ``https://reg.example``
    does not cover ``https://reg.example.evil``.
    """
    if not prefix or not url.startswith(prefix):
        return False
    if len(url) == len(prefix) or prefix.endswith("/"):
        return True
    return url[len(prefix)] in "/?#"


def find_bearer_challenge(challenges: List[AuthChallenge]) -> Optional[AuthChallenge]:
    """Return the first challenge with the ``bearer`` scheme."""
    for challenge in challenges:
        if challenge.scheme == "bearer":
            return challenge
    return None


class BasicAuthTransport(httpx.BaseTransport):
    """Transport attaching HTTP Basic credentials to registry requests."""

    def __init__(self, inner: httpx.BaseTransport, config: TransportConfig) -> None:
        self._inner = inner
        self._config = config
        # Compared against request URLs, which httpx has already normalized
        self._prefix = str(httpx.URL(config.registry_url)) if config.registry_url else ""

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if self._config.has_credentials and url_has_prefix(str(request.url), self._prefix):
            request = apply_basic_auth(request, self._config.username, self._config.password)
        return self._inner.handle_request(request)

    def close(self) -> None:
        self._inner.close()


class BearerRetryTransport(httpx.BaseTransport):
    """
    Transport handling the registry bearer-token challenge.

    Per request:
        1. Forward to the inner transport; errors propagate untouched.
        2. Any status but 401 is returned as-is.
        3. On 401, look for the first ``Bearer`` challenge. Without one the
           401 is returned as-is.
        4. Otherwise exchange for a token against the challenge realm (through
           the inner transport, never through this one) and replay the request
           once with ``Authorization: Bearer <token>``.
        5. If the token endpoint does not answer 200, a drained copy of its
           response, stripped of ``Location``, is returned instead of the 401.

    The replay's outcome is final, even when it is another 401. No token is
    kept between requests.
    """

    def __init__(self, inner: httpx.BaseTransport, config: TransportConfig) -> None:
        self._inner = inner
        self._config = config

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        response = self._inner.handle_request(request)
        if response.status_code != 401:
            return response

        challenge = find_bearer_challenge(parse_www_authenticate(response.headers))
        if challenge is None:
            logger.debug(f"401 from {request.url} without a bearer challenge")
            return response

        bearer = BearerChallenge.from_challenge(challenge)
        if not bearer.realm:
            logger.warning(f"Ignoring bearer challenge without realm from {request.url}")
            return response

        # Discard the 401 before starting the exchange
        try:
            response.read()
        finally:
            response.close()

        logger.debug(f"Bearer challenge from {request.url}, exchanging token")
        result = exchange_token(
            self._inner, bearer, self._config.username, self._config.password
        )
        if result.token is None:
            return result.response

        request.headers["Authorization"] = f"Bearer {result.token}"
        logger.debug(f"Replaying {request.method} {request.url} with bearer token")
        return self._inner.handle_request(request)

    def close(self) -> None:
        self._inner.close()
