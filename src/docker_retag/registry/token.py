"""
Bearer token exchange.

Implements the token half of the Docker Registry v2 auth flow: a GET against
the challenge realm with ``service`` and ``scope`` query parameters, answered
by a JSON body carrying the token.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional

import httpx
from pydantic import ValidationError

from ..errors import TokenDecodeError
from .models import AuthToken, BearerChallenge

logger = logging.getLogger(__name__)

__all__ = ["TokenResult", "apply_basic_auth", "build_token_request", "detach_response", "exchange_token"]

# Headers that do not hold for a drained, in-memory copy of a response
_DETACHED_DROP = frozenset({"location", "content-encoding", "content-length", "transfer-encoding"})


class TokenResult(NamedTuple):
    """Outcome of a token exchange: a token, or the refusing response."""
    token: Optional[str]
    response: Optional[httpx.Response] = None


def apply_basic_auth(request: httpx.Request, username: str, password: str) -> httpx.Request:
    """Set HTTP Basic credentials on ``request`` using httpx's own auth flow."""
    return next(httpx.BasicAuth(username, password).sync_auth_flow(request))


def detach_response(response: httpx.Response) -> httpx.Response:
    """
    Drain and close ``response`` and return an in-memory copy of it.

    The copy keeps status and body but has no ``Location`` header, so a
    client following redirects treats it as final.
    """
    try:
        body = response.read()
    finally:
        response.close()

    headers = [
        (name, value) for name, value in response.headers.multi_items()
        if name.lower() not in _DETACHED_DROP
    ]
    extensions = {k: v for k, v in response.extensions.items() if k in ("http_version", "reason_phrase")}
    return httpx.Response(
        response.status_code,
        headers=headers,
        content=body,
        request=response.request,
        extensions=extensions,
    )


def build_token_request(challenge: BearerChallenge, username: str = "",
                        password: str = "") -> httpx.Request:
    """
    Build the token GET for a bearer challenge.

    Query parameters already present on the realm are kept; ``service`` is
    always set and ``scope`` only when non-empty.
    """
    params = {"service": challenge.service}
    if challenge.scope:
        params["scope"] = challenge.scope

    request = httpx.Request("GET", challenge.realm, params=params)
    if username or password:
        request = apply_basic_auth(request, username, password)
    return request


def exchange_token(transport: httpx.BaseTransport, challenge: BearerChallenge,
                   username: str = "", password: str = "") -> TokenResult:
    """
    Exchange credentials for a bearer token.

    Args:
        transport: Base transport; must not be the bearer retry layer itself
        challenge: Parsed bearer challenge
        username: Optional username for Basic auth against the realm
        password: Optional password for Basic auth against the realm

    Returns:
        ``TokenResult(token, None)`` on success, or ``TokenResult(None, response)``
        when the endpoint did not answer 200. That response is already drained
        and closed, and carries no ``Location`` header.

    Raises:
        TokenDecodeError: If the 200 body is not a JSON object with a ``token``
        httpx.RequestError: On network failures
    """
    request = build_token_request(challenge, username, password)
    logger.debug(f"Requesting bearer token from {challenge.realm} "
                 f"(service={challenge.service!r}, scope={challenge.scope!r})")

    response = transport.handle_request(request)
    if response.status_code != 200:
        logger.debug(f"Token endpoint answered {response.status_code}")
        return TokenResult(None, detach_response(response))

    try:
        body = response.read()
    finally:
        response.close()

    try:
        auth_token = AuthToken.model_validate_json(body)
    except ValidationError as e:
        raise TokenDecodeError(f"Invalid token response from {challenge.realm}: {e}") from e

    return TokenResult(auth_token.token)
