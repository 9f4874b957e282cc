"""
Registry package - authenticating transport chain and manifest retagging.

Exposes the registry client along with the transports and challenge parser
it is built from, so embedding applications can reuse the auth chain.
"""
from .challenge import parse_challenges, parse_www_authenticate
from .client import RegistryClient
from .models import AuthChallenge, AuthToken, BearerChallenge, TransportConfig
from .token import TokenResult, exchange_token
from .transports import BasicAuthTransport, BearerRetryTransport

__all__ = [
    "RegistryClient",
    "BasicAuthTransport",
    "BearerRetryTransport",
    "AuthChallenge",
    "AuthToken",
    "BearerChallenge",
    "TransportConfig",
    "TokenResult",
    "exchange_token",
    "parse_challenges",
    "parse_www_authenticate",
]
