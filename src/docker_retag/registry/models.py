"""
Data types shared by the registry transport chain.

Challenge records are plain dataclasses produced by the header parser; the
token payload is a Pydantic model so that a malformed body from the token
endpoint fails validation instead of producing an empty token.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["AuthChallenge", "BearerChallenge", "AuthToken", "TransportConfig"]


@dataclass(frozen=True)
class AuthChallenge:
    """One parsed ``WWW-Authenticate`` value (scheme and keys lowercased)."""
    scheme: str
    parameters: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BearerChallenge:
    """
    Parameters of a ``Bearer`` challenge.

    Attributes:
        realm: Token endpoint URL
        service: Service name passed to the token endpoint
        scope: Requested scope; empty means the parameter is omitted
    """
    realm: str
    service: str = ""
    scope: str = ""

    @classmethod
    def from_challenge(cls, challenge: AuthChallenge) -> BearerChallenge:
        params = challenge.parameters
        return cls(
            realm=params.get("realm", ""),
            service=params.get("service", ""),
            scope=params.get("scope", ""),
        )


class AuthToken(BaseModel):
    """Token endpoint response body. Only ``token`` is used."""
    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., description="Bearer token for the registry")


@dataclass(frozen=True)
class TransportConfig:
    """
    Read-only configuration shared by the auth transports.

    Empty ``username`` and ``password`` select anonymous mode: no Basic
    credentials are sent to the registry or to the token endpoint.
    """
    registry_url: str
    username: str = ""
    password: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.username or self.password)
