"""
Registry client for manifest retagging.

Copies a manifest from one reference to a new tag within the same repository
using the OCI Distribution API. Only the manifest moves; layers and configs
are already referenced by digest and stay where they are.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

import httpx

from .. import __version__
from ..errors import HttpError
from ..media_types import MANIFEST_ACCEPT_HEADER
from .models import TransportConfig
from .transports import BasicAuthTransport, BearerRetryTransport

logger = logging.getLogger(__name__)

__all__ = ["RegistryClient", "status_text"]


def status_text(response: httpx.Response) -> str:
    """Render a status line such as ``"404 Not Found"``."""
    return f"{response.status_code} {response.reason_phrase}".strip()


class RegistryClient:
    """
    HTTP client for manifest retagging against one registry.

    Requests go through ``BasicAuthTransport(BearerRetryTransport(base))`` so
    that Basic credentials reach the registry only, and bearer challenges are
    answered transparently.
    """

    def __init__(self, registry_url: str, username: str = "", password: str = "", *,
                 transport: Optional[httpx.BaseTransport] = None,
                 timeout: Union[httpx.Timeout, float, None] = None):
        """
        Initialize registry client.

        Args:
            registry_url: Registry base URL (e.g., "https://index.docker.io")
            username: Registry username; empty for anonymous access
            password: Registry password; empty for anonymous access
            transport: Base transport (defaults to ``httpx.HTTPTransport()``)
            timeout: Passed to ``httpx.Client``; None means no deadline
        """
        # Same form httpx gives request URLs: lowercase host, no default port
        self.registry_url = str(httpx.URL(registry_url)).rstrip("/")
        self.config = TransportConfig(
            registry_url=self.registry_url,
            username=username or "",
            password=password or "",
        )

        base = transport or httpx.HTTPTransport()
        auth_transport = BasicAuthTransport(
            BearerRetryTransport(base, self.config),
            self.config,
        )
        self.client = httpx.Client(
            transport=auth_transport,
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": f"docker-retag/{__version__}"},
        )

    def manifest_url(self, repository: str, reference: str) -> str:
        """URL of a manifest; ``reference`` is a tag or a ``sha256:`` digest."""
        return f"{self.registry_url}/v2/{repository}/manifests/{reference}"

    def retag(self, repository: str, old_ref: str, new_tag: str) -> None:
        """
        Copy the manifest at ``old_ref`` to ``new_tag``.

        The manifest body and its ``Content-Type`` are sent back unchanged, so
        the manifest digest is preserved.

        Args:
            repository: Repository name (e.g., "acme/widget")
            old_ref: Source tag or digest
            new_tag: Target tag

        Raises:
            HttpError: If the GET is not 200 or the PUT is not 201
            TokenDecodeError: If a token endpoint returned an invalid body
            httpx.RequestError: On network failures
        """
        source_url = self.manifest_url(repository, old_ref)
        logger.debug(f"Fetching manifest {source_url}")
        source = self.client.get(source_url, headers={"Accept": MANIFEST_ACCEPT_HEADER})
        if source.status_code != 200:
            raise HttpError(status_text(source), source_url)

        content_type = source.headers.get("Content-Type", "")
        manifest = source.content

        dest_url = self.manifest_url(repository, new_tag)
        headers = {"Content-Type": content_type} if content_type else {}
        logger.debug(f"Putting {len(manifest)} byte manifest ({content_type or 'no content type'}) to {dest_url}")
        dest = self.client.put(dest_url, content=manifest, headers=headers)
        if dest.status_code != 201:
            raise HttpError(status_text(dest), dest_url)

        logger.info(f"Retagged {repository} {old_ref} as {new_tag}")

    def close(self):
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
