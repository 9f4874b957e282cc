"""
docker-retag CLI

Retags an image by copying its manifest to a new tag:

    docker-retag acme/widget:1.0.0 1.0.1
    docker-retag acme/widget 1.0.0 1.0.1
    docker-retag acme/widget@sha256:<digest> 1.0.1

Registry and credentials come from DOCKER_REGISTRY, DOCKER_USER and DOCKER_PASS.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import typer

from . import __version__
from .operations import print_registry, print_retag_summary, run_and_exit
from .reference import parse_arguments
from .registry import RegistryClient
from .settings import Settings, create_settings_from_env

app = typer.Typer(name="docker-retag", help="Retag a container image without pulling it", add_completion=False)


def _create_client(settings: Settings) -> RegistryClient:
    """Create the registry client for the configured registry."""
    return RegistryClient(
        settings.registry_url,
        settings.username,
        settings.password,
        timeout=settings.http_timeout_s,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"docker-retag {__version__}")
        raise typer.Exit()


@app.command()
def retag(
    args: List[str] = typer.Argument(..., metavar="IMAGE[:TAG|@DIGEST] [OLD_REF] NEW_TAG",
                                     help="Image and new tag, or repository, old reference and new tag"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show registry and HTTP debug output"),
    version: Optional[bool] = typer.Option(None, "--version", callback=_version_callback,
                                           is_eager=True, help="Show version and exit"),
) -> None:
    """Retag an image by copying its manifest under a new tag."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    def _retag() -> None:
        request = parse_arguments(args)
        settings = create_settings_from_env()
        if verbose:
            print_registry(settings.registry_url)

        with _create_client(settings) as client:
            client.retag(request.repository, request.old_ref, request.new_tag)

        print_retag_summary(request)

    run_and_exit(_retag)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
