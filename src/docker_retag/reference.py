"""
Image reference parsing for the command line.

Accepts either two arguments, ``IMAGE NEW_TAG`` with ``IMAGE`` written as
``repo:tag`` or ``repo@sha256:<digest>``, or three arguments,
``REPO OLD_REF NEW_TAG``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Tuple

__all__ = ["RetagRequest", "InvalidReference", "parse_arguments", "split_image"]

TAG_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]{0,127}$")
DIGEST_PATTERN = re.compile(r"^sha256:[a-f0-9]{64}$")
DIGEST_PREFIX = "sha256:"


class InvalidReference(ValueError):
    """Command line arguments do not describe a valid retag."""
    pass


@dataclass(frozen=True)
class RetagRequest:
    """
    A parsed retag request.

    Attributes:
        repository: Repository path (e.g., "acme/widget")
        old_ref: Source tag or ``sha256:`` digest
        new_tag: Target tag
    """
    repository: str
    old_ref: str
    new_tag: str

    @property
    def is_digest(self) -> bool:
        return self.old_ref.startswith(DIGEST_PREFIX)

    @property
    def source(self) -> str:
        """Source image as ``repo:tag`` or ``repo@sha256:...``."""
        separator = "@" if self.is_digest else ":"
        return f"{self.repository}{separator}{self.old_ref}"

    @property
    def target(self) -> str:
        return f"{self.repository}:{self.new_tag}"


def _has_tag(repository: str) -> bool:
    # A colon before the last slash belongs to a registry host:port
    return ":" in repository.rsplit("/", 1)[-1]


def _validate_repository(repository: str) -> None:
    if not repository:
        raise InvalidReference("repository name is empty")
    if "@" in repository or _has_tag(repository):
        raise InvalidReference(f"repository {repository!r} must not include a tag or digest")
    if any(not part for part in repository.split("/")) or any(c.isspace() for c in repository):
        raise InvalidReference(f"invalid repository name {repository!r}")


def _validate_ref(ref: str) -> None:
    if ref.startswith(DIGEST_PREFIX):
        if not DIGEST_PATTERN.match(ref):
            raise InvalidReference(f"invalid digest {ref!r}")
    elif not TAG_PATTERN.match(ref):
        raise InvalidReference(f"invalid tag {ref!r}")


def split_image(image: str) -> Tuple[str, str]:
    """
    Split ``repo:tag`` or ``repo@sha256:...`` into repository and reference.

    Raises:
        InvalidReference: If no tag or digest is present
    """
    if "@" in image:
        repository, ref = image.split("@", 1)
        if not ref.startswith(DIGEST_PREFIX):
            raise InvalidReference(f"unsupported digest in {image!r}, expected sha256")
        return repository, ref

    if not _has_tag(image):
        raise InvalidReference(f"no tag given in {image!r}")
    repository, ref = image.rsplit(":", 1)
    return repository, ref


def parse_arguments(args: Sequence[str]) -> RetagRequest:
    """
    Parse command line arguments into a retag request.

    Args:
        args: ``[IMAGE, NEW_TAG]`` or ``[REPO, OLD_REF, NEW_TAG]``

    Returns:
        Validated RetagRequest

    Raises:
        InvalidReference: If the arguments are malformed
    """
    args = [arg.strip() for arg in args]
    if len(args) == 2:
        repository, old_ref = split_image(args[0])
        new_tag = args[1]
    elif len(args) == 3:
        repository, old_ref, new_tag = args
    else:
        raise InvalidReference(f"expected 2 or 3 arguments, got {len(args)}")

    _validate_repository(repository)
    _validate_ref(old_ref)
    if not TAG_PATTERN.match(new_tag):
        raise InvalidReference(f"invalid new tag {new_tag!r}")

    return RetagRequest(repository=repository, old_ref=old_ref, new_tag=new_tag)
