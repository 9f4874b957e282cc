"""
Manifest media types.

Single source of truth for the manifest types requested when reading a
manifest, most specific first.
"""
from __future__ import annotations

OCI_IMAGE_MANIFEST = "application/vnd.oci.image.manifest.v1+json"
OCI_IMAGE_INDEX = "application/vnd.oci.image.index.v1+json"
DOCKER_MANIFEST_LIST_V2 = "application/vnd.docker.distribution.manifest.list.v2+json"
DOCKER_MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"

# Order matters: it is the Accept header priority
ACCEPTED_MANIFEST_TYPES = (
    OCI_IMAGE_MANIFEST,
    OCI_IMAGE_INDEX,
    DOCKER_MANIFEST_LIST_V2,
    DOCKER_MANIFEST_V2,
)

MANIFEST_ACCEPT_HEADER = ", ".join(ACCEPTED_MANIFEST_TYPES)


__all__ = [
    "OCI_IMAGE_MANIFEST",
    "OCI_IMAGE_INDEX",
    "DOCKER_MANIFEST_LIST_V2",
    "DOCKER_MANIFEST_V2",
    "ACCEPTED_MANIFEST_TYPES",
    "MANIFEST_ACCEPT_HEADER",
]
