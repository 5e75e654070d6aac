"""Manifest resolution: providers, single-source fetching and multi-source aggregation."""

from .errors import ManifestErrorKind, ManifestGetError, error_to_text
from .providers import (
    COMPONENT_MANIFEST_PATH,
    DOCS_MANIFEST_PATH,
    ManifestProvider,
    create_file_manifest_provider,
    create_http_manifest_provider,
    create_source_manifest_provider,
    default_manifest_provider,
    get_manifest_url_from_request,
)
from .fetcher import get_manifests, parse_manifest
from .aggregator import get_multi_source_manifests

__all__ = [
    "COMPONENT_MANIFEST_PATH",
    "DOCS_MANIFEST_PATH",
    "ManifestErrorKind",
    "ManifestGetError",
    "ManifestProvider",
    "create_file_manifest_provider",
    "create_http_manifest_provider",
    "create_source_manifest_provider",
    "default_manifest_provider",
    "error_to_text",
    "get_manifest_url_from_request",
    "get_manifests",
    "get_multi_source_manifests",
    "parse_manifest",
]
