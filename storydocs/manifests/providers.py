"""
Manifest providers.

A provider is an async callable ``provider(request, path, source=None) -> str``
that returns the raw text of the manifest found at ``path`` (one of the two
canonical manifest paths) and raises on failure. Retries and timeouts are the
provider's business; the fetchers never retry.

Providers:
- default_manifest_provider: derives the manifest URL from the request URL
- create_file_manifest_provider: reads manifests from local files (or URLs)
- create_source_manifest_provider: resolves manifests per configured source
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import httpx

from storydocs.manifests.errors import ManifestErrorKind, ManifestGetError
from storydocs.schemas import ManifestSource

logger = logging.getLogger(__name__)

# Paths to the manifest files relative to the manifests root
COMPONENT_MANIFEST_PATH = "./manifests/components.json"
DOCS_MANIFEST_PATH = "./manifests/docs.json"

DEFAULT_TIMEOUT_SECONDS = 30.0

ManifestProvider = Callable[[Optional[Any], str, Optional[ManifestSource]], Awaitable[str]]


def _normalize_path(path: str) -> str:
    return re.sub(r"^\./", "", path)


def get_manifest_url_from_request(request: Any, path: str) -> str:
    """
    Build the manifest URL from a request by replacing its /mcp endpoint segment.

    Args:
        request: Any object with a ``url`` attribute (httpx.Request, starlette Request, ...)
        path: Manifest path, e.g. './manifests/components.json'

    Returns:
        Absolute manifest URL
    """
    url = httpx.URL(str(request.url))
    new_path = re.sub(r"/mcp/?$", f"/{_normalize_path(path)}", url.path)
    return str(url.copy_with(path=new_path))


def get_manifest_url_for_source(source: ManifestSource, path: str) -> str:
    """Build the manifest URL below a remote source's base URL."""
    return f"{source.url.rstrip('/')}/{_normalize_path(path)}"


async def _get_json_text(client: httpx.AsyncClient, url: str) -> str:
    """GET a URL and return its body, requiring a JSON content type."""
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise ManifestGetError(
            f"Failed to fetch manifest: {e}",
            url,
            cause=e,
            kind=ManifestErrorKind.FETCH_FAILURE,
        ) from e

    if not response.is_success:
        raise ManifestGetError(
            f"Failed to fetch manifest: {response.status_code} {response.reason_phrase}",
            url,
            kind=ManifestErrorKind.FETCH_FAILURE,
        )

    content_type = response.headers.get("content-type")
    if not content_type or "application/json" not in content_type:
        raise ManifestGetError(
            f"Invalid content type: expected application/json, got {content_type}",
            url,
            kind=ManifestErrorKind.CONTENT_TYPE_MISMATCH,
        )

    return response.text


def create_http_manifest_provider(
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ManifestProvider:
    """
    Create a provider that fetches manifests from the same origin as the request.

    Args:
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        timeout: Request timeout in seconds

    Returns:
        Manifest provider
    """

    async def provider(request: Optional[Any], path: str, source: Optional[ManifestSource] = None) -> str:
        if request is None:
            raise ManifestGetError(
                "Request is required when using the default manifest provider. "
                "You must either pass the original request forward to the server context, "
                "or set a custom manifest provider that doesn't need the request.",
                kind=ManifestErrorKind.FETCH_FAILURE,
            )

        manifest_url = get_manifest_url_from_request(request, path)
        logger.debug(f"Fetching manifest from {manifest_url}")
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            return await _get_json_text(client, manifest_url)

    return provider


default_manifest_provider = create_http_manifest_provider()


def create_file_manifest_provider(
    component_manifest_path: str,
    docs_manifest_path: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ManifestProvider:
    """
    Create a provider that reads manifests from fixed locations.

    Locations starting with http:// or https:// are fetched, anything else is
    read from the local file system.

    Args:
        component_manifest_path: Location of components.json
        docs_manifest_path: Location of docs.json (optional)
        transport: Optional httpx transport for URL locations

    Returns:
        Manifest provider ignoring the request
    """

    async def read_manifest(location: str) -> str:
        if location.startswith(("http://", "https://")):
            async with httpx.AsyncClient(transport=transport, timeout=DEFAULT_TIMEOUT_SECONDS) as client:
                return await _get_json_text(client, location)
        try:
            return await asyncio.to_thread(Path(location).read_text, encoding="utf-8")
        except OSError as e:
            raise ManifestGetError(
                f"Failed to read manifest file: {e}",
                location,
                cause=e,
                kind=ManifestErrorKind.FETCH_FAILURE,
            ) from e

    async def provider(request: Optional[Any], path: str, source: Optional[ManifestSource] = None) -> str:
        if path == DOCS_MANIFEST_PATH:
            if not docs_manifest_path:
                raise ManifestGetError(
                    "Docs manifest requested but no docs manifest path was configured",
                    kind=ManifestErrorKind.FETCH_FAILURE,
                )
            return await read_manifest(docs_manifest_path)

        return await read_manifest(component_manifest_path)

    return provider


def create_source_manifest_provider(
    local_provider: Optional[ManifestProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ManifestProvider:
    """
    Create a provider for multi-source mode.

    Remote sources are fetched below their base URL; the local source (no url),
    or a call without source, is delegated to ``local_provider``.

    Args:
        local_provider: Provider for the local source (default: request-derived HTTP)
        transport: Optional httpx transport
        timeout: Request timeout in seconds

    Returns:
        Manifest provider
    """
    local = local_provider or create_http_manifest_provider(transport=transport, timeout=timeout)

    async def provider(request: Optional[Any], path: str, source: Optional[ManifestSource] = None) -> str:
        if source is None or source.is_local:
            return await local(request, path, source)

        manifest_url = get_manifest_url_for_source(source, path)
        logger.debug(f"Fetching manifest for source '{source.id}' from {manifest_url}")
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            return await _get_json_text(client, manifest_url)

    return provider
