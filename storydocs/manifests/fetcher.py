"""
Manifest fetcher.

Resolves the component manifest (required) and the docs manifest (optional) of
one source through a manifest provider, then parses and validates both.

Both manifests are requested concurrently. A failing component manifest fails
the whole call with a ManifestGetError; a failing docs manifest is treated as
"no docs".
"""

import asyncio
import json
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel

from storydocs.manifests.errors import ManifestErrorKind, ManifestGetError
from storydocs.manifests.providers import (
    COMPONENT_MANIFEST_PATH,
    DOCS_MANIFEST_PATH,
    ManifestProvider,
    default_manifest_provider,
    get_manifest_url_for_source,
    get_manifest_url_from_request,
)
from storydocs.schemas import AllManifests, ComponentManifestMap, DocsManifestMap, ManifestSource
from storydocs.utils.schema_utils import validate_with_pydantic

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MISSING_MANIFEST_HINT = (
    "\nHint: The source at this URL may not publish a component manifest. "
    "Check that component manifest generation is enabled in its build."
)


def parse_manifest(json_string: str, model: Type[ModelT], name: str, url: str) -> ModelT:
    """
    Parse a JSON string and validate it against a manifest model.

    Args:
        json_string: Raw manifest text
        model: Pydantic model to validate against
        name: Manifest name used in error messages ('component' or 'docs')
        url: Manifest location used in error messages

    Returns:
        Validated model instance

    Raises:
        ManifestGetError: If the text is not JSON or does not match the schema
    """
    try:
        data = json.loads(json_string)
    except (TypeError, ValueError) as e:
        raise ManifestGetError(
            f"Failed to parse {name} manifest:\n{e}",
            url,
            kind=ManifestErrorKind.PARSE_FAILURE,
        ) from e

    manifest, errors = validate_with_pydantic(data, model)
    if errors:
        raise ManifestGetError(
            f"Failed to parse {name} manifest:\n" + "\n".join(errors),
            url,
            kind=ManifestErrorKind.SCHEMA_VIOLATION,
        )

    return manifest


def _manifest_url(request: Optional[Any], path: str, source: Optional[ManifestSource]) -> str:
    if request is not None:
        return get_manifest_url_from_request(request, path)
    if source is not None and source.url:
        return get_manifest_url_for_source(source, path)
    return "Unknown manifest source"


async def get_manifests(
    request: Optional[Any] = None,
    manifest_provider: Optional[ManifestProvider] = None,
    source: Optional[ManifestSource] = None,
) -> AllManifests:
    """
    Get the component and docs manifests of one source.

    Args:
        request: The incoming request (optional when a custom provider is used)
        manifest_provider: Optional custom provider (default: request-derived HTTP)
        source: Optional source for multi-source mode

    Returns:
        AllManifests with a non-empty component manifest

    Raises:
        ManifestGetError: If the component manifest cannot be resolved or is empty
    """
    provider = manifest_provider or default_manifest_provider

    component_result, docs_result = await asyncio.gather(
        provider(request, COMPONENT_MANIFEST_PATH, source),
        provider(request, DOCS_MANIFEST_PATH, source),
        return_exceptions=True,
    )

    component_url = _manifest_url(request, COMPONENT_MANIFEST_PATH, source)

    if isinstance(component_result, BaseException):
        is_404 = isinstance(component_result, ManifestGetError) and "404" in component_result.message
        hint = MISSING_MANIFEST_HINT if is_404 else ""
        logger.warning(f"Component manifest unavailable at {component_url}: {component_result}")
        kind = (
            component_result.kind
            if isinstance(component_result, ManifestGetError)
            else ManifestErrorKind.FETCH_FAILURE
        )
        raise ManifestGetError(
            f"Failed to get component manifest: {component_result}{hint}",
            component_url,
            cause=component_result,
            kind=kind,
        )

    component_manifest = parse_manifest(component_result, ComponentManifestMap, "component", component_url)

    if not component_manifest.components:
        raise ManifestGetError(
            "No components found in the manifest",
            component_url,
            kind=ManifestErrorKind.EMPTY_MANIFEST,
        )

    if isinstance(docs_result, BaseException):
        logger.debug(f"Docs manifest unavailable, continuing without docs: {docs_result}")
        return AllManifests(component_manifest=component_manifest)

    docs_url = _manifest_url(request, DOCS_MANIFEST_PATH, source)
    try:
        docs_manifest = parse_manifest(docs_result, DocsManifestMap, "docs", docs_url)
    except ManifestGetError as e:
        logger.warning(f"Ignoring invalid docs manifest at {docs_url}: {e}")
        return AllManifests(component_manifest=component_manifest)

    return AllManifests(component_manifest=component_manifest, docs_manifest=docs_manifest)
