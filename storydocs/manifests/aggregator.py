"""
Multi-source manifest aggregation.

Fans get_manifests out over every configured source in parallel and collects
one result per source, in input order. A failing source becomes an `error`
on its own result; only when every source fails is an exception raised.
"""

import asyncio
import logging
from typing import Any, List, Optional

from storydocs.manifests.errors import ManifestErrorKind, ManifestGetError
from storydocs.manifests.fetcher import get_manifests
from storydocs.manifests.providers import ManifestProvider
from storydocs.schemas import ComponentManifestMap, ManifestSource, MultiSourceManifestResult

logger = logging.getLogger(__name__)


def empty_component_manifest() -> ComponentManifestMap:
    """Valid, empty component manifest used for failed sources."""
    return ComponentManifestMap(v=1, components={})


async def get_multi_source_manifests(
    sources: List[ManifestSource],
    request: Optional[Any] = None,
    manifest_provider: Optional[ManifestProvider] = None,
) -> List[MultiSourceManifestResult]:
    """
    Get manifests from multiple sources.

    Args:
        sources: Source configurations
        request: The incoming request (used for the local source)
        manifest_provider: Provider receiving the source as third argument

    Returns:
        One MultiSourceManifestResult per source, in the order of `sources`

    Raises:
        ManifestGetError: If no source could be fetched successfully
    """
    if not sources:
        raise ManifestGetError(
            "No manifest sources configured",
            kind=ManifestErrorKind.ALL_SOURCES_FAILED,
        )

    settled = await asyncio.gather(
        *(get_manifests(request, manifest_provider, source) for source in sources),
        return_exceptions=True,
    )

    results = []
    for source, outcome in zip(sources, settled):
        if isinstance(outcome, BaseException):
            logger.warning(f"Source '{source.id}' failed: {outcome}")
            results.append(MultiSourceManifestResult(
                source=source,
                component_manifest=empty_component_manifest(),
                error=str(outcome),
            ))
        else:
            results.append(MultiSourceManifestResult(
                source=source,
                component_manifest=outcome.component_manifest,
                docs_manifest=outcome.docs_manifest,
            ))

    success_count = sum(1 for result in results if result.error is None)
    logger.info(f"Fetched manifests from {success_count}/{len(results)} sources")

    if success_count == 0:
        errors = "\n".join(f"- {result.source.title}: {result.error}" for result in results)
        raise ManifestGetError(
            f"Failed to fetch manifests from any source. Errors:\n{errors}",
            kind=ManifestErrorKind.ALL_SOURCES_FAILED,
        )

    return results
