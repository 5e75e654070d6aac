"""
Pydantic schemas for component documentation manifests.

This module is the single source of truth for the data models shared by the
manifest fetchers, the formatters and the MCP server.

Architecture:
- Story / ComponentManifest / ComponentManifestMap: the components manifest
- Doc / DocsManifestMap: the optional free-text docs manifest
- ManifestSource: one configured origin of manifests
- AllManifests / MultiSourceManifestResult: what the fetchers return
- ParsedProp: normalized prop type information produced by the formatters
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    """Supported output formats for rendered documentation."""
    MARKDOWN = "markdown"
    XML = "xml"


# ============================================================================
# MANIFEST SCHEMAS (wire format)
# ============================================================================

class Story(BaseModel):
    """A named usage example for a component."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Story identifier, e.g. 'WithIcon'")
    description: Optional[str] = Field(None, description="What the story demonstrates")
    summary: Optional[str] = Field(None, description="Short author-supplied summary")
    snippet: Optional[str] = Field(None, description="Code snippet rendering the story")
    import_: Optional[str] = Field(None, alias="import", description="Import statement for the snippet")


class Doc(BaseModel):
    """A free-text documentation entry."""
    id: str = Field(description="Unique doc ID")
    name: str = Field(description="Doc name")
    title: str = Field(description="Doc title")
    path: str = Field(description="Path of the source file")
    content: str = Field(description="Markup body (MDX, HTML or markdown)")
    summary: Optional[str] = Field(None, description="Short author-supplied summary")


class ComponentManifest(BaseModel):
    """Metadata, stories and prop types for a single UI component."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique, stable component ID")
    name: str = Field(description="Component name")
    path: Optional[str] = Field(None, description="Path of the component source file")
    description: Optional[str] = Field(None, description="Long description")
    summary: Optional[str] = Field(None, description="Short author-supplied summary")
    import_: Optional[str] = Field(None, alias="import", description="Import statement text")
    stories: Optional[List[Story]] = Field(None, description="Ordered usage stories")
    props: Optional[Any] = Field(
        None,
        validation_alias=AliasChoices("props", "reactDocgen", "reactDocgenTypescript"),
        description="Opaque upstream prop type descriptor tree",
    )
    docs: Optional[Dict[str, Doc]] = Field(None, description="Docs attached to this component")


class ComponentManifestMap(BaseModel):
    """Top-level structure of components.json."""
    model_config = ConfigDict(populate_by_name=True)

    version: int = Field(alias="v", description="Manifest format version")
    components: Dict[str, ComponentManifest] = Field(description="Components keyed by ID")


class DocsManifestMap(BaseModel):
    """Top-level structure of docs.json."""
    model_config = ConfigDict(populate_by_name=True)

    version: int = Field(alias="v", description="Manifest format version")
    docs: Dict[str, Doc] = Field(description="Docs keyed by ID")


# ============================================================================
# SOURCE & RESULT SCHEMAS
# ============================================================================

class ManifestSource(BaseModel):
    """One configured origin of manifests. A source without url is the local one."""
    id: str = Field(description="Source ID, unique within a source list")
    title: str = Field(description="Human readable source title")
    url: Optional[str] = Field(None, description="Base URL of a remote source")

    @property
    def is_local(self) -> bool:
        return not self.url


class AllManifests(BaseModel):
    """Manifests resolved from a single source."""
    component_manifest: ComponentManifestMap
    docs_manifest: Optional[DocsManifestMap] = None


class MultiSourceManifestResult(BaseModel):
    """
    Result for one source in multi-source mode.

    Always present, even when the source failed: in that case `error` is set
    and `component_manifest` is an empty manifest.
    """
    source: ManifestSource
    component_manifest: ComponentManifestMap
    docs_manifest: Optional[DocsManifestMap] = None
    error: Optional[str] = None


# ============================================================================
# FORMATTER SCHEMAS
# ============================================================================

class ParsedProp(BaseModel):
    """Normalized prop information, independent of the upstream docgen shape."""
    description: Optional[str] = None
    type: Optional[str] = None
    default_value: Optional[str] = None
    required: Optional[bool] = None
