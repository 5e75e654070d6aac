"""
Storydocs - UI component documentation for LLM clients.

Fetches component and docs manifests (from local files, the endpoint the
request came in on, or several configured sources), validates them and
renders them as markdown or XML through an MCP server and a CLI.

Main Components:
- manifests: Providers, fetching/validation and multi-source aggregation
- formatters: Markdown and XML renderers, prop type and docs summary helpers
- mcp_servers: The stdio MCP server exposing the documentation tools
- cli: Typer command line interface

Usage:
    from storydocs import ServerSettings, StoryDocsServer

    settings = ServerSettings(component_manifest_path="./manifests/components.json")
    server = StoryDocsServer(settings)
    result = await server.list_all_documentation()
"""

from .schemas import (
    AllManifests,
    ComponentManifest,
    ComponentManifestMap,
    Doc,
    DocsManifestMap,
    ManifestSource,
    MultiSourceManifestResult,
    OutputFormat,
    ParsedProp,
    Story,
)
from .config import ConfigError, ServerSettings
from .mcp_servers import StoryDocsServer

__version__ = "0.1.0"

__all__ = [
    "AllManifests",
    "ComponentManifest",
    "ComponentManifestMap",
    "ConfigError",
    "Doc",
    "DocsManifestMap",
    "ManifestSource",
    "MultiSourceManifestResult",
    "OutputFormat",
    "ParsedProp",
    "ServerSettings",
    "Story",
    "StoryDocsServer",
]
