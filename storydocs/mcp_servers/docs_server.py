#!/usr/bin/env python3
"""
Storydocs MCP Server

Serves UI component documentation (component manifests with stories and prop
types, plus free-text docs) to LLM clients in markdown or XML.

Tools:
1. list-all-documentation - List all components and docs entries (per source in multi-source mode)
2. get-documentation - Get documentation for one component or docs entry
3. get-documentation-for-story - Get documentation for one story of a component

Every tool call re-fetches and re-validates the manifests.

Usage:
    # Start server (stdio mode) from local manifest files
    python -m storydocs.mcp_servers.docs_server \\
        --component-manifest ./manifests/components.json \\
        --docs-manifest ./manifests/docs.json

    # Or via CLI
    storydocs serve --manifest-url http://localhost:6006/mcp
"""

import logging
import sys
from typing import Any, Awaitable, Callable, List, Optional, Tuple

import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import BaseModel, ConfigDict, Field

from storydocs.config import ConfigError, ServerSettings, configure_logging
from storydocs.formatters import (
    MAX_STORIES_TO_SHOW,
    format_component_manifest,
    format_docs_manifest,
    format_manifests_to_lists,
    format_multi_source_manifests_to_lists,
    format_story_documentation,
)
from storydocs.manifests import (
    ManifestProvider,
    create_file_manifest_provider,
    create_source_manifest_provider,
    default_manifest_provider,
    error_to_text,
    get_manifests,
    get_multi_source_manifests,
)
from storydocs.schemas import ManifestSource

logger = logging.getLogger(__name__)

LIST_TOOL_NAME = "list-all-documentation"
GET_TOOL_NAME = "get-documentation"
GET_STORY_TOOL_NAME = "get-documentation-for-story"

Hook = Callable[..., Awaitable[None]]


# ============================================================================
# PYDANTIC MODELS FOR TOOL ARGUMENTS
# ============================================================================

class ListAllDocumentationArgs(BaseModel):
    """Arguments for list-all-documentation tool."""
    pass  # No arguments needed


class GetDocumentationArgs(BaseModel):
    """Arguments for get-documentation tool."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description='The component or docs entry ID (e.g., "button")')
    source_id: Optional[str] = Field(
        None,
        alias="sourceId",
        description="ID of the documentation source (required when several sources are configured)",
    )


class GetStoryDocumentationArgs(BaseModel):
    """Arguments for get-documentation-for-story tool."""
    model_config = ConfigDict(populate_by_name=True)

    component_id: str = Field(..., alias="componentId", description='The component ID (e.g., "button")')
    story_name: str = Field(..., alias="storyName", description='The story name (e.g., "Primary")')
    source_id: Optional[str] = Field(
        None,
        alias="sourceId",
        description="ID of the documentation source (required when several sources are configured)",
    )


class ToolResult(BaseModel):
    """Text returned by a tool handler, flagged when it describes an error."""
    text: str
    is_error: bool = False


class ToolError(Exception):
    """Raised inside call_tool so the MCP layer marks the result as an error."""


def build_manifest_provider(settings: ServerSettings) -> ManifestProvider:
    """
    Pick the manifest provider matching the settings.

    Local manifest files win over the request-derived default; in multi-source
    mode remote sources are fetched by URL and the local one uses the above.
    """
    local = None
    if settings.component_manifest_path:
        local = create_file_manifest_provider(
            settings.component_manifest_path,
            settings.docs_manifest_path,
        )

    if settings.is_multi_source:
        return create_source_manifest_provider(local_provider=local)

    return local or default_manifest_provider


# ============================================================================
# STORYDOCS SERVER
# ============================================================================

class StoryDocsServer:
    """
    MCP Server for component documentation.

    Provides tools for:
    - Listing components and docs
    - Component / docs entry documentation
    - Single story documentation
    """

    def __init__(
        self,
        settings: ServerSettings,
        manifest_provider: Optional[ManifestProvider] = None,
        request: Optional[Any] = None,
        on_list_all_documentation: Optional[Hook] = None,
        on_get_documentation: Optional[Hook] = None,
    ):
        """
        Initialize the server.

        Args:
            settings: Resolved server settings
            manifest_provider: Custom provider (default: derived from settings)
            request: Request context handed to the provider (default: built from settings.manifest_url)
            on_list_all_documentation: Async hook called after a successful list
            on_get_documentation: Async hook called after every get-documentation lookup
        """
        self.settings = settings
        self.manifest_provider = manifest_provider or build_manifest_provider(settings)
        if request is None and settings.manifest_url:
            request = httpx.Request("GET", settings.manifest_url)
        self.request = request
        self.on_list_all_documentation = on_list_all_documentation
        self.on_get_documentation = on_get_documentation

        self.server = Server("storydocs")
        self._register_tools()

        logger.info(
            f"Storydocs server initialized (format={settings.format.value}, "
            f"multi_source={settings.is_multi_source}, sources={len(settings.sources)})"
        )

    @property
    def is_multi_source(self) -> bool:
        return self.settings.is_multi_source

    def _register_tools(self):
        """Register all MCP tools."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return self.tool_definitions()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Any) -> List[TextContent]:
            """Route tool calls to appropriate handlers."""
            logger.info(f"Tool called: {name} with args: {arguments}")
            arguments = arguments or {}

            if name == LIST_TOOL_NAME:
                result = await self.list_all_documentation()
            elif name == GET_TOOL_NAME:
                result = await self.get_documentation(GetDocumentationArgs.model_validate(arguments))
            elif name == GET_STORY_TOOL_NAME:
                result = await self.get_story_documentation(GetStoryDocumentationArgs.model_validate(arguments))
            else:
                raise ValueError(f"Unknown tool: {name}")

            if result.is_error:
                raise ToolError(result.text)

            return [TextContent(type="text", text=result.text)]

    def tool_definitions(self) -> List[Tool]:
        """Describe the tools; the source selector is only exposed in multi-source mode."""
        get_schema = GetDocumentationArgs.model_json_schema(by_alias=True)
        story_schema = GetStoryDocumentationArgs.model_json_schema(by_alias=True)
        if self.is_multi_source:
            available = ", ".join(source.id for source in self.settings.sources)
            for schema in (get_schema, story_schema):
                schema["properties"]["sourceId"]["description"] = (
                    f"ID of the documentation source, required. Available sources: {available}"
                )
        else:
            get_schema["properties"].pop("sourceId", None)
            story_schema["properties"].pop("sourceId", None)

        return [
            Tool(
                name=LIST_TOOL_NAME,
                description=(
                    "List all available UI components and documentation entries. "
                    "Use this first to find the IDs accepted by the other tools."
                ),
                inputSchema=ListAllDocumentationArgs.model_json_schema(),
            ),
            Tool(
                name=GET_TOOL_NAME,
                description=(
                    "Get documentation for a UI component or docs entry. "
                    f"Returns up to {MAX_STORIES_TO_SHOW} stories with code snippets showing how props are used, "
                    "plus TypeScript prop definitions. Call this before using a component to avoid "
                    "hallucinating prop names, types, or valid combinations. If the stories shown don't "
                    f"cover the prop you need, use the {GET_STORY_TOOL_NAME} tool for a specific story."
                ),
                inputSchema=get_schema,
            ),
            Tool(
                name=GET_STORY_TOOL_NAME,
                description=(
                    "Get detailed documentation for a specific story variant of a UI component. "
                    "Use this when you need to see the implementation of a specific story."
                ),
                inputSchema=story_schema,
            ),
        ]

    # ========================================================================
    # TOOL HANDLERS
    # ========================================================================

    def _resolve_source(self, source_id: Optional[str]) -> Tuple[Optional[ManifestSource], Optional[ToolResult]]:
        """
        Resolve the source selector in multi-source mode.

        Returns:
            (source, None) on success, (None, error result) otherwise.
            Outside multi-source mode always (None, None).
        """
        if not self.is_multi_source:
            return None, None

        available = ", ".join(source.id for source in self.settings.sources)
        if not source_id:
            return None, ToolResult(
                text=(
                    f"sourceId is required. Available sources: {available}. "
                    f"Use the {LIST_TOOL_NAME} tool to see available sources."
                ),
                is_error=True,
            )

        for source in self.settings.sources:
            if source.id == source_id:
                return source, None

        return None, ToolResult(
            text=(
                f'Documentation source not found: "{source_id}". Available sources: {available}. '
                f"Use the {LIST_TOOL_NAME} tool to see available sources."
            ),
            is_error=True,
        )

    async def list_all_documentation(self) -> ToolResult:
        """
        Handle list-all-documentation tool call.

        Returns:
            Lists of components and docs, grouped per source in multi-source mode
        """
        try:
            fmt = self.settings.format
            if self.is_multi_source:
                results = await get_multi_source_manifests(
                    self.settings.sources,
                    self.request,
                    self.manifest_provider,
                )
                text = format_multi_source_manifests_to_lists(results, fmt)
                manifests = results
            else:
                manifests = await get_manifests(self.request, self.manifest_provider)
                text = format_manifests_to_lists(manifests, fmt)

            if self.on_list_all_documentation:
                await self.on_list_all_documentation(settings=self.settings, manifests=manifests)

            return ToolResult(text=text)

        except Exception as e:
            logger.error(f"Error in tool {LIST_TOOL_NAME}: {e}", exc_info=True)
            return ToolResult(text=error_to_text(e), is_error=True)

    async def get_documentation(self, args: GetDocumentationArgs) -> ToolResult:
        """
        Handle get-documentation tool call.

        Args:
            args: Tool arguments (id, sourceId)

        Returns:
            Component documentation, else docs entry documentation
        """
        source, error = self._resolve_source(args.source_id)
        if error:
            return error

        try:
            manifests = await get_manifests(self.request, self.manifest_provider, source)

            component = manifests.component_manifest.components.get(args.id)
            doc = manifests.docs_manifest.docs.get(args.id) if manifests.docs_manifest else None

            if component is None and doc is None:
                suffix = f' in source "{args.source_id}"' if args.source_id else ""
                if self.on_get_documentation:
                    await self.on_get_documentation(settings=self.settings, args=args)
                return ToolResult(
                    text=(
                        f'Component or Docs Entry not found: "{args.id}"{suffix}. '
                        f"Use the {LIST_TOOL_NAME} tool to see available components and documentation entries."
                    ),
                    is_error=True,
                )

            if component is not None:
                text = format_component_manifest(component, self.settings.format)
                found = component
            else:
                text = format_docs_manifest(doc, self.settings.format)
                found = doc

            if self.on_get_documentation:
                await self.on_get_documentation(
                    settings=self.settings,
                    args=args,
                    found_documentation=found,
                    result_text=text,
                )

            return ToolResult(text=text)

        except Exception as e:
            logger.error(f"Error in tool {GET_TOOL_NAME}: {e}", exc_info=True)
            return ToolResult(text=error_to_text(e), is_error=True)

    async def get_story_documentation(self, args: GetStoryDocumentationArgs) -> ToolResult:
        """
        Handle get-documentation-for-story tool call.

        Args:
            args: Tool arguments (componentId, storyName, sourceId)

        Returns:
            Documentation for the requested story
        """
        source, error = self._resolve_source(args.source_id)
        if error:
            return error

        try:
            manifests = await get_manifests(self.request, self.manifest_provider, source)

            component = manifests.component_manifest.components.get(args.component_id)
            if component is None:
                return ToolResult(
                    text=(
                        f'Component not found: "{args.component_id}". '
                        f"Use the {LIST_TOOL_NAME} tool to see available components."
                    ),
                    is_error=True,
                )

            story_names = [story.name for story in component.stories or []]
            if args.story_name not in story_names:
                available = ", ".join(story_names) or "none"
                return ToolResult(
                    text=(
                        f'Story "{args.story_name}" not found for component "{args.component_id}". '
                        f"Available stories: {available}"
                    ),
                    is_error=True,
                )

            text = format_story_documentation(component, args.story_name, self.settings.format)
            if not text:
                return ToolResult(
                    text=f'Story "{args.story_name}" of component "{args.component_id}" has no code snippet.',
                    is_error=True,
                )

            return ToolResult(text=text)

        except Exception as e:
            logger.error(f"Error in tool {GET_STORY_TOOL_NAME}: {e}", exc_info=True)
            return ToolResult(text=error_to_text(e), is_error=True)

    # ========================================================================
    # SERVER LIFECYCLE
    # ========================================================================

    async def run(self):
        """Run the MCP server (stdio mode)."""
        logger.info("Starting storydocs MCP server (stdio mode)")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def main():
    """Main entry point for the storydocs MCP server."""
    import argparse
    import asyncio

    parser = argparse.ArgumentParser(
        description="Storydocs MCP Server - Provides LLM access to UI component documentation"
    )
    parser.add_argument("--component-manifest", type=str, default=None, help="Path or URL of components.json")
    parser.add_argument("--docs-manifest", type=str, default=None, help="Path or URL of docs.json")
    parser.add_argument("--manifest-url", type=str, default=None, help="Endpoint URL manifests are derived from")
    parser.add_argument("--sources-file", type=str, default=None, help="JSON file listing documentation sources")
    parser.add_argument(
        "--format",
        type=str,
        default=None,
        choices=["markdown", "xml"],
        help="Output format (default: markdown)"
    )

    args = parser.parse_args()

    try:
        settings = ServerSettings.from_env(
            component_manifest_path=args.component_manifest,
            docs_manifest_path=args.docs_manifest,
            manifest_url=args.manifest_url,
            sources_file=args.sources_file,
            format=args.format,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings)

    try:
        server = StoryDocsServer(settings)
        asyncio.run(server.run())
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
