"""MCP servers for component documentation."""

from .docs_server import (
    GetDocumentationArgs,
    GetStoryDocumentationArgs,
    ListAllDocumentationArgs,
    StoryDocsServer,
    ToolError,
    ToolResult,
    build_manifest_provider,
)

__all__ = [
    "GetDocumentationArgs",
    "GetStoryDocumentationArgs",
    "ListAllDocumentationArgs",
    "StoryDocsServer",
    "ToolError",
    "ToolResult",
    "build_manifest_provider",
]
