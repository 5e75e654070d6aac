"""
Storydocs CLI - UI component documentation for LLMs

A command-line tool for serving component documentation by:
1. Running the MCP server over stdio
2. Listing components and docs entries of one or more sources
3. Printing the documentation of a component, docs entry or story
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from storydocs import __version__
from storydocs.config import ConfigError, ServerSettings, configure_logging
from storydocs.mcp_servers.docs_server import (
    GetDocumentationArgs,
    GetStoryDocumentationArgs,
    StoryDocsServer,
    ToolResult,
)

app = typer.Typer(
    name="storydocs",
    help="UI Component Documentation for LLMs",
    add_completion=False,
)

console = Console()

COMPONENT_MANIFEST_OPTION = typer.Option(
    None,
    "--component-manifest",
    "-c",
    help="Path or URL of components.json",
)
DOCS_MANIFEST_OPTION = typer.Option(
    None,
    "--docs-manifest",
    "-d",
    help="Path or URL of docs.json",
)
MANIFEST_URL_OPTION = typer.Option(
    None,
    "--manifest-url",
    "-u",
    help="Endpoint URL the manifests are derived from (e.g. http://localhost:6006/mcp)",
)
SOURCES_FILE_OPTION = typer.Option(
    None,
    "--sources-file",
    "-s",
    help="JSON file listing documentation sources ([{id, title, url?}])",
)
FORMAT_OPTION = typer.Option(
    None,
    "--format",
    "-f",
    help="Output format: markdown or xml (default: markdown)",
)
SOURCE_ID_OPTION = typer.Option(
    None,
    "--source-id",
    help="Documentation source to query (required with several sources)",
)


def _load_settings(
    component_manifest: Optional[str],
    docs_manifest: Optional[str],
    manifest_url: Optional[str],
    sources_file: Optional[str],
    format: Optional[str],
) -> ServerSettings:
    try:
        return ServerSettings.from_env(
            component_manifest_path=component_manifest,
            docs_manifest_path=docs_manifest,
            manifest_url=manifest_url,
            sources_file=sources_file,
            format=format,
        )
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1)


def _print_result(result: ToolResult):
    """Print tool output as-is, or the error in red and exit non-zero."""
    if result.is_error:
        console.print(f"[red]❌ {escape(result.text)}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(1)
    # Documentation contains brackets (TypeScript, JSX) that must not be read as markup
    console.print(result.text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def serve(
    component_manifest: Optional[str] = COMPONENT_MANIFEST_OPTION,
    docs_manifest: Optional[str] = DOCS_MANIFEST_OPTION,
    manifest_url: Optional[str] = MANIFEST_URL_OPTION,
    sources_file: Optional[str] = SOURCES_FILE_OPTION,
    format: Optional[str] = FORMAT_OPTION,
):
    """
    Run the MCP documentation server over stdio.

    Logs go to the log file (STORYDOCS_LOG_FILE); stdout carries the MCP protocol.

    Example:
        storydocs serve -c ./manifests/components.json -d ./manifests/docs.json
    """
    settings = _load_settings(component_manifest, docs_manifest, manifest_url, sources_file, format)
    configure_logging(settings)

    try:
        asyncio.run(StoryDocsServer(settings).run())
    except KeyboardInterrupt:
        raise typer.Exit(0)


@app.command("list")
def list_documentation(
    component_manifest: Optional[str] = COMPONENT_MANIFEST_OPTION,
    docs_manifest: Optional[str] = DOCS_MANIFEST_OPTION,
    manifest_url: Optional[str] = MANIFEST_URL_OPTION,
    sources_file: Optional[str] = SOURCES_FILE_OPTION,
    format: Optional[str] = FORMAT_OPTION,
):
    """
    List all components and docs entries.

    Example:
        storydocs list -u http://localhost:6006/mcp
    """
    settings = _load_settings(component_manifest, docs_manifest, manifest_url, sources_file, format)
    configure_logging(settings)

    server = StoryDocsServer(settings)
    _print_result(asyncio.run(server.list_all_documentation()))


@app.command()
def get(
    id: str = typer.Argument(..., help="Component or docs entry ID"),
    source_id: Optional[str] = SOURCE_ID_OPTION,
    component_manifest: Optional[str] = COMPONENT_MANIFEST_OPTION,
    docs_manifest: Optional[str] = DOCS_MANIFEST_OPTION,
    manifest_url: Optional[str] = MANIFEST_URL_OPTION,
    sources_file: Optional[str] = SOURCES_FILE_OPTION,
    format: Optional[str] = FORMAT_OPTION,
):
    """
    Print the documentation of a component or docs entry.

    Example:
        storydocs get button -c ./manifests/components.json
    """
    settings = _load_settings(component_manifest, docs_manifest, manifest_url, sources_file, format)
    configure_logging(settings)

    server = StoryDocsServer(settings)
    args = GetDocumentationArgs(id=id, source_id=source_id)
    _print_result(asyncio.run(server.get_documentation(args)))


@app.command()
def story(
    component_id: str = typer.Argument(..., help="Component ID"),
    story_name: str = typer.Argument(..., help="Story name (e.g. Primary)"),
    source_id: Optional[str] = SOURCE_ID_OPTION,
    component_manifest: Optional[str] = COMPONENT_MANIFEST_OPTION,
    docs_manifest: Optional[str] = DOCS_MANIFEST_OPTION,
    manifest_url: Optional[str] = MANIFEST_URL_OPTION,
    sources_file: Optional[str] = SOURCES_FILE_OPTION,
    format: Optional[str] = FORMAT_OPTION,
):
    """
    Print the documentation of one story of a component.

    Example:
        storydocs story button Primary -c ./manifests/components.json
    """
    settings = _load_settings(component_manifest, docs_manifest, manifest_url, sources_file, format)
    configure_logging(settings)

    server = StoryDocsServer(settings)
    args = GetStoryDocumentationArgs(component_id=component_id, story_name=story_name, source_id=source_id)
    _print_result(asyncio.run(server.get_story_documentation(args)))


@app.command()
def version():
    """Show version information."""
    console.print(Panel.fit(
        f"[bold cyan]Storydocs[/bold cyan] v{__version__}\n"
        "UI Component Documentation for LLMs",
        border_style="cyan"
    ))


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
