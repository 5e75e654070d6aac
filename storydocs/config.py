"""
Configuration for the storydocs server and CLI.

Settings come from environment variables (a .env file is loaded when present)
and can be overridden by CLI options.

Environment variables:
    STORYDOCS_FORMAT              Output format: markdown (default) or xml
    STORYDOCS_COMPONENT_MANIFEST  Path or URL of components.json
    STORYDOCS_DOCS_MANIFEST       Path or URL of docs.json
    STORYDOCS_MANIFEST_URL        Endpoint URL the manifests are derived from (e.g. http://localhost:6006/mcp)
    STORYDOCS_SOURCES_FILE        JSON file with a list of {id, title, url?} sources
    STORYDOCS_LOG_FILE            Log file (default: /tmp/storydocs_mcp_server.log)
    STORYDOCS_LOG_LEVEL           Log level (default: INFO)
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from storydocs.schemas import ManifestSource, OutputFormat
from storydocs.utils.schema_utils import format_validation_errors

load_dotenv(find_dotenv(usecwd=True))

DEFAULT_LOG_FILE = "/tmp/storydocs_mcp_server.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConfigError(ValueError):
    """Raised when the configuration is invalid."""


def load_sources(path: Path) -> List[ManifestSource]:
    """
    Load and validate a sources file.

    The file holds a JSON list of ``{"id", "title", "url"?}`` objects. A source
    without url is the local source.

    Args:
        path: Path to the sources JSON file

    Returns:
        Validated sources in file order

    Raises:
        ConfigError: If the file is missing, malformed or has duplicate ids
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Sources file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except ValueError as e:
        raise ConfigError(f"Sources file is not valid JSON: {path}: {e}") from e

    try:
        sources = TypeAdapter(List[ManifestSource]).validate_python(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid sources file {path}:\n" + "\n".join(format_validation_errors(e))) from e

    seen = set()
    for source in sources:
        if source.id in seen:
            raise ConfigError(f"Duplicate source id '{source.id}' in {path}")
        seen.add(source.id)

    return sources


class ServerSettings(BaseModel):
    """Resolved settings for serving documentation."""
    format: OutputFormat = Field(OutputFormat.MARKDOWN, description="Output format")
    component_manifest_path: Optional[str] = Field(None, description="Path or URL of components.json")
    docs_manifest_path: Optional[str] = Field(None, description="Path or URL of docs.json")
    manifest_url: Optional[str] = Field(None, description="Endpoint URL manifests are derived from")
    sources: List[ManifestSource] = Field(default_factory=list, description="Configured manifest sources")
    log_file: Optional[str] = Field(DEFAULT_LOG_FILE, description="Log file path")
    log_level: str = Field("INFO", description="Log level name")

    @property
    def is_multi_source(self) -> bool:
        """Multi-source mode is on when any configured source is remote."""
        return any(source.url for source in self.sources)

    @classmethod
    def from_env(cls, **overrides) -> "ServerSettings":
        """
        Build settings from the environment, applying non-None overrides.

        Args:
            **overrides: Field values (e.g. from CLI options); `sources_file`
                is accepted and loaded into `sources`

        Returns:
            ServerSettings
        """
        values = {
            "format": os.getenv("STORYDOCS_FORMAT") or OutputFormat.MARKDOWN,
            "component_manifest_path": os.getenv("STORYDOCS_COMPONENT_MANIFEST"),
            "docs_manifest_path": os.getenv("STORYDOCS_DOCS_MANIFEST"),
            "manifest_url": os.getenv("STORYDOCS_MANIFEST_URL"),
            "log_file": os.getenv("STORYDOCS_LOG_FILE", DEFAULT_LOG_FILE),
            "log_level": os.getenv("STORYDOCS_LOG_LEVEL", "INFO"),
        }
        sources_file = overrides.pop("sources_file", None) or os.getenv("STORYDOCS_SOURCES_FILE")

        values.update({key: value for key, value in overrides.items() if value is not None})
        if sources_file:
            values["sources"] = load_sources(Path(sources_file))

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError("Invalid configuration:\n" + "\n".join(format_validation_errors(e))) from e


def configure_logging(settings: ServerSettings) -> None:
    """Log to a file; stdout belongs to the MCP stdio transport."""
    handlers = [logging.FileHandler(settings.log_file)] if settings.log_file else [logging.NullHandler()]
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
