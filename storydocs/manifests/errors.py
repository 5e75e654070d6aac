"""
Normalized error type for manifest resolution.

Every failure while getting a manifest (transport, content type, JSON, schema,
empty manifest) is raised as a single ManifestGetError carrying the kind of
failure, the URL it relates to and an optional underlying cause.
"""

from enum import Enum
from typing import Optional


class ManifestErrorKind(str, Enum):
    """Why a manifest could not be resolved."""
    FETCH_FAILURE = "fetch_failure"
    CONTENT_TYPE_MISMATCH = "content_type_mismatch"
    PARSE_FAILURE = "parse_failure"
    SCHEMA_VIOLATION = "schema_violation"
    EMPTY_MANIFEST = "empty_manifest"
    ALL_SOURCES_FAILED = "all_sources_failed"


class ManifestGetError(Exception):
    """Error raised when getting or parsing a manifest fails."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        kind: ManifestErrorKind = ManifestErrorKind.FETCH_FAILURE,
    ):
        super().__init__(message)
        self.message = message
        self.url = url or "No source URL provided"
        self.cause = cause
        self.kind = kind
        if cause is not None:
            self.__cause__ = cause


def error_to_text(error: BaseException) -> str:
    """
    Convert an error to the text returned to the tool caller.

    Args:
        error: Any exception raised while serving a tool call

    Returns:
        Error text, including the cause when one is attached
    """
    prefix = "Error getting manifest" if isinstance(error, ManifestGetError) else "Unexpected error"
    text = f"{prefix}: {error}"

    if isinstance(error, ManifestGetError) and error.cause is not None:
        text += f"\nCaused by: {error.cause}"

    return text
