"""
Plain-text summaries for markup-heavy doc bodies (MDX, JSX, HTML).
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Maximum length of a summary before it is truncated with an ellipsis
MAX_SUMMARY_LENGTH = 90

# Upper bound for the fixed-point stripping loops (nesting depth)
MAX_STRIP_PASSES = 64

IMPORT_STATEMENT = re.compile(r"^\s*import\s+(?:[\s\S]*?from\s+)?['\"][^'\"]+['\"];?\s*$", re.MULTILINE)
INNERMOST_EXPRESSION = re.compile(r"\{[^{}]*\}")
SELF_CLOSING_TAG = re.compile(r"<[^>]+/>")
MATCHED_ELEMENT = re.compile(r"<(\w+)[^>]*>([\s\S]*?)</\1>")
ANY_TAG = re.compile(r"<[^>]+>")
WHITESPACE = re.compile(r"\s+")


class _PassLimitExceeded(Exception):
    pass


def _strip_to_fixed_point(pattern: re.Pattern, replacement: str, text: str) -> str:
    # One extra pass confirms the fixed point of content nested exactly MAX_STRIP_PASSES deep
    for _ in range(MAX_STRIP_PASSES + 1):
        stripped = pattern.sub(replacement, text)
        if stripped == text:
            return stripped
        text = stripped
    raise _PassLimitExceeded()


def truncate_summary(text: str, max_length: int = MAX_SUMMARY_LENGTH) -> str:
    """Truncate text to max_length characters plus '...'; shorter text is returned as is."""
    if len(text) > max_length:
        return f"{text[:max_length]}..."
    return text


def extract_docs_summary(content: str) -> Optional[str]:
    """
    Extract a short plain-text summary from MDX content.

    The summary is created by:
    1. Removing import statements
    2. Removing {expressions} and {/* comments */}, innermost first
    3. Removing self-closing tags
    4. Unwrapping matched elements, innermost first, keeping their text
    5. Removing any remaining tags
    6. Collapsing whitespace and truncating to MAX_SUMMARY_LENGTH

    Args:
        content: The MDX content string

    Returns:
        Summary string, or None if no meaningful text content is found
        (including content nested deeper than MAX_STRIP_PASSES)
    """
    result = IMPORT_STATEMENT.sub("", content)

    try:
        result = _strip_to_fixed_point(INNERMOST_EXPRESSION, "", result)
        result = SELF_CLOSING_TAG.sub("", result)
        result = _strip_to_fixed_point(MATCHED_ELEMENT, r"\2", result)
    except _PassLimitExceeded:
        logger.debug(f"Nesting deeper than {MAX_STRIP_PASSES} levels, no summary extracted")
        return None

    result = ANY_TAG.sub("", result)
    result = WHITESPACE.sub(" ", result).strip()

    if not result:
        return None

    return truncate_summary(result)
