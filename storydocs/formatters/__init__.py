"""
Output formatters for component documentation.

The output format is chosen at runtime: every helper takes an OutputFormat and
dispatches to the matching formatter.
"""

from typing import List, Union

from storydocs.schemas import AllManifests, ComponentManifest, Doc, MultiSourceManifestResult, OutputFormat

from .docs_summary import MAX_SUMMARY_LENGTH, extract_docs_summary, truncate_summary
from .markdown_formatter import MAX_STORIES_TO_SHOW, MarkdownFormatter
from .prop_types import parse_props, serialize_type
from .xml_formatter import XmlFormatter

FORMATTERS = {
    OutputFormat.MARKDOWN: MarkdownFormatter(),
    OutputFormat.XML: XmlFormatter(),
}


def get_formatter(format: Union[OutputFormat, str] = OutputFormat.MARKDOWN):
    """Return the formatter for a format name ('markdown' or 'xml')."""
    return FORMATTERS[OutputFormat(format)]


def format_component_manifest(component: ComponentManifest, format: Union[OutputFormat, str] = OutputFormat.MARKDOWN) -> str:
    return get_formatter(format).format_component(component)


def format_docs_manifest(doc: Doc, format: Union[OutputFormat, str] = OutputFormat.MARKDOWN) -> str:
    return get_formatter(format).format_doc(doc)


def format_story_documentation(
    component: ComponentManifest,
    story_name: str,
    format: Union[OutputFormat, str] = OutputFormat.MARKDOWN,
) -> str:
    return get_formatter(format).format_story(component, story_name)


def format_manifests_to_lists(manifests: AllManifests, format: Union[OutputFormat, str] = OutputFormat.MARKDOWN) -> str:
    return get_formatter(format).format_list(manifests)


def format_multi_source_manifests_to_lists(
    results: List[MultiSourceManifestResult],
    format: Union[OutputFormat, str] = OutputFormat.MARKDOWN,
) -> str:
    return get_formatter(format).format_multi_source_list(results)


__all__ = [
    "FORMATTERS",
    "MAX_STORIES_TO_SHOW",
    "MAX_SUMMARY_LENGTH",
    "MarkdownFormatter",
    "XmlFormatter",
    "extract_docs_summary",
    "format_component_manifest",
    "format_docs_manifest",
    "format_manifests_to_lists",
    "format_multi_source_manifests_to_lists",
    "format_story_documentation",
    "get_formatter",
    "parse_props",
    "serialize_type",
    "truncate_summary",
]
