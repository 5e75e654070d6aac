"""Rendering rules shared by the Markdown and XML formatters."""

import re
from typing import Dict, List, Optional

from storydocs.formatters.docs_summary import extract_docs_summary, truncate_summary
from storydocs.formatters.prop_types import parse_props
from storydocs.schemas import ComponentManifest, Doc, ParsedProp, Story


def humanize_story_name(name: str) -> str:
    """Convert a PascalCase story name to words: 'WithIcon' -> 'With Icon'."""
    return re.sub(r"([A-Z])", r" \1", name).strip()


def component_summary(item) -> Optional[str]:
    """
    Summary for list views: an explicit summary wins over a truncated description.

    Works for anything with optional `summary` and `description` attributes
    (components and stories).
    """
    if item.summary is not None:
        return item.summary
    if item.description:
        return truncate_summary(item.description)
    return None


def doc_summary(doc: Doc) -> Optional[str]:
    """Summary for a doc: explicit summary or one extracted from its content."""
    if doc.summary is not None:
        return doc.summary
    return extract_docs_summary(doc.content)


def stories_with_snippets(component: ComponentManifest) -> List[Story]:
    return [story for story in component.stories or [] if story.snippet]


def find_story(component: ComponentManifest, story_name: str) -> Optional[Story]:
    for story in component.stories or []:
        if story.name == story_name:
            return story
    return None


def story_import(component: ComponentManifest, story: Story) -> Optional[str]:
    return story.import_ or component.import_


def component_props(component: ComponentManifest) -> Dict[str, ParsedProp]:
    if component.props is None:
        return {}
    return parse_props(component.props)


def attached_docs_with_content(component: ComponentManifest) -> List[Doc]:
    return [doc for doc in (component.docs or {}).values() if doc.content.strip()]
