"""
Markdown formatter.

Renders component manifests, docs and documentation lists as compact
markdown optimized for token usage.
"""

from typing import List, Optional

from storydocs.formatters.common import (
    attached_docs_with_content,
    component_props,
    component_summary,
    doc_summary,
    find_story,
    humanize_story_name,
    stories_with_snippets,
    story_import,
)
from storydocs.schemas import AllManifests, ComponentManifest, Doc, MultiSourceManifestResult, Story

# Stories shown in full when a component also has props; the rest are listed by name
MAX_STORIES_TO_SHOW = 3


class MarkdownFormatter:
    """Format manifests as markdown."""

    def _component_line(self, component: ComponentManifest) -> str:
        summary = component_summary(component)
        if summary:
            return f"- {component.name} ({component.id}): {summary}"
        return f"- {component.name} ({component.id})"

    def _doc_line(self, doc: Doc) -> str:
        summary = doc_summary(doc)
        return f"- {doc.title} ({doc.id})" + (f": {summary}" if summary else "")

    def _story_content(self, story: Story, import_statement: Optional[str]) -> List[str]:
        parts = []

        if story.description:
            parts.append(story.description)
            parts.append('')

        parts.append('```')
        if import_statement:
            parts.append(import_statement)
            parts.append('')
        parts.append(story.snippet or '')
        parts.append('```')

        return parts

    def format_component(self, component: ComponentManifest) -> str:
        """Format a single component manifest."""
        parts = [f"# {component.name}", '', f"ID: {component.id}", '']

        details = component.description or component.summary
        if details:
            parts.append(details)
            parts.append('')

        props = component_props(component)

        stories = stories_with_snippets(component)
        if stories:
            parts.append('## Stories')
            parts.append('')

            # All stories are shown in full when the component has no props
            to_show = stories[:MAX_STORIES_TO_SHOW] if props else stories
            remaining = stories[MAX_STORIES_TO_SHOW:] if props else []

            for story in to_show:
                parts.append(f"### {humanize_story_name(story.name)}")
                parts.append('')
                parts.extend(self._story_content(story, story_import(component, story)))
                parts.append('')

            if remaining:
                parts.append('### Other Stories')
                parts.append('')
                for story in remaining:
                    summary = component_summary(story)
                    suffix = f": {summary}" if summary else ''
                    parts.append(f"- {humanize_story_name(story.name)}{suffix}")
                parts.append('')

        if props:
            parts.append('## Props')
            parts.append('')
            parts.append('```')
            parts.append('export type Props = {')

            for prop_name, prop in props.items():
                if prop.description is not None:
                    parts.append('  /**')
                    parts.append(f"    {prop.description}")
                    parts.append('  */')

                optional = '' if prop.required is None or prop.required else '?'
                line = f"  {prop_name}{optional}: {prop.type or 'any'}"
                if prop.default_value is not None:
                    line += f" = {prop.default_value}"
                parts.append(line + ';')

            parts.append('}')
            parts.append('```')
            parts.append('')

        docs = attached_docs_with_content(component)
        if docs:
            parts.append('## Docs')
            parts.append('')
            for doc in docs:
                parts.append(f"### {doc.name}")
                parts.append('')
                parts.append(doc.content)
                parts.append('')

        return '\n'.join(parts).strip()

    def format_doc(self, doc: Doc) -> str:
        """Format a single doc entry."""
        return f"# {doc.title}\n\n{doc.content}"

    def format_story(self, component: ComponentManifest, story_name: str) -> str:
        """Format one story of a component; empty when missing or without snippet."""
        story = find_story(component, story_name)
        if not story or not story.snippet:
            return ''

        parts = [f"# {component.name} - {humanize_story_name(story.name)}", '']
        parts.extend(self._story_content(story, story_import(component, story)))
        return '\n'.join(parts).strip()

    def format_list(self, manifests: AllManifests) -> str:
        """Format the components (and docs, if any) of one source as lists."""
        parts = ['# Components', '']
        for component in manifests.component_manifest.components.values():
            parts.append(self._component_line(component))
        parts.append('')

        if manifests.docs_manifest is None:
            return '\n'.join(parts).strip()

        parts.append('# Docs')
        parts.append('')
        for doc in manifests.docs_manifest.docs.values():
            parts.append(self._doc_line(doc))

        return '\n'.join(parts).strip()

    def format_multi_source_list(self, results: List[MultiSourceManifestResult]) -> str:
        """Format per-source lists; failed sources show only their error."""
        parts = []

        for result in results:
            parts.append(f"# {result.source.title}")
            parts.append(f"id: {result.source.id}")
            parts.append('')

            if result.error is not None:
                parts.append(f"error: {result.error}")
                parts.append('')
                continue

            components = list(result.component_manifest.components.values())
            if components:
                parts.append('## Components')
                parts.append('')
                for component in components:
                    parts.append(self._component_line(component))
                parts.append('')

            if result.docs_manifest and result.docs_manifest.docs:
                parts.append('## Docs')
                parts.append('')
                for doc in result.docs_manifest.docs.values():
                    parts.append(self._doc_line(doc))
                parts.append('')

        return '\n'.join(parts).strip()
