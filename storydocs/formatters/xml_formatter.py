"""
XML formatter.

Formats component data into XML-tag structure with tags like <component>,
<story>, <props>. Element bodies are left unescaped so code snippets stay
readable; attribute values are escaped.
"""

from typing import List

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


class XmlFormatter:
    """Format manifests as XML tags."""

    def _escape_attribute(self, text: str) -> str:
        """
        Escape XML special characters for use inside an attribute value.

        Args:
            text: Raw text

        Returns:
            XML-escaped text
        """
        if not text:
            return ""

        replacements = {
            '&': '&amp;',
            '<': '&lt;',
            '>': '&gt;',
            '"': '&quot;',
            "'": '&apos;'
        }

        result = text
        for char, replacement in replacements.items():
            result = result.replace(char, replacement)

        return result

    def _component_list_item(self, component: ComponentManifest) -> str:
        lines = [
            '<component>',
            f"<id>{component.id}</id>",
            f"<name>{component.name}</name>",
        ]

        summary = component_summary(component)
        if summary:
            lines.extend(['<summary>', summary, '</summary>'])

        lines.append('</component>')
        return '\n'.join(lines)

    def _doc_list_item(self, doc: Doc) -> str:
        lines = [
            '<doc>',
            f"<id>{doc.id}</id>",
            f"<title>{doc.title}</title>",
        ]

        summary = doc_summary(doc)
        if summary:
            lines.extend(['<summary>', summary, '</summary>'])

        lines.append('</doc>')
        return '\n'.join(lines)

    def _story(self, component: ComponentManifest, story: Story, include_component: bool = False) -> str:
        lines = ['<story>']
        if include_component:
            lines.append(f"<component_name>{component.name}</component_name>")
        lines.append(f"<story_name>{humanize_story_name(story.name)}</story_name>")

        if story.description:
            lines.extend(['<story_description>', story.description, '</story_description>'])

        lines.append('<story_code>')
        import_statement = story_import(component, story)
        if import_statement:
            lines.append(f"{import_statement}\n")
        lines.extend([story.snippet, '</story_code>', '</story>'])

        return '\n'.join(lines)

    def format_component(self, component: ComponentManifest) -> str:
        """Format a single component manifest."""
        parts = [
            '<component>',
            f"<id>{component.id}</id>",
            f"<name>{component.name}</name>",
        ]

        if component.description:
            parts.extend(['<description>', component.description, '</description>'])
        elif component.summary:
            parts.extend(['<summary>', component.summary, '</summary>'])

        for story in stories_with_snippets(component):
            parts.append(self._story(component, story))

        props = component_props(component)
        if props:
            parts.append('<props>')
            for prop_name, prop in props.items():
                parts.append('<prop>')
                parts.append(f"<prop_name>{prop_name}</prop_name>")

                if prop.description is not None:
                    parts.extend(['<prop_description>', prop.description, '</prop_description>'])

                if prop.type is not None:
                    parts.append(f"<prop_type>{prop.type}</prop_type>")

                if prop.required is not None:
                    parts.append(f"<prop_required>{str(prop.required).lower()}</prop_required>")

                if prop.default_value is not None:
                    parts.append(f"<prop_default>{prop.default_value}</prop_default>")

                parts.append('</prop>')
            parts.append('</props>')

        docs = attached_docs_with_content(component)
        if docs:
            parts.append('<docs>')
            for doc in docs:
                parts.extend(['<doc>', f"<doc_name>{doc.name}</doc_name>", '<content>', doc.content, '</content>', '</doc>'])
            parts.append('</docs>')

        parts.append('</component>')

        return '\n'.join(parts)

    def format_doc(self, doc: Doc) -> str:
        """Format a single doc entry."""
        return '\n'.join([
            '<doc>',
            f"<title>{doc.title}</title>",
            '<content>',
            doc.content,
            '</content>',
            '</doc>',
        ])

    def format_story(self, component: ComponentManifest, story_name: str) -> str:
        """Format one story of a component; empty when missing or without snippet."""
        story = find_story(component, story_name)
        if not story or not story.snippet:
            return ''
        return self._story(component, story, include_component=True)

    def format_list(self, manifests: AllManifests) -> str:
        """Format the components (and docs, if any) of one source as lists."""
        parts = ['<components>']
        for component in manifests.component_manifest.components.values():
            parts.append(self._component_list_item(component))
        parts.append('</components>')

        if manifests.docs_manifest is None:
            return '\n'.join(parts)

        parts.append('<docs>')
        for doc in manifests.docs_manifest.docs.values():
            parts.append(self._doc_list_item(doc))
        parts.append('</docs>')

        return '\n'.join(parts)

    def format_multi_source_list(self, results: List[MultiSourceManifestResult]) -> str:
        """Format per-source lists; failed sources show only their error."""
        parts = ['<sources>']

        for result in results:
            source_id = self._escape_attribute(result.source.id)
            source_title = self._escape_attribute(result.source.title)
            parts.append(f'<source id="{source_id}" title="{source_title}">')

            if result.error is not None:
                parts.append(f"<error>{result.error}</error>")
                parts.append('</source>')
                continue

            components = list(result.component_manifest.components.values())
            if components:
                parts.append('<components>')
                for component in components:
                    parts.append(self._component_list_item(component))
                parts.append('</components>')

            if result.docs_manifest and result.docs_manifest.docs:
                parts.append('<docs>')
                for doc in result.docs_manifest.docs.values():
                    parts.append(self._doc_list_item(doc))
                parts.append('</docs>')

            parts.append('</source>')

        parts.append('</sources>')

        return '\n'.join(parts)
