"""
Tests for formatters/markdown_formatter.py
==========================================

Tests for markdown rendering of components, docs, stories and lists.
"""

import pytest

from storydocs.formatters.markdown_formatter import MAX_STORIES_TO_SHOW, MarkdownFormatter
from storydocs.schemas import (
    AllManifests,
    ComponentManifest,
    ComponentManifestMap,
    Doc,
    DocsManifestMap,
    ManifestSource,
    MultiSourceManifestResult,
)


@pytest.fixture
def formatter():
    return MarkdownFormatter()


@pytest.fixture
def manifests(component_manifest_data, docs_manifest_data):
    return AllManifests(
        component_manifest=ComponentManifestMap.model_validate(component_manifest_data),
        docs_manifest=DocsManifestMap.model_validate(docs_manifest_data),
    )


@pytest.fixture
def button(manifests):
    return manifests.component_manifest.components["button"]


class TestFormatComponent:
    """Tests for MarkdownFormatter.format_component."""

    def test_header_and_description(self, formatter, button):
        output = formatter.format_component(button)
        assert output.startswith("# Button\n\nID: button\n\nA button triggers an action when clicked.")

    def test_stories(self, formatter, button):
        output = formatter.format_component(button)
        assert "## Stories" in output
        assert "### Primary\n\nThe main call to action.\n\n```\nimport { Button } from '@acme/ui';\n\n" in output
        assert "### With Icon" in output
        assert '<Button icon="star">Star</Button>' in output

    def test_props(self, formatter, button):
        output = formatter.format_component(button)
        assert "## Props" in output
        assert "export type Props = {" in output
        assert "  /**\n    Visual style\n  */" in output
        assert "  variant?: 'primary' | 'secondary' = 'primary';" in output
        assert "  onClick: () => void;" in output

    def test_minimal_component(self, formatter):
        """Test that components without stories and props omit those sections."""
        component = ComponentManifest(id="card", name="Card")
        assert formatter.format_component(component) == "# Card\n\nID: card"

    def test_summary_when_no_description(self, formatter):
        component = ComponentManifest(id="card", name="Card", summary="Groups content.")
        assert formatter.format_component(component).endswith("Groups content.")

    def test_stories_without_snippets_are_skipped(self, formatter):
        component = ComponentManifest.model_validate({
            "id": "card",
            "name": "Card",
            "stories": [{"name": "Default"}],
        })
        assert "## Stories" not in formatter.format_component(component)

    def test_story_import_overrides_component_import(self, formatter):
        component = ComponentManifest.model_validate({
            "id": "card",
            "name": "Card",
            "import": "import { Card } from 'ui';",
            "stories": [{"name": "Default", "snippet": "<Card />", "import": "import Card from 'ui/card';"}],
        })
        output = formatter.format_component(component)
        assert "import Card from 'ui/card';" in output
        assert "import { Card } from 'ui';" not in output

    def test_other_stories_when_props_present(self, formatter):
        stories = [
            {"name": f"Story{i}", "snippet": f"<Card n={{{i}}} />", "summary": f"Variant {i}"}
            for i in range(MAX_STORIES_TO_SHOW + 2)
        ]
        component = ComponentManifest.model_validate({
            "id": "card",
            "name": "Card",
            "stories": stories,
            "props": {"props": {"title": {"tsType": {"name": "string"}, "required": True}}},
        })

        output = formatter.format_component(component)

        assert "### Story2" in output
        assert "### Other Stories" in output
        assert "- Story3: Variant 3" in output
        assert "- Story4: Variant 4" in output
        assert "<Card n={3} />" not in output

    def test_all_stories_without_props(self, formatter):
        stories = [{"name": f"Story{i}", "snippet": f"<Card n={{{i}}} />"} for i in range(MAX_STORIES_TO_SHOW + 2)]
        component = ComponentManifest.model_validate({"id": "card", "name": "Card", "stories": stories})

        output = formatter.format_component(component)

        assert "### Other Stories" not in output
        assert "<Card n={4} />" in output

    def test_attached_docs(self, formatter):
        component = ComponentManifest.model_validate({
            "id": "card",
            "name": "Card",
            "docs": {
                "usage": {"id": "usage", "name": "Usage", "title": "Card Usage", "path": "card.mdx", "content": "Use it."},
                "empty": {"id": "empty", "name": "Empty", "title": "Empty", "path": "e.mdx", "content": "  "},
            },
        })
        output = formatter.format_component(component)
        assert "## Docs\n\n### Usage\n\nUse it." in output
        assert "### Empty" not in output


class TestFormatDocAndStory:
    """Tests for format_doc and format_story."""

    def test_format_doc(self, formatter):
        doc = Doc(id="intro", name="Intro", title="Introduction", path="intro.mdx", content="Hello")
        assert formatter.format_doc(doc) == "# Introduction\n\nHello"

    def test_format_story(self, formatter, button):
        output = formatter.format_story(button, "WithIcon")
        assert output == (
            "# Button - With Icon\n\n"
            "```\n"
            "import { Button } from '@acme/ui';\n\n"
            '<Button icon="star">Star</Button>\n'
            "```"
        )

    def test_unknown_story(self, formatter, button):
        assert formatter.format_story(button, "Missing") == ""


class TestFormatLists:
    """Tests for format_list and format_multi_source_list."""

    def test_format_list(self, formatter, manifests):
        output = formatter.format_list(manifests)
        assert output.startswith("# Components\n\n")
        assert "- Button (button): A button triggers an action when clicked." in output
        assert "- Card (card): Groups related content." in output
        assert "# Docs\n\n- Getting Started (getting-started): # Welcome Install the package to get going." in output

    def test_format_list_without_docs(self, formatter, manifests):
        output = formatter.format_list(AllManifests(component_manifest=manifests.component_manifest))
        assert "# Docs" not in output

    def test_long_description_is_truncated(self, formatter):
        manifests = AllManifests(component_manifest=ComponentManifestMap.model_validate({
            "v": 1,
            "components": {"x": {"id": "x", "name": "X", "description": "d" * 100}},
        }))
        assert f"- X (x): {'d' * 90}..." in formatter.format_list(manifests)

    def test_multi_source_list(self, formatter, manifests):
        results = [
            MultiSourceManifestResult(
                source=ManifestSource(id="local", title="Local"),
                component_manifest=manifests.component_manifest,
                docs_manifest=manifests.docs_manifest,
            ),
            MultiSourceManifestResult(
                source=ManifestSource(id="remote", title="Remote", url="https://remote.example.com"),
                component_manifest=ComponentManifestMap(v=1, components={}),
                error="Error getting manifest: boom",
            ),
        ]

        output = formatter.format_multi_source_list(results)

        assert output.startswith("# Local\nid: local\n\n## Components")
        assert "## Docs" in output
        assert "# Remote\nid: remote\n\nerror: Error getting manifest: boom" in output

    def test_empty_summary_is_not_replaced_by_description(self, formatter):
        manifests = AllManifests(component_manifest=ComponentManifestMap.model_validate({
            "v": 1,
            "components": {"x": {"id": "x", "name": "X", "summary": "", "description": "Long text"}},
        }))
        output = formatter.format_list(manifests)
        assert "- X (x)" in output
        assert "Long text" not in output

    def test_empty_error_still_marks_failed_source(self, formatter, manifests):
        results = [
            MultiSourceManifestResult(
                source=ManifestSource(id="remote", title="Remote", url="https://remote.example.com"),
                component_manifest=manifests.component_manifest,
                error="",
            ),
        ]
        output = formatter.format_multi_source_list(results)
        assert output == "# Remote\nid: remote\n\nerror:"
