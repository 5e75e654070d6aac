"""
Shared fixtures for storydocs tests.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from storydocs.manifests import COMPONENT_MANIFEST_PATH, DOCS_MANIFEST_PATH, ManifestGetError


@pytest.fixture
def component_manifest_data() -> Dict[str, Any]:
    """A small but realistic components.json."""
    return {
        "v": 1,
        "components": {
            "button": {
                "id": "button",
                "name": "Button",
                "path": "src/components/Button.tsx",
                "description": "A button triggers an action when clicked.",
                "import": "import { Button } from '@acme/ui';",
                "stories": [
                    {
                        "name": "Primary",
                        "description": "The main call to action.",
                        "snippet": '<Button variant="primary">Click</Button>',
                    },
                    {
                        "name": "WithIcon",
                        "snippet": '<Button icon="star">Star</Button>',
                    },
                ],
                "reactDocgen": {
                    "props": {
                        "variant": {
                            "description": "Visual style",
                            "required": False,
                            "tsType": {
                                "name": "union",
                                "raw": "'primary' | 'secondary'",
                                "elements": [
                                    {"name": "literal", "value": "'primary'"},
                                    {"name": "literal", "value": "'secondary'"},
                                ],
                            },
                            "defaultValue": {"value": "'primary'", "computed": False},
                        },
                        "onClick": {
                            "required": True,
                            "tsType": {
                                "name": "signature",
                                "type": "function",
                                "raw": "() => void",
                                "signature": {"arguments": [], "return": {"name": "void"}},
                            },
                        },
                    }
                },
            },
            "card": {
                "id": "card",
                "name": "Card",
                "summary": "Groups related content.",
            },
        },
    }


@pytest.fixture
def docs_manifest_data() -> Dict[str, Any]:
    """A docs.json with one MDX entry."""
    return {
        "v": 1,
        "docs": {
            "getting-started": {
                "id": "getting-started",
                "name": "Getting Started",
                "title": "Getting Started",
                "path": "docs/getting-started.mdx",
                "content": (
                    "import { Meta } from '@storybook/blocks';\n\n"
                    "<Meta title=\"Getting Started\" />\n\n"
                    "# Welcome\n\nInstall the package to get going."
                ),
            }
        },
    }


@pytest.fixture
def component_manifest_json(component_manifest_data) -> str:
    return json.dumps(component_manifest_data)


@pytest.fixture
def docs_manifest_json(docs_manifest_data) -> str:
    return json.dumps(docs_manifest_data)


@pytest.fixture
def manifest_files(tmp_path: Path, component_manifest_json, docs_manifest_json):
    """Write both manifests to disk and return (components_path, docs_path)."""
    components = tmp_path / "components.json"
    docs = tmp_path / "docs.json"
    components.write_text(component_manifest_json, encoding="utf-8")
    docs.write_text(docs_manifest_json, encoding="utf-8")
    return components, docs


class RecordingProvider:
    """
    In-memory manifest provider.

    Returns the configured text per path, raising when the configured value is
    an exception (or when the path is not configured). Every call is recorded.
    """

    def __init__(self, components: Any = None, docs: Any = None):
        self.responses = {COMPONENT_MANIFEST_PATH: components, DOCS_MANIFEST_PATH: docs}
        self.calls = []

    async def __call__(self, request: Optional[Any], path: str, source=None) -> str:
        self.calls.append((request, path, source))
        response = self.responses.get(path)
        if isinstance(response, BaseException):
            raise response
        if response is None:
            raise ManifestGetError("Failed to fetch manifest: 404 Not Found", f"test://{path}")
        return response


@pytest.fixture
def make_provider():
    """Factory for RecordingProvider instances."""
    return RecordingProvider


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep STORYDOCS_* variables from the developer environment out of tests."""
    for name in [
        "STORYDOCS_FORMAT",
        "STORYDOCS_COMPONENT_MANIFEST",
        "STORYDOCS_DOCS_MANIFEST",
        "STORYDOCS_MANIFEST_URL",
        "STORYDOCS_SOURCES_FILE",
        "STORYDOCS_LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STORYDOCS_LOG_FILE", str(tmp_path / "storydocs.log"))
