"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from src.core.models import Configuration, Item


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def enabled_config() -> Configuration:
    """Library features on."""
    return Configuration(disable_library_features=False)


@pytest.fixture
def disabled_config() -> Configuration:
    """Library features off."""
    return Configuration(disable_library_features=True)


@pytest.fixture
def video_item() -> Item:
    """An ordinary, saveable item."""
    return Item(id="asset-1", template_type_id="video")


@pytest.fixture
def ae_item() -> Item:
    """An After Effects project file."""
    return Item(id="asset-2", template_type_id="ae_project")


@pytest.fixture
def settings_yml(tmp_path: Path) -> Path:
    """A quickactions.yml exercising every section."""
    content = textwrap.dedent("""\
        config:
          disableLibraryFeatures: false
        flags:
          edit-hover-button-in-timeline: true
          timeline-single-asset-editor:
            value: false
        renderers:
          single-asset-edit: true
        policy:
          baseline_edit: true
    """)
    path = tmp_path / "quickactions.yml"
    path.write_text(content)
    return path
