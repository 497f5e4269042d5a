"""
Tests for the feature flag accessor.
"""

from src.core.models import FeatureFlagSet
from src.core.services.feature_flags import (
    EDIT_HOVER_BUTTON_IN_TIMELINE,
    KNOWN_FLAGS,
    TIMELINE_SINGLE_ASSET_EDITOR,
    as_flag_set,
    get_flag,
)


class TestGetFlag:
    """get_flag() tests."""

    def test_flag_ids(self):
        assert EDIT_HOVER_BUTTON_IN_TIMELINE == "edit-hover-button-in-timeline"
        assert TIMELINE_SINGLE_ASSET_EDITOR == "timeline-single-asset-editor"
        assert set(KNOWN_FLAGS) == {
            EDIT_HOVER_BUTTON_IN_TIMELINE,
            TIMELINE_SINGLE_ASSET_EDITOR,
        }

    def test_none_flag_set(self):
        assert get_flag(None, EDIT_HOVER_BUTTON_IN_TIMELINE) is False

    def test_empty_mapping(self):
        assert get_flag({}, TIMELINE_SINGLE_ASSET_EDITOR) is False

    def test_raw_record(self):
        flags = {EDIT_HOVER_BUTTON_IN_TIMELINE: {"value": True}}
        assert get_flag(flags, EDIT_HOVER_BUTTON_IN_TIMELINE) is True

    def test_model(self):
        flags = FeatureFlagSet.from_mapping({TIMELINE_SINGLE_ASSET_EDITOR: True})
        assert get_flag(flags, TIMELINE_SINGLE_ASSET_EDITOR) is True
        assert get_flag(flags, EDIT_HOVER_BUTTON_IN_TIMELINE) is False

    def test_malformed_reads_off(self):
        flags = {EDIT_HOVER_BUTTON_IN_TIMELINE: {"value": [1, 2]}}
        assert get_flag(flags, EDIT_HOVER_BUTTON_IN_TIMELINE) is False


class TestAsFlagSet:
    """as_flag_set() tests."""

    def test_model_passes_through(self):
        flags = FeatureFlagSet()
        assert as_flag_set(flags) is flags

    def test_mapping_is_converted(self):
        result = as_flag_set({"x": True})
        assert isinstance(result, FeatureFlagSet)
        assert result.is_enabled("x") is True
