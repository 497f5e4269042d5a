"""
Feature flags — ids the viewer reads and a typed accessor over them.

Flag values arrive already resolved from the flag provider. This module
only names the ids and reads them with a ``False`` default, so the
precedence logic never depends on how flags are stored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.core.models.quick_action import FeatureFlagSet

EDIT_HOVER_BUTTON_IN_TIMELINE = "edit-hover-button-in-timeline"
TIMELINE_SINGLE_ASSET_EDITOR = "timeline-single-asset-editor"

KNOWN_FLAGS: dict[str, str] = {
    EDIT_HOVER_BUTTON_IN_TIMELINE: "Show the edit hover button in the timeline.",
    TIMELINE_SINGLE_ASSET_EDITOR: (
        "Use the single-asset editor for edit; takes priority over the hover button."
    ),
}


def as_flag_set(flags: FeatureFlagSet | Mapping[str, Any] | None) -> FeatureFlagSet:
    """Coerce provider output into a :class:`FeatureFlagSet`.

    Malformed records are dropped rather than raised: a bad flag reads
    as off.
    """
    if isinstance(flags, FeatureFlagSet):
        return flags
    return FeatureFlagSet.from_mapping(flags, strict=False)


def get_flag(flags: FeatureFlagSet | Mapping[str, Any] | None, flag_id: str) -> bool:
    """Read a flag; absent ids and a missing flag set both read ``False``."""
    return as_flag_set(flags).is_enabled(flag_id)
