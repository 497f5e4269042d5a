"""
Action resolver — which quick actions a viewer item gets.

Pure function of three snapshots:

    Configuration   → library features on/off
    FeatureFlagSet  → which edit affordance wins
    Item            → whether the item may be saved at all

Output order is rendering priority:

    1. save-to-library   (library features on, not a project file)
    2. one edit variant  (single-asset editor > hover button > baseline)

Irregular input (missing flags, unknown template types, no config)
degrades to fewer actions. Only a missing item is an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.core.models.quick_action import (
    KEY_EDIT,
    KEY_EDIT_HOVER,
    KEY_SAVE_TO_LIBRARY,
    KEY_SINGLE_ASSET_EDIT,
    ActionDescriptor,
    ActionKind,
    Configuration,
    FeatureFlagSet,
    Item,
    RendererAvailability,
)
from src.core.services.feature_flags import (
    EDIT_HOVER_BUTTON_IN_TIMELINE,
    TIMELINE_SINGLE_ASSET_EDITOR,
    as_flag_set,
)

logger = logging.getLogger(__name__)


class InvalidInvocationError(TypeError):
    """Raised when the resolver is called without a usable item."""


def resolve_actions(
    config: Configuration | Mapping[str, Any] | None,
    flags: FeatureFlagSet | Mapping[str, Any] | None,
    item: Item | Mapping[str, Any],
    renderers: RendererAvailability | Mapping[str, bool] | None = None,
    baseline_edit: bool = True,
) -> list[ActionDescriptor]:
    """Resolve the ordered quick actions for *item*.

    Args:
        config: Viewer configuration. ``None`` means no provider, i.e.
            library features enabled.
        flags: Resolved feature flags. Absent ids read as off.
        item: The content item. Required.
        renderers: Renderer availability in the embedding context.
            The single-asset editor is unavailable unless declared here.
        baseline_edit: Offer a plain edit action when no flag selects
            a specialized one.

    Returns:
        Descriptors in rendering order. May be empty.

    Raises:
        InvalidInvocationError: If *item* is missing or not an item.
    """
    item = _as_item(item)
    config = as_config(config)
    flag_set = as_flag_set(flags)
    available = _as_renderers(renderers)

    actions: list[ActionDescriptor] = []

    def add(kind: ActionKind, key: str) -> None:
        if not available.is_available(key):
            logger.debug("No renderer for %s on item %s, skipping", key, item.id or "?")
            return
        actions.append(ActionDescriptor(kind=kind, key=key, payload=item))

    # ── Save to library ─────────────────────────────────────────
    if not config.disable_library_features and not item.is_project_file:
        add(ActionKind.SAVE_TO_LIBRARY, KEY_SAVE_TO_LIBRARY)

    # ── Edit (exactly one variant, by precedence) ───────────────
    single_asset_editor = flag_set.is_enabled(TIMELINE_SINGLE_ASSET_EDITOR)
    edit_hover = flag_set.is_enabled(EDIT_HOVER_BUTTON_IN_TIMELINE)

    if single_asset_editor:
        # No fallback to the hover button when the editor is missing
        add(ActionKind.EDIT, KEY_SINGLE_ASSET_EDIT)
    elif edit_hover:
        add(ActionKind.EDIT_HOVER_TIMELINE, KEY_EDIT_HOVER)
    elif baseline_edit:
        add(ActionKind.EDIT, KEY_EDIT)

    logger.debug(
        "Resolved %d action(s) for item %s [%s]: %s",
        len(actions),
        item.id or "?",
        item.template_type_id,
        ", ".join(a.key for a in actions) or "none",
    )
    return actions


def _as_item(item: Any) -> Item:
    if isinstance(item, Item):
        return item
    if item is None:
        raise InvalidInvocationError("resolve_actions() requires an item, got None")
    if not isinstance(item, Mapping):
        raise InvalidInvocationError(
            f"resolve_actions() requires an Item or mapping, got {type(item).__name__}"
        )
    try:
        return Item.model_validate(item)
    except ValidationError as e:
        raise InvalidInvocationError(f"Invalid item: {e}") from e


def as_config(config: Configuration | Mapping[str, Any] | None) -> Configuration:
    """Coerce a configuration snapshot; a missing or unusable one means defaults."""
    if isinstance(config, Configuration):
        return config
    if config is None:
        return Configuration()
    try:
        return Configuration.model_validate(config)
    except ValidationError as e:
        logger.warning("Ignoring invalid configuration, using defaults: %s", e)
        return Configuration()


def _as_renderers(renderers: Any) -> RendererAvailability:
    if isinstance(renderers, RendererAvailability):
        return renderers
    try:
        return RendererAvailability.from_mapping(renderers)
    except (TypeError, ValueError) as e:
        logger.warning("Ignoring invalid renderer availability, using defaults: %s", e)
        return RendererAvailability()
