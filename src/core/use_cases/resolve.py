"""
Resolve use case — quick actions for one item, from settings + overrides.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from src.core.config.loader import (
    ConfigError,
    ViewerSettings,
    find_settings_file,
    load_settings,
)
from src.core.models.quick_action import ActionDescriptor, Configuration, Item
from src.core.services.action_delivery import to_slots
from src.core.services.action_resolver import InvalidInvocationError, resolve_actions

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Result of resolving quick actions for an item."""

    item: Item | None = None
    settings: ViewerSettings | None = None
    config_path: Path | None = None
    actions: list[ActionDescriptor] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}

        assert self.item is not None
        assert self.settings is not None
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "item": {
                "id": self.item.id,
                "template_type_id": self.item.template_type_id,
            },
            "config": {
                "disable_library_features": self.settings.config.disable_library_features,
            },
            "flags": self.settings.flags.to_dict(),
            "actions": [a.to_dict() for a in self.actions],
            "slots": to_slots(self.actions).to_dict(),
        }


def resolve_item(
    template_type_id: str,
    item_id: str = "",
    config_path: Path | None = None,
    flag_overrides: dict[str, bool] | None = None,
    renderer_overrides: dict[str, bool] | None = None,
    disable_library_features: bool | None = None,
    baseline_edit: bool | None = None,
) -> ResolveResult:
    """Load viewer settings, apply overrides, and resolve actions.

    Without an explicit *config_path*, a missing settings file means
    "no provider": defaults apply and no error is reported.

    Args:
        template_type_id: Template type of the item.
        item_id: Optional item identifier (informational).
        config_path: Optional explicit path to quickactions.yml.
        flag_overrides: Flag values that replace those in the file.
        renderer_overrides: Renderer availability that replaces the file's.
        disable_library_features: Overrides the configuration flag when set.
        baseline_edit: Overrides the baseline edit policy when set.

    Returns:
        ResolveResult with actions, or with ``error`` set.
    """
    result = ResolveResult()

    try:
        if config_path is None:
            config_path = find_settings_file()
        settings = load_settings(config_path) if config_path else ViewerSettings()
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config_path = config_path

    if disable_library_features is not None:
        settings = settings.model_copy(update={
            "config": Configuration(disable_library_features=disable_library_features),
        })
    if flag_overrides:
        settings = settings.model_copy(update={
            "flags": settings.flags.with_overrides(flag_overrides),
        })
    if renderer_overrides:
        settings = settings.model_copy(update={
            "renderers": settings.renderers.with_overrides(renderer_overrides),
        })
    if baseline_edit is not None:
        settings = settings.model_copy(update={
            "policy": settings.policy.model_copy(update={"baseline_edit": baseline_edit}),
        })
    result.settings = settings

    try:
        item = Item(id=item_id, template_type_id=template_type_id)
        result.item = item
        result.actions = resolve_actions(
            settings.config,
            settings.flags,
            item,
            renderers=settings.renderers,
            baseline_edit=settings.policy.baseline_edit,
        )
    except InvalidInvocationError as e:
        result.error = str(e)
        return result

    logger.info(
        "Resolved %d action(s) for %s",
        len(result.actions),
        item_id or template_type_id,
    )
    return result
