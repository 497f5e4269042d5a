"""
Action delivery — hand resolved actions to a presentation layer.

The decision lives in ``action_resolver``. These helpers only change
how the result is handed over:

    bind_resolver  → a resolver with the configuration already captured
    to_slots       → actions arranged into named save and edit slots
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.core.models.quick_action import (
    ActionDescriptor,
    ActionKind,
    Configuration,
    FeatureFlagSet,
    Item,
    RendererAvailability,
)
from src.core.services.action_resolver import as_config, resolve_actions

BoundResolver = Callable[
    [FeatureFlagSet | Mapping[str, Any] | None, Item | Mapping[str, Any]],
    list[ActionDescriptor],
]

_EDIT_KINDS = frozenset({ActionKind.EDIT, ActionKind.EDIT_HOVER_TIMELINE})


def bind_resolver(
    config: Configuration | Mapping[str, Any] | None,
    renderers: RendererAvailability | Mapping[str, bool] | None = None,
    baseline_edit: bool = True,
) -> BoundResolver:
    """Capture a configuration snapshot; flags and item vary per call."""
    snapshot = as_config(config)

    def resolver(
        flags: FeatureFlagSet | Mapping[str, Any] | None,
        item: Item | Mapping[str, Any],
    ) -> list[ActionDescriptor]:
        return resolve_actions(
            snapshot, flags, item,
            renderers=renderers,
            baseline_edit=baseline_edit,
        )

    return resolver


class ActionSlots(BaseModel):
    """Resolved actions arranged into named slots."""

    model_config = ConfigDict(frozen=True)

    save: ActionDescriptor | None = None
    edit: ActionDescriptor | None = None

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to render."""
        return self.save is None and self.edit is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "save": self.save.key if self.save else None,
            "edit": self.edit.key if self.edit else None,
        }


def to_slots(actions: list[ActionDescriptor]) -> ActionSlots:
    """Place each resolved action in its slot.

    Raises:
        ValueError: If *actions* holds two save or two edit actions,
            which ``resolve_actions`` never produces.
    """
    save: ActionDescriptor | None = None
    edit: ActionDescriptor | None = None

    for action in actions:
        if action.kind == ActionKind.SAVE_TO_LIBRARY:
            if save is not None:
                raise ValueError(f"Second save action: {action.key}")
            save = action
        elif action.kind in _EDIT_KINDS:
            if edit is not None:
                raise ValueError(f"Second edit action: {action.key} (already {edit.key})")
            edit = action

    return ActionSlots(save=save, edit=edit)
