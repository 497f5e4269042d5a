"""
Quick action models — inputs and outputs of the action resolver.

The resolver reads three snapshots (Configuration, FeatureFlagSet, Item)
and produces ActionDescriptors. All of them are immutable once built;
a new snapshot is passed on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class TemplateType(StrEnum):
    """Known template type ids for viewer items."""

    AE_PROJECT = "ae_project"
    PREMIERE_PROJECT = "premiere_project"
    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"
    TEMPLATE = "template"


_TEMPLATE_TYPE_VALUES: frozenset[str] = frozenset(t.value for t in TemplateType)


# Project files for desktop editing tools — never saved to a library.
PROJECT_TEMPLATE_TYPES: frozenset[str] = frozenset({
    TemplateType.AE_PROJECT.value,
    TemplateType.PREMIERE_PROJECT.value,
})


class ActionKind(StrEnum):
    """Kinds of quick action a viewer can offer."""

    SAVE_TO_LIBRARY = "save_to_library"
    EDIT = "edit"
    EDIT_HOVER_TIMELINE = "edit_hover_timeline"


class Configuration(BaseModel):
    """Process-wide viewer configuration (read-only after startup)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    disable_library_features: bool = Field(
        default=False, alias="disableLibraryFeatures",
    )

    @field_validator("disable_library_features", mode="before")
    @classmethod
    def _null_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class FlagValue(BaseModel):
    """A resolved feature flag value."""

    model_config = ConfigDict(frozen=True)

    value: bool = False


class FeatureFlagSet(BaseModel):
    """Resolved feature flags keyed by flag id.

    Absent ids read as ``False``. Use :meth:`from_mapping` to build one
    from raw provider output, where each value is either a
    ``{"value": bool}`` record or a bare boolean.
    """

    model_config = ConfigDict(frozen=True)

    flags: dict[str, FlagValue] = Field(default_factory=dict)

    def is_enabled(self, flag_id: str) -> bool:
        """Whether *flag_id* is on (``False`` when absent)."""
        record = self.flags.get(flag_id)
        return record.value if record is not None else False

    def with_overrides(self, overrides: Mapping[str, bool]) -> FeatureFlagSet:
        """Return a new set with *overrides* applied on top."""
        merged = dict(self.flags)
        for flag_id, value in overrides.items():
            merged[flag_id] = FlagValue(value=value)
        return FeatureFlagSet(flags=merged)

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any] | None,
        strict: bool = True,
    ) -> FeatureFlagSet:
        """Build a flag set from ``{id: {"value": bool}}`` or ``{id: bool}``.

        With ``strict=False`` a malformed record is logged and dropped
        (so it reads as ``False``) instead of raising ``ValidationError``.
        A non-mapping *raw* raises ``TypeError``, or with ``strict=False``
        is logged and read as an empty set.
        """
        if raw is not None and not isinstance(raw, Mapping):
            if strict:
                raise TypeError(f"Flags must be a mapping, got {type(raw).__name__}")
            logger.warning("Ignoring flags of type %s, expected a mapping", type(raw).__name__)
            raw = None

        flags: dict[str, FlagValue] = {}
        for flag_id, record in (raw or {}).items():
            try:
                if isinstance(record, FlagValue):
                    flags[flag_id] = record
                elif isinstance(record, Mapping):
                    flags[flag_id] = FlagValue.model_validate(record)
                else:
                    flags[flag_id] = FlagValue(value=record)
            except ValidationError:
                if strict:
                    raise
                logger.warning("Ignoring malformed value for flag %s: %r", flag_id, record)
        return cls(flags=flags)

    def to_dict(self) -> dict[str, bool]:
        return {flag_id: rec.value for flag_id, rec in sorted(self.flags.items())}


class Item(BaseModel):
    """The content item the viewer is acting on.

    ``template_type_id`` is a free string: ids outside
    :class:`TemplateType` are accepted and treated as ordinary content.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    template_type_id: str = Field(alias="templateTypeId")
    title: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("template_type_id", mode="before")
    @classmethod
    def _canonical_template_type(cls, value: Any) -> Any:
        """Map known ids in any case (``AE_PROJECT``, ``Ae_Project``) to their value."""
        if isinstance(value, str):
            folded = value.strip().casefold()
            if folded in _TEMPLATE_TYPE_VALUES:
                return folded
        return value

    @property
    def is_project_file(self) -> bool:
        """Whether this item is a desktop-tool project file."""
        return self.template_type_id in PROJECT_TEMPLATE_TYPES


class ActionDescriptor(BaseModel):
    """One quick action to render, in priority order within a result."""

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    key: str            # stable renderer key, unique within a result
    payload: Item

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "key": self.key,
            "item_id": self.payload.id,
            "template_type_id": self.payload.template_type_id,
        }


class RendererAvailability(BaseModel):
    """Which action renderers the embedding context can provide.

    Keys are descriptor keys. The single-asset editor is supplied by
    the embedding context, so it is unavailable unless declared; every
    other renderer is available unless explicitly switched off.
    """

    model_config = ConfigDict(frozen=True)

    renderers: dict[str, bool] = Field(default_factory=dict)

    def is_available(self, key: str) -> bool:
        """Whether the renderer for *key* can be used."""
        if key in self.renderers:
            return self.renderers[key]
        return key not in CALLER_SUPPLIED_RENDERERS

    def with_overrides(self, overrides: Mapping[str, bool]) -> RendererAvailability:
        return RendererAvailability(renderers={**self.renderers, **overrides})

    @classmethod
    def from_mapping(cls, raw: Mapping[str, bool] | None) -> RendererAvailability:
        return cls(renderers=dict(raw or {}))


# ── Descriptor keys ─────────────────────────────────────────────

KEY_SAVE_TO_LIBRARY = "save-to-library"
KEY_SINGLE_ASSET_EDIT = "single-asset-edit"
KEY_EDIT_HOVER = "edit-hover"
KEY_EDIT = "edit"

RENDERER_KEYS: tuple[str, ...] = (
    KEY_SAVE_TO_LIBRARY,
    KEY_SINGLE_ASSET_EDIT,
    KEY_EDIT_HOVER,
    KEY_EDIT,
)

# Renderers that exist only when the embedding context provides them
CALLER_SUPPLIED_RENDERERS: frozenset[str] = frozenset({KEY_SINGLE_ASSET_EDIT})
