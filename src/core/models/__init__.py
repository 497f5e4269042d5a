"""
Domain models — Pydantic types for quick action resolution.

All models are re-exported here for convenient access:

    from src.core.models import Configuration, FeatureFlagSet, Item, ActionDescriptor
"""

from src.core.models.quick_action import (
    CALLER_SUPPLIED_RENDERERS,
    PROJECT_TEMPLATE_TYPES,
    RENDERER_KEYS,
    ActionDescriptor,
    ActionKind,
    Configuration,
    FeatureFlagSet,
    FlagValue,
    Item,
    RendererAvailability,
    TemplateType,
)

__all__ = [
    "ActionDescriptor",
    "ActionKind",
    "CALLER_SUPPLIED_RENDERERS",
    "Configuration",
    "FeatureFlagSet",
    "FlagValue",
    "Item",
    "PROJECT_TEMPLATE_TYPES",
    "RENDERER_KEYS",
    "RendererAvailability",
    "TemplateType",
]
