"""
Configuration loader — reads quickactions.yml into viewer settings.

The file bundles everything the resolver consumes besides the item:
the viewer configuration, resolved feature flags, renderer availability
and the baseline edit policy. Every section is optional.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from src.core.models.quick_action import (
    Configuration,
    FeatureFlagSet,
    RendererAvailability,
)

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "quickactions.yml"


class ConfigError(Exception):
    """Raised when the settings file is invalid or missing."""


class ResolverPolicy(BaseModel):
    """Product policy knobs for the resolver."""

    baseline_edit: bool = True


class ViewerSettings(BaseModel):
    """Everything loaded from quickactions.yml."""

    config: Configuration = Field(default_factory=Configuration)
    flags: FeatureFlagSet = Field(default_factory=FeatureFlagSet)
    renderers: RendererAvailability = Field(default_factory=RendererAvailability)
    policy: ResolverPolicy = Field(default_factory=ResolverPolicy)


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for quickactions.yml starting from *start_dir*, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the settings file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> ViewerSettings:
    """Load and validate viewer settings.

    Args:
        path: Explicit path to quickactions.yml. If None, searches upward.

    Returns:
        Validated ViewerSettings.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_settings_file()

    if path is None:
        raise ConfigError(f"No {SETTINGS_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading viewer settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid "all defaults" document
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = parse_settings(data)
    except (ValidationError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info(
        "Loaded settings from %s (%d flag(s), library features %s)",
        path,
        len(settings.flags.flags),
        "disabled" if settings.config.disable_library_features else "enabled",
    )
    return settings


def parse_settings(data: dict[str, Any]) -> ViewerSettings:
    """Build ViewerSettings from an already-parsed mapping.

    Flag values may be bare booleans or ``{value: bool}`` records.
    """
    flags_raw = data.get("flags") or {}
    if not isinstance(flags_raw, dict):
        raise TypeError(f"'flags' must be a mapping, got {type(flags_raw).__name__}")

    renderers_raw = data.get("renderers") or {}
    if not isinstance(renderers_raw, dict):
        raise TypeError(f"'renderers' must be a mapping, got {type(renderers_raw).__name__}")

    return ViewerSettings(
        config=Configuration.model_validate(data.get("config") or {}),
        flags=FeatureFlagSet.from_mapping(flags_raw),
        renderers=RendererAvailability.model_validate({"renderers": renderers_raw}),
        policy=ResolverPolicy.model_validate(data.get("policy") or {}),
    )
