"""
Config check use case — validate quickactions.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.core.config.loader import (
    SETTINGS_FILE,
    ConfigError,
    ViewerSettings,
    find_settings_file,
    load_settings,
)
from src.core.models.quick_action import KEY_SINGLE_ASSET_EDIT, RENDERER_KEYS
from src.core.services.feature_flags import KNOWN_FLAGS, TIMELINE_SINGLE_ASSET_EDITOR


@dataclass
class ConfigCheckResult:
    """Result of settings validation."""

    valid: bool = False
    settings: ViewerSettings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "flag_count": len(self.settings.flags.flags) if self.settings else 0,
            "disable_library_features": (
                self.settings.config.disable_library_features if self.settings else None
            ),
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate viewer settings and report issues.

    Args:
        config_path: Optional explicit path to quickactions.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_settings_file()

    if config_path is None:
        result.errors.append(f"No {SETTINGS_FILE} found.")
        return result

    result.config_path = config_path

    try:
        settings = load_settings(config_path)
        result.settings = settings
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    unknown_flags = sorted(set(settings.flags.flags) - set(KNOWN_FLAGS))
    if unknown_flags:
        result.warnings.append(
            f"Unknown flag ids (ignored by the resolver): {', '.join(unknown_flags)}"
        )

    unknown_renderers = sorted(set(settings.renderers.renderers) - set(RENDERER_KEYS))
    if unknown_renderers:
        result.warnings.append(f"Unknown renderer keys: {', '.join(unknown_renderers)}")

    if (
        settings.flags.is_enabled(TIMELINE_SINGLE_ASSET_EDITOR)
        and not settings.renderers.is_available(KEY_SINGLE_ASSET_EDIT)
    ):
        result.warnings.append(
            f"'{TIMELINE_SINGLE_ASSET_EDITOR}' is on but the '{KEY_SINGLE_ASSET_EDIT}' "
            "renderer is unavailable. No edit action will be offered."
        )

    if not settings.policy.baseline_edit and not any(
        settings.flags.is_enabled(flag_id) for flag_id in KNOWN_FLAGS
    ):
        result.warnings.append(
            "Baseline edit is off and no edit flag is on. Items get no edit action."
        )

    # Result
    result.valid = len(result.errors) == 0
    return result
