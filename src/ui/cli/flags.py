"""
CLI commands for feature flags.

Thin wrappers over ``src.core.services.feature_flags`` and the settings loader.
"""

from __future__ import annotations

import json
import sys

import click


@click.group("flags")
def flags() -> None:
    """Feature flags — known ids and their values in the settings file."""


@flags.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_flags(ctx: click.Context, as_json: bool) -> None:
    """List known flags and their current values."""
    from src.core.config.loader import (
        ConfigError,
        ViewerSettings,
        find_settings_file,
        load_settings,
    )
    from src.core.services.feature_flags import KNOWN_FLAGS, get_flag

    config_path = ctx.obj.get("config_path") or find_settings_file()
    try:
        settings = load_settings(config_path) if config_path else ViewerSettings()
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
            return
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    values = {flag_id: get_flag(settings.flags, flag_id) for flag_id in KNOWN_FLAGS}
    extra = sorted(set(settings.flags.flags) - set(KNOWN_FLAGS))

    if as_json:
        click.echo(json.dumps({
            "config_path": str(config_path) if config_path else None,
            "flags": values,
            "unknown": extra,
        }, indent=2))
        return

    click.secho("🚩 Feature flags:", fg="cyan", bold=True)
    for flag_id, description in KNOWN_FLAGS.items():
        if values[flag_id]:
            click.secho(f"   ● {flag_id}", fg="green", nl=False)
            click.echo("  on")
        else:
            click.echo(f"   ○ {flag_id}  off")
        click.echo(f"     {description}")

    if extra:
        click.echo()
        click.secho("   ⚠️  Unknown flags in settings:", fg="yellow")
        for flag_id in extra:
            click.echo(f"     • {flag_id}")
    click.echo()
