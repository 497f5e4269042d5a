"""
Quick Actions — CLI entrypoint.

Usage:
    python -m src.main --help
    python -m src.main resolve --template-type video
    python -m src.main flags list
    python -m src.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from src.core.observability.logging_config import setup_logging

from src import __version__


@click.group()
@click.version_option(version=__version__, prog_name="quickactions")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to quickactions.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Quick Actions — decide which actions a viewer item offers."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("QA_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("QA_LOG_FILE"),
        log_file_level=os.environ.get("QA_LOG_FILE_LEVEL"),
    )


def _parse_toggles(values: tuple[str, ...], what: str) -> dict[str, bool]:
    """Parse ``ID`` / ``ID=true`` / ``ID=false`` options into a mapping."""
    toggles: dict[str, bool] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        name = name.strip()
        if not name:
            raise click.BadParameter(f"Empty {what} id in '{raw}'")
        if not sep:
            toggles[name] = True
            continue
        value = value.strip().lower()
        if value in ("1", "true", "yes", "on"):
            toggles[name] = True
        elif value in ("0", "false", "no", "off"):
            toggles[name] = False
        else:
            raise click.BadParameter(f"Invalid {what} value in '{raw}' (use true/false)")
    return toggles


@cli.command()
@click.option("--template-type", "-t", "template_type", required=True,
              help="Template type id of the item (e.g. video, ae_project).")
@click.option("--item-id", default="", help="Item identifier (informational).")
@click.option("--flag", "-f", "flag_values", multiple=True,
              help="Flag override: ID or ID=true|false. Repeatable.")
@click.option("--renderer", "-r", "renderer_values", multiple=True,
              help="Renderer availability: KEY or KEY=true|false. Repeatable.")
@click.option("--disable-library-features/--enable-library-features",
              "disable_library_features", default=None,
              help="Override the library features setting.")
@click.option("--no-baseline-edit", is_flag=True,
              help="Offer no plain edit action when no flag selects one.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(
    ctx: click.Context,
    template_type: str,
    item_id: str,
    flag_values: tuple[str, ...],
    renderer_values: tuple[str, ...],
    disable_library_features: bool | None,
    no_baseline_edit: bool,
    as_json: bool,
) -> None:
    """Resolve the quick actions for an item.

    Examples:

        quickactions resolve -t video

        quickactions resolve -t video -f edit-hover-button-in-timeline

        quickactions resolve -t image -f timeline-single-asset-editor -r single-asset-edit
    """
    from src.core.use_cases.resolve import resolve_item

    result = resolve_item(
        template_type_id=template_type,
        item_id=item_id,
        config_path=ctx.obj.get("config_path"),
        flag_overrides=_parse_toggles(flag_values, "flag"),
        renderer_overrides=_parse_toggles(renderer_values, "renderer"),
        disable_library_features=disable_library_features,
        baseline_edit=False if no_baseline_edit else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.item is not None
    quiet = ctx.obj.get("quiet", False)

    if not quiet:
        label = result.item.id or result.item.template_type_id
        click.secho(f"\n⚡ Quick actions — {label}", fg="cyan", bold=True)
        if result.item.is_project_file:
            click.echo("   (project file: not saveable to a library)")
        if result.config_path:
            click.echo(f"   Settings: {result.config_path}")
        click.echo()

    if not result.actions:
        click.secho("   No actions.", fg="yellow")
    for position, action in enumerate(result.actions, start=1):
        click.secho(f"   {position}. {action.key}", fg="green", nl=False)
        click.echo(f"  [{action.kind.value}]")

    click.echo()


@cli.group()
def config() -> None:
    """Settings file commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate quickactions.yml."""
    from src.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        settings = result.settings
        library = "disabled" if settings.config.disable_library_features else "enabled"
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File: {result.config_path}")
        click.echo(f"   Library features: {library}")
        click.echo(f"   Flags: {len(settings.flags.flags)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register sub-command groups from src/ui/cli/ ──────────────────

from src.ui.cli.flags import flags

cli.add_command(flags)


if __name__ == "__main__":
    cli()
