"""zonetrack CLI entry point.

Commands:
- zonetrack run [--config <path>] [--state <path>]: Interactive tracking session
- zonetrack show <path> [--no-color]: Print the progress grid of a state file
- zonetrack load <path> [--dry-run]: Validate and summarize a state file
- zonetrack check <path>: Verify every live combination has exactly one target
- zonetrack config validate <path>: Validate config file
"""

import logging
import sys
from pathlib import Path

import click

from zonetrack import __version__
from zonetrack.app import (
    ARGUMENT_KEYS,
    NEW_KEYS,
    REMOVE_KEYS,
    SELECT_KEYS,
    KeyResult,
    Tracker,
)
from zonetrack.config import TrackerConfig, get_config_hash, load_config, validate_config
from zonetrack.persistence import (
    StateLoadError,
    load_dry_run,
    load_state,
    load_state_dto,
    save_state,
)
from zonetrack.ui.grid import build_grid, format_grid


logger = logging.getLogger(__name__)

HELP_TEXT = """\
  y/Y progress +1/-1   u/U target +1/-1   i progress=target   I target=progress
  o zero target        O zero progress
  q/w/e/r NAME  new map/zone/ability/usage
  a/s/d/f REF   select map/zone/ability/usage (number = position)
  z/x/c/v NAME  remove map/zone/ability/usage
  h/l prev/next usage   j/k next/prev zone
  Q save and quit      ! quit without saving   ? help"""


def parse_command(line: str) -> tuple[str, str]:
    """Split an input line into (key, argument).

    The key is the first non-blank character; the rest of the line,
    stripped, is the argument.
    """
    line = line.strip()
    if not line:
        return "", ""
    return line[0], line[1:].strip()


def _argument_label(key: str) -> str:
    for verb, table in (("New", NEW_KEYS), ("Select", SELECT_KEYS), ("Remove", REMOVE_KEYS)):
        if key in table:
            return f"{verb} {table[key].value}"
    return "Argument"


def _configure_logging(config: TrackerConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_or_exit(path: Path):
    try:
        return load_state(path)
    except StateLoadError as e:
        click.echo(click.style("✗ State Invalid", fg="red"), err=True)
        for error in e.errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="zonetrack")
def cli():
    """zonetrack: progress tracking over Map/Zone x Ability/Usage."""
    pass


@cli.group()
def config():
    """Config management commands."""
    pass


@config.command("validate")
@click.argument("config_path", type=click.Path(exists=False))
def config_validate(config_path: str):
    """Validate config file.

    CONFIG_PATH: Path to YAML config file
    """
    path = Path(config_path)
    is_valid, errors = validate_config(path)

    if not is_valid:
        click.echo(click.style("✗ Config Invalid", fg="red"))
        for error in errors:
            click.echo(f"  - {error}")
        sys.exit(1)

    loaded = load_config(path)
    click.echo(click.style("✓ Config OK", fg="green"))
    click.echo(f"  config_hash:    {get_config_hash(loaded)}")
    click.echo(f"  state_path:     {loaded.state_path}")
    click.echo(f"  default_target: {loaded.default_target}")


@cli.command("run")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to config file",
)
@click.option(
    "--state",
    "state_path",
    type=click.Path(exists=False),
    default=None,
    help="State file (overrides config state_path)",
)
def run(config_path: str | None, state_path: str | None):
    """Interactive tracking session.

    Each input line is one key, optionally followed by a name or
    position. The grid is redrawn after every command.
    """
    loaded_config = load_config(Path(config_path) if config_path else None)
    _configure_logging(loaded_config)

    path = Path(state_path or loaded_config.state_path)
    manifest = None
    if path.exists():
        tracker, manifest = _load_or_exit(path)
    else:
        logger.info("No state at %s; starting empty", path)
        tracker = Tracker.create(
            title=loaded_config.title,
            default_target=loaded_config.default_target,
        )

    while True:
        click.echo(format_grid(build_grid(tracker.store, tracker.selection), loaded_config.color))
        click.echo(f"cursor: {tracker.selection}")

        try:
            line = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
        except click.Abort:
            click.echo()
            result = KeyResult.QUIT
            break

        key, argument = parse_command(line)
        if not key:
            continue
        if key == "?":
            click.echo(HELP_TEXT)
            continue
        if key in ARGUMENT_KEYS and not argument:
            try:
                argument = click.prompt(_argument_label(key), default="", show_default=False)
            except click.Abort:
                continue

        result = tracker.handle_key(key, argument)
        if result is not KeyResult.CONTINUE:
            break

    if result is KeyResult.SAVE_AND_QUIT and loaded_config.autosave:
        content_hash = save_state(tracker, path, manifest)
        click.echo(click.style(f"✓ Saved {path}", fg="green"))
        click.echo(f"  sha256: {content_hash[:16]}...")
    else:
        click.echo("Quit without saving")


@cli.command("show")
@click.argument("state_path", type=click.Path(exists=False))
@click.option("--no-color", "no_color", is_flag=True, default=False, help="Plain text output")
def show(state_path: str, no_color: bool):
    """Print the progress grid stored in STATE_PATH."""
    tracker, _ = _load_or_exit(Path(state_path))
    click.echo(format_grid(build_grid(tracker.store, tracker.selection), color=not no_color))


@cli.command("check")
@click.argument("state_path", type=click.Path(exists=False))
def check(state_path: str):
    """Verify the progress matrix of STATE_PATH.

    Fails when a target entry references a removed entity or a live
    combination has no target entry.
    """
    tracker, _ = _load_or_exit(Path(state_path))
    orphaned = tracker.store.orphaned_keys()
    missing = tracker.store.missing_keys()

    if orphaned or missing:
        click.echo(click.style("✗ Matrix Inconsistent", fg="red"))
        for key in orphaned:
            click.echo(f"  - orphaned: {' / '.join(key)}")
        for key in missing:
            click.echo(f"  - missing:  {' / '.join(key)}")
        sys.exit(1)

    click.echo(click.style("✓ Matrix OK", fg="green"))
    click.echo(f"  targets: {len(tracker.store.targets)}")


@cli.command("load")
@click.argument("state_path", type=click.Path(exists=False))
@click.option(
    "--dry-run",
    "dry_run",
    is_flag=True,
    default=False,
    help="Validate only, don't load state",
)
def load(state_path: str, dry_run: bool):
    """Validate and summarize a state file.

    STATE_PATH: Path to state JSON file
    """
    path = Path(state_path)
    is_valid, errors = load_dry_run(path)

    if not is_valid:
        click.echo(click.style("✗ State Invalid", fg="red"))
        for error in errors:
            click.echo(f"  - {error}")
        sys.exit(1)

    if dry_run:
        click.echo(click.style("✓ State OK", fg="green"))
        click.echo(f"  path: {path}")
        return

    dto = load_state_dto(path)
    zone_count = sum(len(m.zones) for m in dto.maps)
    usage_count = sum(len(a.usages) for a in dto.abilities)
    complete = sum(1 for t in dto.targets if t.target <= t.progress)

    click.echo(click.style("zonetrack State Loaded", fg="cyan", bold=True))
    click.echo()
    click.echo(f"  title:          {dto.name}")
    click.echo(f"  schema_version: {dto.manifest.schema_version}")
    click.echo(f"  maps/zones:     {len(dto.maps)}/{zone_count}")
    click.echo(f"  abilities/uses: {len(dto.abilities)}/{usage_count}")
    click.echo(f"  targets:        {len(dto.targets)} ({complete} complete)")
    click.echo(f"  created_at:     {dto.manifest.created_at.isoformat()}")
    if dto.manifest.modified_at:
        click.echo(f"  modified_at:    {dto.manifest.modified_at.isoformat()}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
