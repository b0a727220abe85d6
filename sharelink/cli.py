"""Click-based CLI for sharelink - shared folder link reconciler."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError
from rich.markup import escape

from sharelink import __version__
from sharelink.agent import run_reconciliation
from sharelink.config import (
    SharelinkConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from sharelink.exceptions import MetadataError
from sharelink.logger import EventCode, configure_logging, log_event
from sharelink.output.console import Console, create_console
from sharelink.reconcile.engine import ReconcileEngine
from sharelink.resolver.desired import resolve_desired_links
from sharelink.resolver.source import YamlSubscriptionSource
from sharelink.utils.paths import expand_path


def _load_config_or_exit(console: Console, *, required: bool = True) -> SharelinkConfig:
    """
    Load configuration, exit with code 1 on failure.

    Without a config file, runs fall back to defaults so that the account
    context can come from options and environment alone.
    """
    try:
        return load_config()
    except FileNotFoundError as e:
        if not required:
            return SharelinkConfig()
        console.print_error(str(e))
        sys.exit(1)
    except yaml.YAMLError as e:
        console.print_error(f"Invalid YAML in configuration: {e}")
        sys.exit(1)
    except ValidationError as e:
        console.print_error(f"Invalid configuration: {e}")
        sys.exit(1)


def _context(
    config: SharelinkConfig,
    console: Console,
    home: Optional[Path],
    account: Optional[str],
    metadata: Optional[Path],
) -> tuple[Path, str, Path]:
    """Combine options, environment and config into (home, account, metadata)."""
    home_path = home or (Path(config.account.home) if config.account.home else None)
    account_id = account or config.account.id
    metadata_path = metadata or Path(config.metadata.path)

    if home_path is None:
        console.print_error("No home directory: use --home, SHARELINK_HOME or account.home")
        sys.exit(1)
    if not account_id:
        console.print_error("No account: use --account, SHARELINK_ACCOUNT or account.id")
        sys.exit(1)
    if not home_path.is_dir():
        console.print_error(f"Home directory does not exist: {home_path}")
        sys.exit(1)

    return home_path, account_id, metadata_path


def _load_source_or_exit(console: Console, metadata_path: Path) -> YamlSubscriptionSource:
    """Load metadata; nothing is touched when it cannot be read."""
    try:
        return YamlSubscriptionSource(metadata_path)
    except MetadataError as e:
        log_event(EventCode.METADATA_ERROR, "could not load metadata", level=logging.ERROR, path=metadata_path, error=e)
        console.print_error(str(e))
        sys.exit(1)


def _context_options(func):
    """Shared --home/--account/--metadata/--verbose options."""
    func = click.option("--verbose", "-v", is_flag=True, help="Show every decision")(func)
    func = click.option(
        "--metadata",
        type=click.Path(path_type=Path),
        help="Subscription metadata YAML file (overrides metadata.path)",
    )(func)
    func = click.option("--account", "-a", envvar="SHARELINK_ACCOUNT", help="Account identifier")(func)
    func = click.option(
        "--home",
        "-H",
        envvar="SHARELINK_HOME",
        type=click.Path(path_type=Path),
        help="Account home directory",
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="sharelink")
def cli() -> None:
    """Sharelink - shared folder link reconciler.

    Replaces subscription folders in an account home with symlinks to the
    shares declared by "share=/path" lines in application notes, and
    removes links that are no longer declared.
    """
    pass


@cli.command()
@_context_options
def run(home: Optional[Path], account: Optional[str], metadata: Optional[Path], verbose: bool) -> None:
    """Reconcile shared folder links for an account.

    Always exits 0 once the run completed; failed items are retried on
    the next run.
    """
    console = create_console(verbose=verbose)
    config = _load_config_or_exit(console, required=False)
    console = create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)
    configure_logging(verbose=console.verbose, log_file=config.output.log_file, console=console.rich)

    home_path, account_id, metadata_path = _context(config, console, home, account, metadata)
    source = _load_source_or_exit(console, metadata_path)

    result = run_reconciliation(home_path, source, account_id, marker=config.marker)
    console.print_result(result, expand_path(home_path))


@cli.command()
@_context_options
def status(home: Optional[Path], account: Optional[str], metadata: Optional[Path], verbose: bool) -> None:
    """Show what a run would change, without changing anything."""
    console = create_console(verbose=verbose)
    config = _load_config_or_exit(console, required=False)
    console = create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)
    configure_logging(verbose=console.verbose, console=console.rich)

    home_path, account_id, metadata_path = _context(config, console, home, account, metadata)
    source = _load_source_or_exit(console, metadata_path)

    engine = ReconcileEngine(home_path, marker=config.marker)
    desired = resolve_desired_links(source, account_id, engine.home)
    sets = engine.plan(desired)

    console.print_info(f"Account: {account_id}")
    console.print_info(f"Home:    {engine.home}")
    console.print_plan(sets, engine.home)

    if sets.has_changes:
        console.print_warning(f"{len(sets.discovered)} to remove, {len(sets.desired)} to create")
    else:
        console.print_success("Everything is linked")


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
def config_init() -> None:
    """Create the default configuration file if missing."""
    console = create_console()
    path, created = ensure_config_exists()
    if created:
        console.print_success(f"Created {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


@config.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    console = create_console()
    cfg = _load_config_or_exit(console)
    console.print_config_summary(str(get_config_path()), cfg.account.home, cfg.account.id)
    console.print(f"Metadata: {cfg.metadata.path}")
    console.print(f"Marker:   {cfg.marker}")
    if cfg.output.log_file:
        console.print(f"Log file: {cfg.output.log_file}")


@config.command("check")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
def config_check(file: Path) -> None:
    """Validate a configuration file."""
    console = create_console()
    valid, errors = validate_config_file(file)
    if valid:
        console.print_success(f"{file} is valid")
        return

    console.print_error(f"{file} is invalid:")
    for error in errors:
        console.print(f"  [red]•[/red] {escape(error)}")
    sys.exit(1)


if __name__ == "__main__":
    cli()
