import logging
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from rules_sync.config import SyncConfig, load_config, parse_targets
from rules_sync.errors import SyncAppError
from rules_sync.executor import SyncExecutor
from rules_sync.models import SyncPlan, SyncTarget
from rules_sync.planner import CursorConversionPlanner, SyncPlanner
from rules_sync.tui import SyncConsoleUI
from rules_sync.tui.renderers import CONVERT_NEXT_STEPS, SYNC_NEXT_STEPS


PACKAGE_LOGGER = "rules_sync"
TARGET_VALUES = [target.value for target in SyncTarget]


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
            )
        )


def _project_argument() -> Callable:
    return click.argument(
        "project_root",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
    )


def _sync_options(func: Callable) -> Callable:
    decorators = [
        _project_argument(),
        click.option(
            "--to",
            "targets",
            default=None,
            help=f"Comma-separated targets (default: {','.join(TARGET_VALUES)}).",
        ),
        click.option(
            "--default-scope",
            default=None,
            help="applyTo used when a rule has neither globs nor alwaysApply.",
        ),
        click.option(
            "--assets-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Directory with templates (default: bundled assets).",
        ),
        click.option(
            "--source-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Directory with canonical rules (default: master-rules).",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _load_config(
    project_root: Path,
    targets: Optional[str] = None,
    default_scope: Optional[str] = None,
    assets_dir: Optional[Path] = None,
    source_dir: Optional[Path] = None,
) -> SyncConfig:
    try:
        config = load_config(project_root.expanduser().resolve())
    except SyncAppError as exc:
        raise click.ClickException(str(exc))
    return config.with_overrides(
        targets=parse_targets(targets) if targets is not None else None,
        default_scope=default_scope,
        assets_dir=assets_dir,
        source_dir=source_dir,
    )


def _build_sync_plan(config: SyncConfig) -> SyncPlan:
    try:
        return SyncPlanner(config).build()
    except SyncAppError as exc:
        raise click.ClickException(str(exc))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Keep one set of rules in sync across AI coding assistants."""
    _configure_logging(verbose)


@cli.command(help="Build and print a dry-run plan.")
@_sync_options
def plan(
    project_root: Path,
    targets: Optional[str],
    default_scope: Optional[str],
    assets_dir: Optional[Path],
    source_dir: Optional[Path],
) -> None:
    ui = SyncConsoleUI(Console())
    config = _load_config(project_root, targets, default_scope, assets_dir, source_dir)
    plan_result = _build_sync_plan(config)

    ui.render_plan(plan_result, mode="plan", project_root=config.project_root)

    if plan_result.errors:
        raise click.exceptions.Exit(1)


@cli.command(help="Generate every requested target from the canonical rules.")
@_sync_options
def apply(
    project_root: Path,
    targets: Optional[str],
    default_scope: Optional[str],
    assets_dir: Optional[Path],
    source_dir: Optional[Path],
) -> None:
    ui = SyncConsoleUI(Console())
    config = _load_config(project_root, targets, default_scope, assets_dir, source_dir)
    plan_result = _build_sync_plan(config)

    ui.render_plan(plan_result, mode="apply", project_root=config.project_root)
    result = SyncExecutor().execute(plan_result)
    ui.render_apply_result(result)

    stats = plan_result.stats.bump(errors=result.failed)
    ui.render_summary(stats, title="Synchronization", next_steps=SYNC_NEXT_STEPS)
    if stats.errors:
        raise click.exceptions.Exit(1)


@cli.command(help="Convert .cursor/rules/*.mdc into .github/instructions.")
@_project_argument()
@click.option(
    "--default-scope",
    default=None,
    help="applyTo used when a rule has neither globs nor alwaysApply.",
)
@click.option("--dry-run", is_flag=True, help="Print the plan without writing.")
def convert(
    project_root: Path,
    default_scope: Optional[str],
    dry_run: bool,
) -> None:
    ui = SyncConsoleUI(Console())
    config = _load_config(project_root, default_scope=default_scope)

    try:
        plan_result = CursorConversionPlanner(config).build()
    except SyncAppError as exc:
        raise click.ClickException(str(exc))

    mode = "convert:dry-run" if dry_run else "convert"
    ui.render_plan(plan_result, mode=mode, project_root=config.project_root)

    stats = plan_result.stats
    if not dry_run:
        result = SyncExecutor().execute(plan_result)
        ui.render_apply_result(result)
        stats = stats.bump(errors=result.failed)
    ui.render_summary(stats, title="Conversion", next_steps=CONVERT_NEXT_STEPS)
    if stats.errors:
        raise click.exceptions.Exit(1)


@cli.command("targets", help="List the known target names.")
def list_targets() -> None:
    for value in TARGET_VALUES:
        click.echo(value)


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    except click.exceptions.Abort:
        return 1
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
