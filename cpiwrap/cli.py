#!/usr/bin/env python3
"""
CPI Wrap CLI - Command-line interface
Click-based wrappers for CPILint and FlashPipe

    cpilint-wrapper <command> [options]
    flashpipe-wrapper <command> [options]
"""

import shutil
from functools import partial
from typing import List, Optional

import click
from rich.markup import escape

from cpiwrap import __version__
from cpiwrap.config import ConfigManager, CPILintConfig, FlashPipeConfig
from cpiwrap.core.iflows import zip_iflow
from cpiwrap.core.parallel import TaskResult, failed, run_parallel
from cpiwrap.errors import WrapperError
from cpiwrap.git import GitRepository, group_paths
from cpiwrap.output import err_console, info, set_quiet, status, warn
from cpiwrap.tools import CPILintTool, FlashPipeTool

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


class WrapperGroup(click.Group):
    """Click group reporting unknown commands the way the wrappers always have"""

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name is not None and self.get_command(ctx, cmd_name) is None \
                and not ctx.resilient_parsing:
            raise WrapperError(f"Unknown command: {cmd_name}")
        return super().resolve_command(ctx, args)


def config_option(default: str, tool_label: str):
    """-c option shared by every wrapper command"""
    return click.option(
        '-c', '--config', 'config', metavar='FILE', default=None,
        help=f'Path to {tool_label} configuration file (default: {default})'
    )


workers_option = click.option(
    '-w', '--workers', type=click.IntRange(min=1), default=None,
    help='Maximum number of parallel tool invocations (default: one per package)'
)


def _require_work_tree(repo: GitRepository):
    if not repo.is_work_tree():
        raise WrapperError("Directory does not contain Git working tree")


def _report_failures(results: List[TaskResult], action: str) -> List[TaskResult]:
    """Print one line per failed task and return the failures"""
    failures = failed(results)
    for result in failures:
        err_console.print(f"[red]{action} failed for {escape(result.name)}: {escape(result.error or '')}[/red]")
    return failures


def _start_group(ctx: click.Context, version: bool, quiet: bool, tool_label: str):
    set_quiet(quiet)
    if version:
        click.echo(f"{tool_label} wrapper (cpiwrap) v{__version__}")
        ctx.exit(0)
    if ctx.invoked_subcommand is None:
        raise WrapperError("Command is not specified")


# ---------------------------------------------------------------------------
# CPILint
# ---------------------------------------------------------------------------

CPILINT_EPILOG = f"""\b
References:
  CPILint ({CPILintTool.URL}) - Automated governance of your SAP Cloud Integration flows
"""


@click.group(cls=WrapperGroup, invoke_without_command=True,
             context_settings=CONTEXT_SETTINGS, epilog=CPILINT_EPILOG)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.option('-q', '--quiet', is_flag=True, help='Only print errors and tool output')
@click.pass_context
def cpilint_main(ctx, version, quiet):
    """
    CPILint wrapper

    Examples:
        cpilint-wrapper inspect-local-iflows
        cpilint-wrapper inspect-local-iflows -c ~/work/cpilint.yaml
    """
    _start_group(ctx, version, quiet, 'CPILint')


@cpilint_main.command('inspect-local-iflows', context_settings=CONTEXT_SETTINGS)
@config_option(CPILintConfig.DEFAULT_CONFIG, 'CPILint')
@workers_option
def inspect_local_iflows(config: Optional[str], workers: Optional[int]):
    """Inspect iFlows stored in local Git repository"""
    cfg = ConfigManager.load_cpilint_config(config)
    tool = CPILintTool()
    tool.require()

    repo = GitRepository(cfg.repo_dir)
    _require_work_tree(repo)

    staged_files = repo.staged_files()
    if not staged_files:
        raise WrapperError("Staging area does not contain staged files")
    packages_iflows = group_paths(staged_files, 2)

    # Relative tmp_dir is taken from the repository directory
    tmp_dir = cfg.repo_dir / cfg.tmp_dir

    try:
        status(f"[cyan]Packaging {len(packages_iflows)} iFlow(s)...[/cyan]")
        tasks = [
            (package_iflow, partial(zip_iflow, cfg.repo_dir, tmp_dir, package_iflow))
            for package_iflow in packages_iflows
        ]
        results = run_parallel(tasks, workers)
        if _report_failures(results, 'Packaging'):
            warn("Some iFlows were not packaged and will not be inspected")

        result = tool.inspect(cfg.rules_file, f"{tmp_dir}/*/*", cwd=cfg.repo_dir)
        if result.returncode != 0:
            info(f"CPILint finished with exit status {result.returncode}")
    finally:
        shutil.rmtree(tmp_dir, ignore_errors=True)


@cpilint_main.command('help')
@click.pass_context
def cpilint_help(ctx):
    """Show this message and exit"""
    click.echo(ctx.parent.get_help())


# ---------------------------------------------------------------------------
# FlashPipe
# ---------------------------------------------------------------------------

FLASHPIPE_EPILOG = f"""\b
References:
  FlashPipe ({FlashPipeTool.URL}) - The CI/CD Companion for SAP Integration Suite
"""


@click.group(cls=WrapperGroup, invoke_without_command=True,
             context_settings=CONTEXT_SETTINGS, epilog=FLASHPIPE_EPILOG)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.option('-q', '--quiet', is_flag=True, help='Only print errors and tool output')
@click.pass_context
def flashpipe_main(ctx, version, quiet):
    """
    FlashPipe wrapper

    Examples:
        flashpipe-wrapper snapshot-tenant-to-repo
        flashpipe-wrapper sync-repo-latest-commit-to-tenant -c ~/work/flashpipe.yaml
    """
    _start_group(ctx, version, quiet, 'FlashPipe')


@flashpipe_main.command('snapshot-tenant-to-repo', context_settings=CONTEXT_SETTINGS)
@config_option(FlashPipeConfig.DEFAULT_CONFIG, 'FlashPipe')
@click.pass_context
def snapshot_tenant_to_repo(ctx, config: Optional[str]):
    """Snapshot tenant workspace to local Git repository"""
    cfg = ConfigManager.load_flashpipe_config(config)
    tool = FlashPipeTool()
    tool.require()

    repo = GitRepository(cfg.git_repo_dir)
    if not repo.is_work_tree():
        status("[cyan]Initialising Git repository...[/cyan]")
        repo.init()

    result = tool.snapshot(cfg.config_file, cwd=cfg.git_repo_dir)
    if result.returncode != 0:
        err_console.print(f"[red]FlashPipe snapshot failed with exit status {result.returncode}[/red]")
        ctx.exit(result.returncode)


@flashpipe_main.command('sync-repo-latest-commit-to-tenant', context_settings=CONTEXT_SETTINGS)
@config_option(FlashPipeConfig.DEFAULT_CONFIG, 'FlashPipe')
@workers_option
def sync_repo_latest_commit_to_tenant(config: Optional[str], workers: Optional[int]):
    """Synchronize changes contained in latest Git commit to tenant"""
    cfg = ConfigManager.load_flashpipe_config(config)
    tool = FlashPipeTool()
    tool.require()

    repo = GitRepository(cfg.git_repo_dir)
    _require_work_tree(repo)

    latest_commit_files = repo.latest_commit_files()
    if not latest_commit_files:
        raise WrapperError("Latest commit does not contain changed files")
    packages = group_paths(latest_commit_files, 1)

    status(f"[cyan]Synchronizing {len(packages)} package(s) to tenant {escape(cfg.tenant)}...[/cyan]")

    def sync(package: str) -> int:
        return tool.sync(cfg.config_file, package, cwd=cfg.git_repo_dir).returncode

    results = run_parallel([(package, partial(sync, package)) for package in packages], workers)

    failures = _report_failures(results, 'Synchronization')
    if failures:
        raise WrapperError(f"{len(failures)} of {len(results)} package(s) failed to synchronize")


@flashpipe_main.command('help')
@click.pass_context
def flashpipe_help(ctx):
    """Show this message and exit"""
    click.echo(ctx.parent.get_help())
