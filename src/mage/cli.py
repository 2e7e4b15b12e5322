"""Command line interface for mage."""

import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.bootstrap import BootstrapManager, BootstrapReport
from .core.config import Config, load_config
from .core.errors import MageError
from .core.install_check import check_installed
from .core.linker import Linker, LinkResult, LinkStatus
from .core.logging import setup_logging
from .core.manifest import write_example_manifest
from .core.paths import expand_path
from .core.repository import GitRepository, parse_origin

console = Console()
logger = logging.getLogger(__name__)

STATUS_STYLES = {
    LinkStatus.LINKED: "green",
    LinkStatus.UNLINKED: "green",
    LinkStatus.SKIPPED: "yellow",
    LinkStatus.FAILED: "red",
}


@click.group()
@click.version_option(__version__, prog_name="mage")
@click.option("--debug", is_flag=True, help="Show debug logging")
@click.option("--log-file", help="Also write a debug log to this file")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file (defaults to ~/.config/mage/config.yaml)",
)
@click.pass_context
def cli(
    ctx: click.Context, debug: bool, log_file: Optional[str], config_file: Optional[Path]
) -> None:
    """Link your dotfiles from a Git repository into your home directory.

    The repository holds a magefile (magefile.toml) listing what to link:

    \b
      ["nested/.bashrc"]
      target_path = "~/.bashrc"

    Main commands:

      link    Clone a dotfiles repository if needed and create the symlinks
      clone   Only clone a dotfiles repository
      clean   Remove the symlinks created by link
      init    Write an example magefile

    Existing files are never overwritten.
    """
    config = load_config(config_file)
    setup_logging(debug=debug, log_file=log_file or config.log_file)
    for error in config.validate():
        console.print(f"[yellow]Config warning: {escape(error)}")
    ctx.obj = config


def print_results(results: List[LinkResult], title: str) -> None:
    """Print per-entry results as a table."""
    table = Table(title=title)
    table.add_column("Entry", style="cyan")
    table.add_column("Target")
    table.add_column("Status")
    table.add_column("Details")

    for result in results:
        style = STATUS_STYLES[result.status]
        details = result.reason or ""
        if result.installed is False:
            details = f"{details} (program not installed)".strip()
        table.add_row(
            escape(result.key),
            escape(str(result.target)) if result.target else "",
            f"[{style}]{result.status.value}[/{style}]",
            escape(details),
        )

    console.print(table)

    failed = [result for result in results if result.status is LinkStatus.FAILED]
    if failed:
        console.print("[red]Some errors occurred:")
        for result in failed:
            console.print(f"  {escape(result.key)}: {escape(result.reason or 'unknown error')}")


def print_summary(report: BootstrapReport) -> None:
    """Print the counts of a bootstrap run."""
    style = "green" if report.ok else "yellow"
    console.print(
        f"[{style}]Linked {report.linked}, skipped {report.skipped}, failed {report.failed}"
    )


@cli.command()
@click.argument("origin")
@click.option(
    "--path",
    "-p",
    help="Where a remote repository is cloned (defaults to clone_path from the config, ~/.mage)",
)
@click.option(
    "--manifest",
    "-m",
    help="Magefile to use, relative to the repository root (defaults to magefile*)",
)
@click.option(
    "--check-installed/--no-check-installed",
    "check_installed_flag",
    default=None,
    help="Report whether the program behind each entry is installed",
)
@click.pass_obj
def link(
    config: Config,
    origin: str,
    path: Optional[str],
    manifest: Optional[str],
    check_installed_flag: Optional[bool],
) -> None:
    """Link dotfiles from ORIGIN into the home directory.

    ORIGIN is a local directory, a GitHub clone URL, or an owner/repo shorthand.
    A remote repository is cloned first, unless the clone path already exists.

    Entries whose target already exists are skipped. The command exits with
    status 0 even if some entries are skipped or fail.

    Examples:

      # Clone git@github.com:someone/dotfiles.git into ~/.mage and link it
      mage link someone/dotfiles

      # Link from a local checkout
      mage link ~/src/dotfiles

      # Clone somewhere else
      mage link https://github.com/someone/dotfiles.git --path ~/dotfiles
    """
    if check_installed_flag is None:
        check_installed_flag = config.check_installed
    try:
        dotfiles = parse_origin(origin, path or config.clone_path)
        linker = Linker(install_checker=check_installed if check_installed_flag else None)
        manager = BootstrapManager(config, linker=linker)

        if dotfiles.is_remote and not dotfiles.path.exists():
            console.print(f"Cloning {escape(str(dotfiles.url))} into {escape(str(dotfiles.path))}")
        report = manager.run(dotfiles.url, dotfiles.path, manifest)
    except MageError as e:
        logger.debug("link failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}")
        raise click.Abort()

    print_results(report.results, f"Linking from {escape(str(report.repo_root))}")
    print_summary(report)


@cli.command()
@click.argument("repository")
@click.option("--path", "-p", help="Where to clone (defaults to clone_path from the config)")
@click.pass_obj
def clone(config: Config, repository: str, path: Optional[str]) -> None:
    """Clone a dotfiles REPOSITORY without linking anything.

    REPOSITORY is a GitHub clone URL or an owner/repo shorthand.
    """
    try:
        dotfiles = parse_origin(repository, path or config.clone_path)
        if not dotfiles.is_remote:
            console.print(f"[red]Error: Invalid repository: {escape(repository)}")
            raise click.Abort()
        repo = GitRepository.clone(dotfiles.url, dotfiles.path)
    except MageError as e:
        logger.debug("clone failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}")
        raise click.Abort()

    console.print(f"[green]Cloned {escape(str(dotfiles.url))} into {escape(str(repo.path))}")


@cli.command()
@click.argument("directory")
@click.option("--manifest", "-m", help="Magefile to use, relative to the repository root")
@click.pass_obj
def clean(config: Config, directory: str, manifest: Optional[str]) -> None:
    """Remove the symlinks pointing into the dotfiles in DIRECTORY.

    Only symlinks that point at the matching file in DIRECTORY are removed.
    Anything else at a target path is left alone.
    """
    try:
        manager = BootstrapManager(config, linker=Linker())
        results = manager.clean(expand_path(directory), manifest)
    except MageError as e:
        logger.debug("clean failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}")
        raise click.Abort()

    print_results(results, f"Cleaning {escape(directory)}")


@cli.command()
@click.argument(
    "directory",
    default=".",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
def init(directory: Path) -> None:
    """Write an example magefile.toml into DIRECTORY (defaults to the current one)."""
    try:
        path = write_example_manifest(directory)
    except FileExistsError:
        console.print(f"[red]Error: {escape(str(directory / 'magefile.toml'))} already exists")
        raise click.Abort()
    except OSError as e:
        logger.debug("init failed", exc_info=True)
        console.print(f"[red]Error: Failed to write magefile: {escape(str(e))}")
        raise click.Abort()

    console.print(f"[green]Created {escape(str(path))}")


def main() -> None:
    """Entry point for the mage CLI."""
    cli()


if __name__ == "__main__":
    main()
