"""CLI for gcd.

``gcd PATTERN...`` prints the path of the best matching repository and
nothing else on stdout; the shell wrapper installed by ``gcd install``
captures it and changes directory.
"""

import sys
from pathlib import Path

import click
import structlog

from gcd import __version__
from gcd.config.logging import configure_logging
from gcd.core.exceptions import GcdError, NoMatchFoundError
from gcd.shell.integration import SUPPORTED_SHELLS, install_shell_integration

logger = structlog.get_logger(__name__)

EXIT_NO_MATCH = 1
EXIT_ERROR = 2

JUMP_COMMAND = "jump"


def _create_services(settings=None):
    """Create indexing and retrieval services."""
    from gcd.config.settings import get_settings
    from gcd.git.scanner import RepoScanner
    from gcd.repositories.config_store import ConfigStore
    from gcd.services.indexing import IndexingService
    from gcd.services.retrieval import RetrievalService

    if settings is None:
        settings = get_settings()

    store = ConfigStore(settings.index_path)
    scanner = RepoScanner(
        marker_dir=settings.marker_dir,
        skip_dirs=settings.skip_dirs,
        follow_symlinks=settings.follow_symlinks,
    )
    return IndexingService(store=store, scanner=scanner), RetrievalService(store=store)


def _fail(error: GcdError, exit_code: int = EXIT_ERROR) -> None:
    logger.debug("Command failed", error_type=type(error).__name__, details=error.details)
    click.echo(f"Error: {error.message}", err=True)
    for key, value in error.details.items():
        click.echo(f"  {key}: {value}", err=True)
    sys.exit(exit_code)


class GcdGroup(click.Group):
    """Command group where an unknown first word is a pattern to jump to."""

    def resolve_command(self, ctx, args):
        cmd = self.get_command(ctx, args[0]) if args else None
        if args and (cmd is None or cmd.hidden) and not args[0].startswith("-"):
            return JUMP_COMMAND, self.get_command(ctx, JUMP_COMMAND), args
        return super().resolve_command(ctx, args)


@click.group(cls=GcdGroup, invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="gcd")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """gcd: jump to indexed git repositories by fuzzy name.

    \b
    gcd PATTERN...     print the best matching repository path
    gcd                list indexed repositories
    """
    from gcd.config.settings import get_settings

    settings = get_settings()
    configure_logging(log_level="DEBUG" if verbose else settings.log_level)

    if ctx.invoked_subcommand is None:
        _, retrieval_service = _create_services(settings)
        repos = retrieval_service.list_repositories()
        if not repos:
            click.echo("No repositories indexed. Run: gcd index <path>")
            return
        click.echo("Available repositories:")
        for name, path in repos.items():
            click.echo(f"{name}: {path}")


@cli.command(name=JUMP_COMMAND, hidden=True)
@click.argument("pattern", nargs=-1, required=True)
def jump(pattern: tuple[str, ...]) -> None:
    """Print the path of the repository best matching PATTERN."""
    query = " ".join(pattern)
    _, retrieval_service = _create_services()
    try:
        match = retrieval_service.resolve(query)
    except NoMatchFoundError as e:
        click.echo(e.message, err=True)
        sys.exit(EXIT_NO_MATCH)
    click.echo(str(match.path))


@cli.command()
@click.argument("path", default=".", type=click.Path(path_type=Path))
def index(path: Path) -> None:
    """Index git repositories under PATH (default: current directory)."""
    indexing_service, _ = _create_services()
    try:
        result = indexing_service.index(path)
    except GcdError as e:
        _fail(e)
    click.echo(f"Indexed {result.count} repositories from {result.scan_root} ({result.total} total)")


@cli.command()
@click.argument("shell", default="bash", type=click.Choice(SUPPORTED_SHELLS))
def install(shell: str) -> None:
    """Install shell integration for SHELL (bash, zsh, fish, ps)."""
    try:
        result = install_shell_integration(shell)
    except GcdError as e:
        _fail(e)
    except OSError as e:
        _fail(GcdError("Failed to install shell integration", details={"error": str(e)}))

    if result.installed:
        click.echo(f"Shell integration installed for {shell} in {result.profile_path}")
    else:
        click.echo(f"Shell integration for {shell} already present in {result.profile_path}")


if __name__ == "__main__":
    cli()
