"""Command line interface for git-select-branch."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from git_select_branch.branches import BranchSource, selectable_branches
from git_select_branch.config import Config, ConfigError, parse_theme
from git_select_branch.git import GitError, GitRepo
from git_select_branch.prompt import PromptInterrupted, select_branch

app = typer.Typer(help="Checkout a recent git branch interactively", add_completion=False)
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

EXIT_ABORTED = 1
EXIT_INTERRUPTED = 2


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
    logging.getLogger("git").setLevel(logging.WARNING)


def fail(err: Exception) -> typer.Exit:
    """Report an error on stderr and build the matching exit."""
    err_console.print(f"[red]Error:[/red] {escape(str(err))}")
    return typer.Exit(code=1)


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        raise fail(err) from err


def get_config(
    repo: GitRepo,
    fuzzy: Optional[bool] = None,
    theme: Optional[str] = None,
    limit: Optional[int] = None,
    show_all: bool = False,
) -> Config:
    """Read git config and apply command line overrides on top."""
    try:
        config = Config.from_git_config(repo.config_reader())
        if theme is not None:
            config.theme = parse_theme(theme)
    except (ConfigError, GitError) as err:
        raise fail(err) from err

    if fuzzy is not None:
        config.fuzzy = fuzzy
    if limit is not None:
        config.limit = limit
    if show_all:
        config.limit = None
    return config


def run(source: BranchSource, config: Config) -> None:
    """List, sort, prompt and checkout.

    Raises:
        typer.Exit: On cancellation or when the checkout fails
    """
    current = source.get_current_branch_name()
    choices = selectable_branches(source.list_local_branches(), config.limit)
    if not choices:
        console.print(f"[yellow]No other branches to switch to[/yellow] (on {escape(current or '<no branch>')})")
        return

    try:
        selected = select_branch(choices, current=current, fuzzy=config.fuzzy, theme=config.theme)
    except PromptInterrupted:
        err_console.print("[yellow]Interrupted[/yellow]")
        raise typer.Exit(code=EXIT_INTERRUPTED) from None

    if selected is None:
        err_console.print("[yellow]Aborted[/yellow]")
        raise typer.Exit(code=EXIT_ABORTED)

    try:
        source.checkout(selected)
    except GitError as err:
        raise fail(err) from err
    console.print(f"Switched to branch [cyan]{escape(selected)}[/cyan]")


@app.command()
def main(
    path: Annotated[Path, typer.Option(help="Path inside the git repository")] = Path("."),
    fuzzy: Annotated[
        Optional[bool], typer.Option("--fuzzy/--no-fuzzy", help="Type to filter the branch list")
    ] = None,
    theme: Annotated[Optional[str], typer.Option(help="Prompt theme: colorful or simple")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", min=1, help="Show at most this many branches")] = None,
    show_all: Annotated[bool, typer.Option("--all", "-a", help="Show every local branch")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Pick one of the most recently committed branches and check it out.

    Settings can also be stored in git config under select-branch.fuzzy,
    select-branch.theme and select-branch.limit.
    """
    setup_logging(verbose)
    repo = get_repo(path)
    config = get_config(repo, fuzzy=fuzzy, theme=theme, limit=limit, show_all=show_all)
    logger.debug("Using %s", config)
    run(repo, config)


if __name__ == "__main__":
    app()
