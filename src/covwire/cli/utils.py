"""CLI utilities."""

from pathlib import Path

import click


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree looking for a .git entry (a directory, or a
    file for worktrees and submodules). If start_path is None, uses the
    current working directory.

    Raises:
        click.ClickException: If not inside a git repository
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate

    raise click.ClickException(
        f"Not inside a git repository: {start_path}\n"
        "Pass --repo-root to name the directory source paths are relative to."
    )
