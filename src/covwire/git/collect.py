"""Read GitInfo from a local checkout with pygit2."""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from covwire.git.errors import NotARepositoryError, UnbornHeadError
from covwire.git.models import GitHead, GitInfo, GitRemote

log = structlog.get_logger(__name__)

DETACHED_BRANCH = "HEAD"
"""Branch name reported when HEAD is detached."""


def _open(repo_path: Path | str) -> pygit2.Repository:
    path = str(repo_path)
    discovered = pygit2.discover_repository(path)
    if discovered is None:
        raise NotARepositoryError(path)
    try:
        return pygit2.Repository(discovered)
    except pygit2.GitError as e:
        raise NotARepositoryError(path) from e


def _head_commit(repo: pygit2.Repository, repo_path: Path | str) -> pygit2.Commit:
    if repo.head_is_unborn:
        raise UnbornHeadError(str(repo_path))
    return repo.head.peel(pygit2.Commit)


def head_commit_sha(repo_path: Path | str) -> str:
    """Full hex id of the HEAD commit.

    Raises:
        NotARepositoryError: If no repository contains repo_path.
        UnbornHeadError: If the repository has no commits.
    """
    repo = _open(repo_path)
    return str(_head_commit(repo, repo_path).id)


def collect_git_info(repo_path: Path | str) -> GitInfo:
    """Collect head commit, branch and remotes for the repository at repo_path.

    Raises:
        NotARepositoryError: If no repository contains repo_path.
        UnbornHeadError: If the repository has no commits.
    """
    repo = _open(repo_path)
    commit = _head_commit(repo, repo_path)

    head = GitHead(
        id=str(commit.id),
        author_name=commit.author.name,
        author_email=commit.author.email,
        committer_name=commit.committer.name,
        committer_email=commit.committer.email,
        message=commit.message,
    )
    branch = DETACHED_BRANCH if repo.head_is_detached else repo.head.shorthand
    remotes = tuple(GitRemote(name=r.name, url=r.url or "") for r in repo.remotes)

    log.debug("git_info_collected", head=head.id[:7], branch=branch, remotes=len(remotes))
    return GitInfo(head=head, branch=branch, remotes=remotes)
