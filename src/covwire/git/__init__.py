"""Git metadata for reports."""

from covwire.git.collect import collect_git_info, head_commit_sha
from covwire.git.errors import GitError, NotARepositoryError, UnbornHeadError
from covwire.git.models import GitHead, GitInfo, GitRemote

__all__ = [
    "GitError",
    "GitHead",
    "GitInfo",
    "GitRemote",
    "NotARepositoryError",
    "UnbornHeadError",
    "collect_git_info",
    "head_commit_sha",
]
