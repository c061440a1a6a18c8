"""Git metadata sent alongside a report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class GitHead:
    """The commit the coverage was measured on."""

    id: str
    author_name: str
    author_email: str
    committer_name: str
    committer_email: str
    message: str


@dataclass(frozen=True, slots=True)
class GitRemote:
    """Git remote information."""

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class GitInfo:
    """Head commit, branch and remotes of the measured checkout."""

    head: GitHead
    branch: str
    remotes: tuple[GitRemote, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape of the ``git`` object."""
        return {
            "head": {
                "id": self.head.id,
                "author_name": self.head.author_name,
                "author_email": self.head.author_email,
                "committer_name": self.head.committer_name,
                "committer_email": self.head.committer_email,
                "message": self.head.message,
            },
            "branch": self.branch,
            "remotes": [{"name": r.name, "url": r.url} for r in self.remotes],
        }
