"""Coverage report assembled before upload."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from covwire.ci.identity import Identity
from covwire.core.errors import ReportSealedError
from covwire.coverage.models import SourceFile
from covwire.git.models import GitInfo

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommitSha:
    """Commit identified by id only."""

    sha: str


@dataclass(frozen=True, slots=True)
class GitDetails:
    """Commit identified by full git metadata."""

    info: GitInfo


CommitReference = CommitSha | GitDetails | None


@dataclass(slots=True)
class CoverageReport:
    """Identity, source files and commit reference of one upload.

    Sources keep the order they were added in. The commit is either a bare
    sha or full git info, never both; setting one replaces the other. Once
    serialization has started the report is sealed and further changes
    raise ReportSealedError.
    """

    identity: Identity
    sources: list[SourceFile] = field(default_factory=list)
    commit: CommitReference = None
    _sealed: bool = field(default=False, init=False, repr=False)

    def add_source(self, source: SourceFile) -> None:
        self._check_open("add source")
        self.sources.append(source)
        log.debug("source_added", name=source.name, total=len(self.sources))

    def set_commit_sha(self, sha: str) -> None:
        self._check_open("set commit sha")
        self.commit = CommitSha(sha)

    def set_git_info(self, info: GitInfo) -> None:
        self._check_open("set git info")
        self.commit = GitDetails(info)

    @property
    def commit_sha(self) -> str | None:
        return self.commit.sha if isinstance(self.commit, CommitSha) else None

    @property
    def git_info(self) -> GitInfo | None:
        return self.commit.info if isinstance(self.commit, GitDetails) else None

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the report; called when serialization begins."""
        self._sealed = True

    def _check_open(self, operation: str) -> None:
        if self._sealed:
            raise ReportSealedError.sealed(operation)
