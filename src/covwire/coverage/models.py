"""Per-file coverage data in the shape the ingestion service expects.

LineHits and BranchRecord are what coverage tools produce; SourceFile is
the dense, digested form that goes on the wire.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from covwire.core.errors import SourceReadError
from covwire.coverage.expansion import expand_branches, expand_lines

log = structlog.get_logger(__name__)

LineHits = Mapping[int, int]
"""1-based line number -> hit count."""


class CoverageParseError(Exception):
    """Error parsing coverage data."""

    pass


@dataclass(frozen=True, slots=True)
class BranchRecord:
    """Branch coverage at a specific line.

    Represents a single branch point (e.g., if/else, switch case).
    """

    line: int
    block_id: int
    branch_id: int
    hits: int


@dataclass(slots=True)
class FileHits:
    """Sparse coverage for one file, as read from a coverage tool."""

    path: str  # repo-relative path
    lines: dict[int, int] = field(default_factory=dict)  # line_number -> hit_count
    branches: list[BranchRecord] = field(default_factory=list)


def digest(content: bytes) -> str:
    """MD5 hex digest of raw file content."""
    return hashlib.md5(content).hexdigest()


def count_lines(text: str) -> int:
    """Number of newline-terminated lines; a trailing newline adds none.

    Only ``\\n`` ends a line. Form feeds and Unicode separators such as
    U+2028 stay inside the line they appear in, as coverage tools count.
    """
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)



@dataclass(frozen=True, slots=True)
class SourceFile:
    """One source file entry of a report.

    ``coverage`` has one entry per line of the file: None for lines that are
    not relevant, 0 for instrumented but never run, n for run n times.
    ``branches`` is None unless branch data was supplied, in which case it
    holds four integers per branch record.
    """

    name: str
    content_digest: str
    coverage: tuple[int | None, ...]
    branches: tuple[int, ...] | None = None
    raw_source: str | None = None

    @classmethod
    def from_content(
        cls,
        name: str,
        content: bytes,
        line_hits: LineHits,
        branch_records: Sequence[BranchRecord] | None = None,
        *,
        include_raw: bool = False,
        encoding: str = "utf-8",
    ) -> SourceFile:
        """Build from already-read content."""
        text = content.decode(encoding, errors="replace")
        return cls(
            name=name,
            content_digest=digest(content),
            coverage=tuple(expand_lines(line_hits, count_lines(text))),
            branches=tuple(expand_branches(branch_records)) if branch_records is not None else None,
            raw_source=text if include_raw else None,
        )

    @classmethod
    def build(
        cls,
        name: str | Path,
        path: Path,
        line_hits: LineHits,
        branch_records: Sequence[BranchRecord] | None = None,
        *,
        include_raw: bool = False,
    ) -> SourceFile:
        """Read ``path`` and build the entry for repo-relative ``name``.

        Raises:
            SourceReadError: If the file cannot be opened or fully read.
        """
        try:
            with path.open("rb") as f:
                content = f.read()
        except OSError as e:
            raise SourceReadError.unreadable(str(path), e.strerror or str(e)) from e

        source = cls.from_content(
            Path(name).as_posix(),
            content,
            line_hits,
            branch_records,
            include_raw=include_raw,
        )
        log.debug(
            "source_built",
            name=source.name,
            lines=len(source.coverage),
            branches=len(branch_records) if branch_records is not None else None,
        )
        return source

    @property
    def relevant_lines(self) -> int:
        """Lines that carry coverage data."""
        return sum(1 for hits in self.coverage if hits is not None)

    @property
    def covered_lines(self) -> int:
        """Lines hit at least once."""
        return sum(1 for hits in self.coverage if hits)
