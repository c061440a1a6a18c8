"""Source file coverage: sparse hit data, dense expansion, LCOV input.

Usage:
    from covwire.coverage import SourceFile, parse_lcov

    for path, hits in parse_lcov(Path("coverage/lcov.info")).items():
        source = SourceFile.build(path, repo_root / path, hits.lines, hits.branches)
"""

from covwire.coverage.expansion import expand_branches, expand_lines
from covwire.coverage.lcov import parse_lcov
from covwire.coverage.models import (
    BranchRecord,
    CoverageParseError,
    FileHits,
    LineHits,
    SourceFile,
    count_lines,
    digest,
)

__all__ = [
    # Expansion
    "expand_branches",
    "expand_lines",
    # Models
    "BranchRecord",
    "CoverageParseError",
    "FileHits",
    "LineHits",
    "SourceFile",
    "count_lines",
    "digest",
    # LCOV
    "parse_lcov",
]
