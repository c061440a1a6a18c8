"""LCOV tracefile reader.

LCOV is a plain text format with records like:
- SF:<source file path>
- DA:<line>,<hit count>[,<checksum>]
- BRDA:<line>,<block>,<branch>,<taken>
- end_of_record

Function and summary records (FN, FNDA, LF, LH, BRF, BRH, ...) carry
nothing the ingestion format uses and are skipped.

Produced by: pytest-cov, cargo-llvm-cov, gcov/lcov, grcov, dart test
"""

import contextlib
from pathlib import Path

import structlog

from covwire.coverage.models import BranchRecord, CoverageParseError, FileHits

log = structlog.get_logger(__name__)


def _hit_count(value: str) -> int:
    # '-' marks a branch whose block never ran
    return 0 if value == "-" else int(value)


def parse_lcov(path: Path, *, base_path: Path | None = None) -> dict[str, FileHits]:
    """Parse an LCOV tracefile into per-file hits keyed by path.

    Files recorded more than once are merged: line hits add up and
    branch records are appended in file order.

    Raises:
        CoverageParseError: If the file is missing or unreadable.
    """
    if not path.exists():
        raise CoverageParseError(f"LCOV file not found: {path}")

    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise CoverageParseError(f"Failed to read LCOV file: {e}") from e

    files: dict[str, FileHits] = {}
    current: FileHits | None = None

    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue

        if line.startswith("SF:"):
            file_path = line[3:]
            if base_path:
                # Path not under base_path -> use as-is
                with contextlib.suppress(ValueError):
                    file_path = Path(file_path).relative_to(base_path).as_posix()
            current = files.setdefault(file_path, FileHits(path=file_path))

        elif line.startswith("DA:"):
            if current is None:
                continue
            parts = line[3:].split(",")
            if len(parts) >= 2:
                try:
                    line_num = int(parts[0])
                    hits = _hit_count(parts[1])
                except ValueError:
                    log.debug("lcov_bad_record", record=line)
                    continue
                current.lines[line_num] = current.lines.get(line_num, 0) + hits

        elif line.startswith("BRDA:"):
            if current is None:
                continue
            parts = line[5:].split(",")
            if len(parts) >= 4:
                try:
                    record = BranchRecord(
                        line=int(parts[0]),
                        block_id=int(parts[1]),
                        branch_id=int(parts[2]),
                        hits=_hit_count(parts[3]),
                    )
                except ValueError:
                    log.debug("lcov_bad_record", record=line)
                    continue
                current.branches.append(record)

        elif line == "end_of_record":
            current = None

    log.debug("lcov_parsed", path=str(path), files=len(files))
    return files
