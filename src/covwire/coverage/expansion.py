"""Dense coverage arrays from sparse hit data.

The ingestion format wants one entry per source line and a flat integer
list for branches, while coverage tools report only the lines and branches
they instrumented.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covwire.coverage.models import BranchRecord


def expand_lines(hits: Mapping[int, int], line_count: int) -> list[int | None]:
    """Expand 1-based line hits into a list of exactly ``line_count`` entries.

    Entry ``i`` holds ``hits[i + 1]`` when that line was instrumented and
    ``None`` otherwise. Hits for lines past ``line_count`` are dropped.
    """
    return [hits.get(line) for line in range(1, line_count + 1)]


def expand_branches(records: Iterable[BranchRecord]) -> list[int]:
    """Flatten branch records into ``[line, block, branch, hits, ...]``.

    Input order and duplicates are preserved; nothing is validated.
    """
    flat: list[int] = []
    for record in records:
        flat.extend((record.line, record.block_id, record.branch_id, record.hits))
    return flat
