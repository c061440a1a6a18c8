"""Report assembly and wire serialization."""

from covwire.report.models import CommitReference, CommitSha, CoverageReport, GitDetails
from covwire.report.serializer import identity_fields, source_file_to_wire, to_json, to_wire

__all__ = [
    "CommitReference",
    "CommitSha",
    "CoverageReport",
    "GitDetails",
    "identity_fields",
    "source_file_to_wire",
    "to_json",
    "to_wire",
]
