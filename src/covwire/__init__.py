"""covwire - build coverage reports and upload them to a coverage aggregation service.

Usage:
    from covwire import CoverageReport, SourceFile, best_match, to_json

    report = CoverageReport(best_match(token))
    report.add_source(SourceFile.build("src/lib.py", repo_root / "src/lib.py", {5: 1, 6: 0}))
    payload = to_json(report)
"""

from covwire.ci import (
    CiService,
    OtherCi,
    RepoToken,
    ServiceInfo,
    ServiceToken,
    best_match,
    service_from_environment,
    service_from_named_ci,
)
from covwire.coverage import BranchRecord, SourceFile, expand_branches, expand_lines
from covwire.git import GitHead, GitInfo, GitRemote
from covwire.report import CoverageReport, to_json, to_wire
from covwire.upload import UploadStatus, classify, upload_report

__version__ = "0.1.0"

__all__ = [
    "BranchRecord",
    "CiService",
    "CoverageReport",
    "GitHead",
    "GitInfo",
    "GitRemote",
    "OtherCi",
    "RepoToken",
    "ServiceInfo",
    "ServiceToken",
    "SourceFile",
    "UploadStatus",
    "best_match",
    "classify",
    "expand_branches",
    "expand_lines",
    "service_from_environment",
    "service_from_named_ci",
    "to_json",
    "to_wire",
    "upload_report",
]
