"""Wire encoding of a CoverageReport.

Output schema (keys appear only under the stated condition):
{
    "repo_token": str,            # RepoToken, or non-empty ServiceToken token
    "service_name": str,          # ServiceToken
    "service_job_id": str,        # ServiceToken, when known
    "service_number": str,        # ServiceToken, when known
    "service_build_url": str,     # ServiceToken, when known
    "service_branch": str,        # ServiceToken, when known
    "service_pull_request": str,  # ServiceToken, when known
    "commit_sha": str,            # bare commit reference
    "git": {...},                 # detailed commit reference
    "source_files": [
        {
            "name": str,
            "source_digest": str,
            "coverage": [int | null, ...],
            "branches": [int, ...],   # when branch data was supplied
            "source": str             # when raw source was included
        },
        ...
    ]
}
"""

import json
from typing import Any

from covwire.ci.identity import Identity, RepoToken, ServiceToken
from covwire.coverage.models import SourceFile
from covwire.report.models import CommitSha, CoverageReport, GitDetails

_SERVICE_FIELDS = (
    ("service_job_id", "job_id"),
    ("service_number", "build_number"),
    ("service_build_url", "build_url"),
    ("service_branch", "branch"),
    ("service_pull_request", "pull_request"),
)


def identity_fields(identity: Identity) -> dict[str, Any]:
    """Authentication and CI attribution keys for an identity."""
    fields: dict[str, Any] = {}
    if isinstance(identity, RepoToken):
        fields["repo_token"] = identity.token
    elif isinstance(identity, ServiceToken):
        # An empty token means none was configured
        if identity.token:
            fields["repo_token"] = identity.token
        service = identity.service
        fields["service_name"] = service.service_name
        for key, attr in _SERVICE_FIELDS:
            value = getattr(service, attr)
            if value is not None:
                fields[key] = value
    return fields


def source_file_to_wire(source: SourceFile) -> dict[str, Any]:
    """Wire object for one source file."""
    wire: dict[str, Any] = {
        "name": source.name,
        "source_digest": source.content_digest,
        "coverage": list(source.coverage),
    }
    if source.branches is not None:
        wire["branches"] = list(source.branches)
    if source.raw_source is not None:
        wire["source"] = source.raw_source
    return wire


def to_wire(report: CoverageReport) -> dict[str, Any]:
    """Encode a report as the ingestion service's JSON object.

    Seals the report.
    """
    report.seal()
    wire = identity_fields(report.identity)

    if isinstance(report.commit, CommitSha):
        wire["commit_sha"] = report.commit.sha
    elif isinstance(report.commit, GitDetails):
        wire["git"] = report.commit.info.to_dict()

    wire["source_files"] = [source_file_to_wire(s) for s in report.sources]
    return wire


def to_json(report: CoverageReport, *, indent: int | None = None) -> bytes:
    """UTF-8 JSON payload for upload."""
    return json.dumps(to_wire(report), indent=indent).encode("utf-8")
