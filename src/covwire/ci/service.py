"""CI service metadata attached to a report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CiService(StrEnum):
    """CI services the ingestion service knows by name.

    Values are the literals used on the wire.
    """

    TRAVIS = "travis-ci"
    TRAVIS_PRO = "travis-pro"
    CIRCLE = "circle-ci"
    SEMAPHORE = "semaphore"
    JENKINS = "jenkins"
    CODESHIP = "codeship"


@dataclass(frozen=True, slots=True)
class OtherCi:
    """Any CI service without a dedicated literal."""

    name: str

    def __str__(self) -> str:
        return self.name


CiName = CiService | OtherCi


def parse_ci_name(value: str) -> CiName:
    """Map a service literal to its variant. Unknown strings become OtherCi."""
    try:
        return CiService(value)
    except ValueError:
        return OtherCi(value)


def ci_name_str(ci: CiName) -> str:
    """Wire literal for a CI name; inverse of parse_ci_name."""
    if isinstance(ci, CiService):
        return ci.value
    return ci.name


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    """Which CI system produced the run, plus its build attributes."""

    ci_name: CiName
    job_id: str | None = None
    build_number: str | None = None
    build_url: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    @property
    def service_name(self) -> str:
        return ci_name_str(self.ci_name)

    def to_dict(self) -> dict[str, str | None]:
        """Plain dict view, for display."""
        return {
            "service_name": self.service_name,
            "job_id": self.job_id,
            "build_number": self.build_number,
            "build_url": self.build_url,
            "branch": self.branch,
            "pull_request": self.pull_request,
        }
