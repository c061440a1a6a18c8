"""CI service detection and report identity."""

from covwire.ci.environment import EnvLookup, service_from_environment, service_from_named_ci
from covwire.ci.identity import Identity, RepoToken, ServiceToken, best_match
from covwire.ci.service import (
    CiName,
    CiService,
    OtherCi,
    ServiceInfo,
    ci_name_str,
    parse_ci_name,
)

__all__ = [
    "CiName",
    "CiService",
    "EnvLookup",
    "Identity",
    "OtherCi",
    "RepoToken",
    "ServiceInfo",
    "ServiceToken",
    "best_match",
    "ci_name_str",
    "parse_ci_name",
    "service_from_environment",
    "service_from_named_ci",
]
