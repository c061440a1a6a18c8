"""Report identity: a secret repo token, or a token tied to a CI service."""

from __future__ import annotations

import os
from dataclasses import dataclass

from covwire.ci.environment import EnvLookup, service_from_environment, service_from_named_ci
from covwire.ci.service import CiName, ServiceInfo
from covwire.core.errors import IdentityError


@dataclass(frozen=True, slots=True)
class RepoToken:
    """Secret token identifying the repository."""

    token: str

    def __repr__(self) -> str:
        return "RepoToken(token=***)"


@dataclass(frozen=True, slots=True)
class ServiceToken:
    """CI-attributed identity. ``token`` may be empty."""

    token: str
    service: ServiceInfo

    def __repr__(self) -> str:
        masked = "***" if self.token else "''"
        return f"ServiceToken(token={masked}, service={self.service!r})"


Identity = RepoToken | ServiceToken


def best_match(
    explicit_token: str | None = None,
    *,
    ci: CiName | None = None,
    get_env: EnvLookup = os.environ.get,
) -> Identity:
    """Pick the identity for a report.

    A detected CI service always wins and carries the token if there is
    one; otherwise the token alone is used. Passing ``ci`` names the
    service instead of detecting it.

    Raises:
        IdentityError: If there is neither a CI service nor a token.
    """
    if ci is not None:
        service = service_from_named_ci(ci, get_env)
    else:
        service = service_from_environment(get_env)
    if service is not None:
        return ServiceToken(explicit_token or "", service)
    if explicit_token:
        return RepoToken(explicit_token)
    raise IdentityError.undeterminable()
