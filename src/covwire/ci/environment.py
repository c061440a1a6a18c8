"""CI detection from environment variables.

Every function takes the environment as a lookup callable so callers and
tests can supply a synthetic environment; the default is ``os.environ.get``.
A variable counts as set when the lookup returns anything but None, even
an empty string.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable

import structlog

from covwire.ci.service import CiName, CiService, ServiceInfo, parse_ci_name

log = structlog.get_logger(__name__)

EnvLookup = Callable[[str], str | None]

_GENERIC_VARS = (
    "CI_NAME",
    "CI_BUILD_NUMBER",
    "CI_JOB_ID",
    "CI_BUILD_URL",
    "CI_BRANCH",
    "CI_PULL_REQUEST",
)


def _travis(get_env: EnvLookup) -> ServiceInfo:
    pull_request = get_env("TRAVIS_PULL_REQUEST")
    return ServiceInfo(
        ci_name=CiService.TRAVIS,
        job_id=get_env("TRAVIS_JOB_ID"),
        branch=get_env("TRAVIS_BRANCH"),
        # Travis reports the literal "false" for push builds
        pull_request=pull_request if pull_request != "false" else None,
    )


def _circle(get_env: EnvLookup) -> ServiceInfo:
    # CircleCI has no job id separate from the build number
    return ServiceInfo(
        ci_name=CiService.CIRCLE,
        build_number=get_env("CIRCLE_BUILD_NUM"),
        branch=get_env("CIRCLE_BRANCH"),
    )


def _jenkins(get_env: EnvLookup) -> ServiceInfo:
    return ServiceInfo(
        ci_name=CiService.JENKINS,
        build_number=get_env("BUILD_NUM"),
        build_url=get_env("BUILD_URL"),
        branch=get_env("GIT_BRANCH"),
    )


def _semaphore(get_env: EnvLookup) -> ServiceInfo:
    return ServiceInfo(
        ci_name=CiService.SEMAPHORE,
        build_number=get_env("SEMAPHORE_BUILD_NUMBER"),
        pull_request=get_env("PULL_REQUEST_NUMBER"),
    )


def _generic(get_env: EnvLookup) -> ServiceInfo | None:
    values = {name: get_env(name) for name in _GENERIC_VARS}
    if all(value is None for value in values.values()):
        return None
    return ServiceInfo(
        ci_name=parse_ci_name("unknown" if values["CI_NAME"] is None else values["CI_NAME"]),
        job_id=values["CI_JOB_ID"],
        build_number=values["CI_BUILD_NUMBER"],
        build_url=values["CI_BUILD_URL"],
        branch=values["CI_BRANCH"],
        pull_request=values["CI_PULL_REQUEST"],
    )


# Checked in order; the first indicator that is set wins.
_DETECTORS: tuple[tuple[str, Callable[[EnvLookup], ServiceInfo]], ...] = (
    ("TRAVIS", _travis),
    ("CIRCLECI", _circle),
    ("JENKINS_URL", _jenkins),
    ("SEMAPHORE", _semaphore),
)

_EXTRACTORS: dict[CiService, Callable[[EnvLookup], ServiceInfo]] = {
    CiService.TRAVIS: _travis,
    CiService.TRAVIS_PRO: _travis,
    CiService.CIRCLE: _circle,
    CiService.JENKINS: _jenkins,
    CiService.SEMAPHORE: _semaphore,
}


def service_from_environment(get_env: EnvLookup = os.environ.get) -> ServiceInfo | None:
    """Detect the CI service running this process.

    Checks TRAVIS, CIRCLECI, JENKINS_URL and SEMAPHORE in that order, then
    falls back to the generic CI_* variables. Returns None outside CI.
    """
    for indicator, extract in _DETECTORS:
        if get_env(indicator) is not None:
            service = extract(get_env)
            break
    else:
        service = _generic(get_env)

    if service is None:
        log.debug("ci_not_detected")
    else:
        log.info("ci_detected", service_name=service.service_name)
    return service


def service_from_named_ci(ci: CiName, get_env: EnvLookup = os.environ.get) -> ServiceInfo | None:
    """Extract service fields for an explicitly named CI, without sniffing.

    Services without a dedicated extractor read the generic CI_* variables
    and return None when none of them is set. The result always carries
    ``ci`` as its name, which is how travis-pro is told apart from travis-ci.
    """
    extract = _EXTRACTORS.get(ci) if isinstance(ci, CiService) else None
    service = extract(get_env) if extract is not None else _generic(get_env)
    if service is None:
        return None
    return dataclasses.replace(service, ci_name=ci)
