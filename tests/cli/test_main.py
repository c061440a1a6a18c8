"""Tests for the covwire CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pygit2
import pytest
import structlog
from click.testing import CliRunner

from covwire.cli.main import cli
from covwire.upload.transport import HttpxTransport

CI_VARS = (
    "TRAVIS",
    "TRAVIS_JOB_ID",
    "TRAVIS_PULL_REQUEST",
    "TRAVIS_BRANCH",
    "CIRCLECI",
    "CIRCLE_BUILD_NUM",
    "CIRCLE_BRANCH",
    "JENKINS_URL",
    "BUILD_NUM",
    "BUILD_URL",
    "GIT_BRANCH",
    "SEMAPHORE",
    "SEMAPHORE_BUILD_NUMBER",
    "PULL_REQUEST_NUMBER",
    "CI_NAME",
    "CI_BUILD_NUMBER",
    "CI_JOB_ID",
    "CI_BUILD_URL",
    "CI_BRANCH",
    "CI_PULL_REQUEST",
    "COVERALLS_REPO_TOKEN",
)

SOURCE = "def f(x):\n    if x:\n        return 1\n    return 0\n"


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[CliRunner, None, None]:
    """CliRunner with no CI variables and no global config."""
    monkeypatch.setattr("covwire.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    yield CliRunner(env={name: None for name in CI_VARS})
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Git repository with one committed source file and an LCOV file for it."""
    repo_path = (tmp_path / "project").resolve()
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    (repo_path / "src").mkdir()
    (repo_path / "src" / "lib.py").write_text(SOURCE)
    repo.index.add("src/lib.py")
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test", "test@example.com")
    repo.create_commit("refs/heads/main", sig, sig, "Add lib", tree, [])
    repo.remotes.create("origin", "https://example.com/org/project.git")

    (repo_path / "lcov.info").write_text(
        f"SF:{repo_path / 'src' / 'lib.py'}\n"
        "DA:1,1\nDA:2,1\nDA:3,1\nDA:4,0\n"
        "BRDA:2,0,0,1\nBRDA:2,0,1,0\n"
        "end_of_record\n"
    )
    return repo_path


def _submit_args(project: Path, *extra: str) -> list[str]:
    return ["submit", str(project / "lcov.info"), "--repo-root", str(project), *extra]


class TestDetectCommand:
    def test_given_circle_env_when_detect_then_prints_service(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["detect"], env={"CIRCLECI": "true", "CIRCLE_BUILD_NUM": "7"})
        assert result.exit_code == 0, result.output
        service = json.loads(result.stdout)["service"]
        assert service["service_name"] == "circle-ci"
        assert service["build_number"] == "7"

    def test_given_no_ci_when_detect_then_null(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["detect"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"service": None}

    def test_given_named_ci_when_detect_then_uses_name(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["detect", "--ci", "travis-pro"], env={"TRAVIS_JOB_ID": "3"})
        service = json.loads(result.stdout)["service"]
        assert service["service_name"] == "travis-pro"
        assert service["job_id"] == "3"


class TestSubmitDryRun:
    def test_given_repo_token_when_dry_run_then_full_payload(
        self, runner: CliRunner, project: Path
    ) -> None:
        result = runner.invoke(cli, _submit_args(project, "--repo-token", "secret", "--dry-run"))

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["repo_token"] == "secret"
        assert "service_name" not in payload
        assert payload["git"]["branch"] == "main"
        assert payload["git"]["remotes"] == [
            {"name": "origin", "url": "https://example.com/org/project.git"}
        ]
        assert "commit_sha" not in payload
        (source,) = payload["source_files"]
        assert source["name"] == "src/lib.py"
        assert source["coverage"] == [1, 1, 1, 0]
        assert source["branches"] == [2, 0, 0, 1, 2, 0, 1, 0]
        assert "source" not in source

    def test_given_commit_sha_when_dry_run_then_no_git(
        self, runner: CliRunner, project: Path
    ) -> None:
        args = _submit_args(project, "--repo-token", "t", "--commit-sha", "abc123", "--dry-run")
        payload = json.loads(runner.invoke(cli, args).stdout)
        assert payload["commit_sha"] == "abc123"
        assert "git" not in payload

    def test_given_no_git_when_dry_run_then_no_commit_keys(
        self, runner: CliRunner, project: Path
    ) -> None:
        args = _submit_args(project, "--repo-token", "t", "--no-git", "--dry-run")
        payload = json.loads(runner.invoke(cli, args).stdout)
        assert "git" not in payload
        assert "commit_sha" not in payload

    def test_given_include_source_when_dry_run_then_source_embedded(
        self, runner: CliRunner, project: Path
    ) -> None:
        args = _submit_args(project, "--repo-token", "t", "--include-source", "--dry-run")
        payload = json.loads(runner.invoke(cli, args).stdout)
        assert payload["source_files"][0]["source"] == SOURCE

    def test_given_repo_config_when_dry_run_then_include_source_from_config(
        self, runner: CliRunner, project: Path
    ) -> None:
        (project / ".covwire.yml").write_text("report:\n  include_source: true\n")
        args = _submit_args(project, "--repo-token", "t", "--dry-run")
        payload = json.loads(runner.invoke(cli, args).stdout)
        assert "source" in payload["source_files"][0]

    def test_given_ci_env_when_dry_run_then_service_fields(
        self, runner: CliRunner, project: Path
    ) -> None:
        env = {"TRAVIS": "true", "TRAVIS_JOB_ID": "99", "TRAVIS_PULL_REQUEST": "false"}
        result = runner.invoke(cli, _submit_args(project, "--dry-run"), env=env)

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["service_name"] == "travis-ci"
        assert payload["service_job_id"] == "99"
        assert "service_pull_request" not in payload
        assert "repo_token" not in payload

    def test_given_token_env_when_dry_run_then_repo_token(
        self, runner: CliRunner, project: Path
    ) -> None:
        result = runner.invoke(
            cli, _submit_args(project, "--dry-run"), env={"COVERALLS_REPO_TOKEN": "from-env"}
        )
        assert json.loads(result.stdout)["repo_token"] == "from-env"


class TestSubmitErrors:
    def test_given_no_token_outside_ci_when_submit_then_fails(
        self, runner: CliRunner, project: Path
    ) -> None:
        result = runner.invoke(cli, _submit_args(project, "--dry-run"))
        assert result.exit_code != 0
        assert "COVERALLS_REPO_TOKEN" in result.output
        assert "submit_failed" in result.stderr
        assert "code=1001" in result.stderr

    def test_given_missing_source_when_submit_then_fails(
        self, runner: CliRunner, project: Path
    ) -> None:
        (project / "src" / "lib.py").unlink()
        result = runner.invoke(cli, _submit_args(project, "--repo-token", "t", "--dry-run"))
        assert result.exit_code != 0
        assert "Cannot read source file" in result.output

    def test_given_bad_config_when_submit_then_fails(
        self, runner: CliRunner, project: Path
    ) -> None:
        (project / ".covwire.yml").write_text("upload:\n  max_polls: 0\n")
        result = runner.invoke(cli, _submit_args(project, "--repo-token", "t", "--dry-run"))
        assert result.exit_code != 0
        assert "max_polls" in result.output


class TestSubmitUpload:
    @pytest.fixture
    def serve(self, monkeypatch: pytest.MonkeyPatch) -> Callable[[httpx.Response], list[bytes]]:
        """Route uploads to a mock endpoint that answers with a fixed response."""

        def _serve(response: httpx.Response) -> list[bytes]:
            bodies: list[bytes] = []

            def handler(request: httpx.Request) -> httpx.Response:
                bodies.append(request.read())
                return response

            def factory(endpoint: str, *, timeout_sec: float) -> HttpxTransport:
                client = httpx.Client(transport=httpx.MockTransport(handler))
                return HttpxTransport(endpoint, timeout_sec=timeout_sec, client=client)

            monkeypatch.setattr("covwire.cli.submit.HttpxTransport", factory)
            return bodies

        return _serve

    def test_given_accepted_upload_when_submit_then_succeeds(
        self, runner: CliRunner, project: Path, serve: Callable[[httpx.Response], list[bytes]]
    ) -> None:
        bodies = serve(httpx.Response(200, json={"message": "Job #1.1"}))

        result = runner.invoke(cli, _submit_args(project, "--repo-token", "secret"))

        assert result.exit_code == 0, result.output
        assert "Uploaded 1 source files, 3/4 lines covered" in result.stdout
        assert len(bodies) == 1
        assert b'"repo_token": "secret"' in bodies[0]

    def test_given_rejected_upload_when_submit_then_fails_with_code(
        self, runner: CliRunner, project: Path, serve: Callable[[httpx.Response], list[bytes]]
    ) -> None:
        serve(httpx.Response(422, text="Couldn't find a repository"))

        result = runner.invoke(cli, _submit_args(project, "--repo-token", "bad"))

        assert result.exit_code != 0
        assert "failed (422)" in result.output
        assert "Couldn't find a repository" in result.output
