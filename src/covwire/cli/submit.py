"""covwire submit command."""

from pathlib import Path
from typing import Any

import click
import structlog

from covwire.ci.identity import best_match
from covwire.ci.service import parse_ci_name
from covwire.cli.utils import find_repo_root
from covwire.config.loader import load_config, resolve_repo_token
from covwire.core.errors import CovwireError
from covwire.core.logging import configure_logging, set_run_id
from covwire.coverage.lcov import parse_lcov
from covwire.coverage.models import CoverageParseError, SourceFile
from covwire.git.collect import collect_git_info
from covwire.git.errors import GitError
from covwire.report.models import CoverageReport
from covwire.report.serializer import to_json
from covwire.upload.ops import upload_report
from covwire.upload.status import UploadState
from covwire.upload.transport import HttpxTransport

log = structlog.get_logger(__name__)


def _fail(error: CovwireError) -> click.ClickException:
    log.error("submit_failed", **error.to_dict())
    return click.ClickException(str(error))


def build_report(
    lcov_file: Path,
    repo_root: Path,
    *,
    token: str | None,
    ci_name: str | None,
    include_source: bool,
) -> CoverageReport:
    """Resolve the identity and load every file listed in the LCOV file."""
    ci = parse_ci_name(ci_name) if ci_name else None
    report = CoverageReport(best_match(token, ci=ci))

    for name, hits in sorted(parse_lcov(lcov_file, base_path=repo_root).items()):
        report.add_source(
            SourceFile.build(
                name,
                repo_root / name,
                hits.lines,
                hits.branches or None,
                include_raw=include_source,
            )
        )
    return report


@click.command()
@click.argument("lcov_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--repo-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory source paths are relative to (default: enclosing git repository)",
)
@click.option("--repo-token", default=None, help="Repo token (default: COVERALLS_REPO_TOKEN)")
@click.option("--ci", "ci_name", default=None, help="CI service literal instead of autodetection")
@click.option(
    "--include-source/--no-include-source",
    default=None,
    help="Embed raw source text in the payload",
)
@click.option("--commit-sha", default=None, help="Send this commit id instead of git details")
@click.option("--no-git", is_flag=True, help="Send no commit information")
@click.option("--endpoint", default=None, help="Override the jobs endpoint URL")
@click.option("--dry-run", is_flag=True, help="Print the payload instead of uploading it")
@click.pass_context
def submit_command(
    ctx: click.Context,
    lcov_file: Path,
    repo_root: Path | None,
    repo_token: str | None,
    ci_name: str | None,
    include_source: bool | None,
    commit_sha: str | None,
    no_git: bool,
    endpoint: str | None,
    dry_run: bool,
) -> None:
    """Build a report from LCOV_FILE and upload it."""
    repo_root = (repo_root or find_repo_root()).resolve()

    overrides: dict[str, Any] = {}
    if endpoint:
        overrides["upload"] = {"endpoint": endpoint}
    try:
        config = load_config(repo_root, **overrides)
    except CovwireError as e:
        raise _fail(e) from e

    if not ctx.obj.get("verbose"):
        configure_logging(config=config.logging)
    set_run_id()

    try:
        report = build_report(
            lcov_file,
            repo_root,
            token=resolve_repo_token(repo_token, repo_root=repo_root),
            ci_name=ci_name or config.report.service_name,
            include_source=(
                include_source if include_source is not None else config.report.include_source
            ),
        )
    except CovwireError as e:
        raise _fail(e) from e
    except CoverageParseError as e:
        raise click.ClickException(str(e)) from e

    if commit_sha:
        report.set_commit_sha(commit_sha)
    elif not no_git:
        try:
            report.set_git_info(collect_git_info(repo_root))
        except GitError as e:
            log.warning("git_info_unavailable", reason=str(e))

    if dry_run:
        click.echo(to_json(report, indent=2).decode("utf-8"))
        return

    with HttpxTransport(config.upload.endpoint, timeout_sec=config.upload.timeout_sec) as transport:
        try:
            status = upload_report(
                report,
                transport,
                poll_interval_sec=config.upload.poll_interval_sec,
                max_polls=config.upload.max_polls,
            )
        except CovwireError as e:
            raise _fail(e) from e
        body = transport.response_body

    if status.state is not UploadState.SUCCEEDED:
        detail = f": {body}" if body else ""
        raise click.ClickException(f"Upload {status}{detail}")
    covered = sum(source.covered_lines for source in report.sources)
    relevant = sum(source.relevant_lines for source in report.sources)
    click.echo(f"Uploaded {len(report.sources)} source files, {covered}/{relevant} lines covered")
