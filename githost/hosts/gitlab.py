"""GitLab raw status fetcher backed by the ``glab`` CLI."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from githost.common.time import utcnow
from githost.hosts._json import decode_cli_json, parse_cli_datetime
from githost.hosts.config import HostCLIConfig
from githost.hosts.errors import HostCLIError, HostCLIUnavailableError
from githost.hosts.git import branch_exists_on_remote, current_branch
from githost.hosts.models import (
    GLMergeRequestResponse,
    GLPipelineJob,
    GLRepoResponse,
    RawGitLabStatus,
    RawMergeRequest,
)
from githost.hosts.process import gather_settled, run_command
from githost.logging import get_logger, log_debug, log_warning
from githost.models import (
    CheckItem,
    CheckState,
    ChecksStatus,
    MergeRequestState,
    ReviewDecision,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from githost.hosts.process import CommandResult, CommandRunner

logger = get_logger(__name__)

_NO_MERGE_REQUEST_MARKERS = ("no merge request found", "no open merge request")

_JOB_STATES: dict[str, CheckState] = {
    "success": CheckState.SUCCESS,
    "failed": CheckState.FAILURE,
    "canceled": CheckState.CANCELLED,
    "skipped": CheckState.SKIPPED,
    "manual": CheckState.SKIPPED,
}

_PIPELINE_STATES: dict[str, ChecksStatus] = {
    "success": ChecksStatus.SUCCESS,
    "failed": ChecksStatus.FAILURE,
    "running": ChecksStatus.PENDING,
    "pending": ChecksStatus.PENDING,
    "created": ChecksStatus.PENDING,
}


def _map_mr_state(state: str, *, draft: bool) -> MergeRequestState:
    if state == "merged":
        return MergeRequestState.MERGED
    if state == "closed":
        return MergeRequestState.CLOSED
    return MergeRequestState.DRAFT if draft else MergeRequestState.OPEN


def _map_review_decision(approved: bool | None) -> ReviewDecision:
    # GitLab has no "changes requested" verdict; unresolved threads are
    # discussions, not a review state.
    return ReviewDecision.APPROVED if approved else ReviewDecision.PENDING


def parse_pipeline_jobs(
    jobs: cabc.Sequence[GLPipelineJob] | None,
) -> tuple[CheckItem, ...]:
    """Convert pipeline jobs into check items, keeping GitLab's order.

    Jobs that are still running, queued, or waiting count as pending.
    """
    return tuple(
        CheckItem(
            name=job.name,
            status=_JOB_STATES.get(job.status, CheckState.PENDING),
            url=job.web_url,
        )
        for job in jobs or ()
        if job.name
    )


def pipeline_checks_status(pipeline_status: str | None) -> ChecksStatus:
    """Map a head pipeline status to the checks rollup."""
    if not pipeline_status:
        return ChecksStatus.NONE
    return _PIPELINE_STATES.get(pipeline_status, ChecksStatus.NONE)


def merge_request_from_response(
    response: GLMergeRequestResponse, *, program: str = "glab"
) -> RawMergeRequest:
    """Translate ``glab mr view`` output into the normalized vocabulary."""
    state = _map_mr_state(response.state, draft=response.draft)
    pipeline = response.head_pipeline
    merged_at = (
        parse_cli_datetime(program, response.merged_at)
        if state is MergeRequestState.MERGED and response.merged_at
        else None
    )
    stats = response.diff_stats
    return RawMergeRequest(
        iid=response.iid,
        title=response.title,
        web_url=response.web_url,
        state=state,
        merged_at=merged_at,
        additions=stats.additions if stats else 0,
        deletions=stats.deletions if stats else 0,
        review_decision=_map_review_decision(response.approved),
        checks_status=pipeline_checks_status(pipeline.status if pipeline else None),
        checks=parse_pipeline_jobs(pipeline.jobs if pipeline else None),
    )


@dataclasses.dataclass(frozen=True, slots=True)
class GitLabCLIFetcher:
    """Fetch merge request status for a worktree with ``glab``.

    Returns ``None`` when ``glab`` is missing or does not recognise the
    worktree as a GitLab project. A missing merge request yields a status
    whose ``merge_request`` is ``None``. Other CLI failures raise.
    """

    config: HostCLIConfig = dataclasses.field(default_factory=HostCLIConfig)
    runner: CommandRunner = run_command

    async def __call__(self, worktree_path: Path) -> RawGitLabStatus | None:
        """Query ``glab`` and ``git`` for the worktree's branch and MR."""
        worktree = Path(worktree_path)
        web_url = await self._web_url(worktree)
        if web_url is None:
            return None

        branch = await current_branch(worktree, config=self.config, runner=self.runner)
        exists_on_remote, merge_request = await gather_settled(
            branch_exists_on_remote(
                worktree, branch, config=self.config, runner=self.runner
            ),
            self._merge_request_for_branch(worktree, branch),
        )
        return RawGitLabStatus(
            merge_request=merge_request,
            web_url=web_url,
            branch_exists_on_remote=exists_on_remote,
            last_refreshed=utcnow(),
        )

    async def _glab(self, worktree: Path, args: tuple[str, ...]) -> CommandResult:
        return await self.runner(
            self.config.glab_executable,
            args,
            cwd=worktree,
            timeout_s=self.config.timeout_s,
        )

    async def _web_url(self, worktree: Path) -> str | None:
        try:
            result = await self._glab(worktree, ("repo", "view", "--output", "json"))
        except HostCLIUnavailableError as exc:
            log_warning(logger, "GitLab status unavailable: %s", exc)
            return None
        if not result.ok:
            log_warning(
                logger,
                "glab repo view failed in %s (status %d): %s",
                worktree,
                result.returncode,
                result.stderr.strip(),
            )
            return None
        repo = decode_cli_json(
            self.config.glab_executable, result.stdout, GLRepoResponse
        )
        return repo.web_url

    async def _merge_request_for_branch(
        self, worktree: Path, branch: str
    ) -> RawMergeRequest | None:
        args = ("mr", "view", branch, "--output", "json")
        result = await self._glab(worktree, args)
        if not result.ok:
            # glab reports a missing MR on stderr with a non-zero status.
            stderr = result.stderr.lower()
            if any(marker in stderr for marker in _NO_MERGE_REQUEST_MARKERS):
                log_debug(
                    logger, "No merge request for branch %s in %s", branch, worktree
                )
                return None
            raise HostCLIError.command_failed(
                self.config.glab_executable, args, result.returncode, result.stderr
            )
        response = decode_cli_json(
            self.config.glab_executable, result.stdout, GLMergeRequestResponse
        )
        return merge_request_from_response(
            response, program=self.config.glab_executable
        )
