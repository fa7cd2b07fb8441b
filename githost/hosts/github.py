"""GitHub raw status fetcher backed by the ``gh`` CLI."""

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
    GH_PULL_REQUEST_FIELDS,
    GHCheckNode,
    GHPullRequestResponse,
    GHRepoResponse,
    RawGitHubStatus,
    RawPullRequest,
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

_NO_PULL_REQUEST_MARKERS = ("no pull requests found",)

_CHECK_RUN_CONCLUSIONS: dict[str, CheckState] = {
    "SUCCESS": CheckState.SUCCESS,
    "NEUTRAL": CheckState.SUCCESS,
    "FAILURE": CheckState.FAILURE,
    "TIMED_OUT": CheckState.FAILURE,
    "ACTION_REQUIRED": CheckState.FAILURE,
    "STARTUP_FAILURE": CheckState.FAILURE,
    "CANCELLED": CheckState.CANCELLED,
    "SKIPPED": CheckState.SKIPPED,
    "STALE": CheckState.SKIPPED,
}

_STATUS_CONTEXT_STATES: dict[str, CheckState] = {
    "SUCCESS": CheckState.SUCCESS,
    "FAILURE": CheckState.FAILURE,
    "ERROR": CheckState.FAILURE,
}

_REVIEW_DECISIONS: dict[str, ReviewDecision] = {
    "APPROVED": ReviewDecision.APPROVED,
    "CHANGES_REQUESTED": ReviewDecision.CHANGES_REQUESTED,
}


def _map_pr_state(state: str, *, is_draft: bool) -> MergeRequestState:
    if state == "MERGED":
        return MergeRequestState.MERGED
    if state == "CLOSED":
        return MergeRequestState.CLOSED
    return MergeRequestState.DRAFT if is_draft else MergeRequestState.OPEN


def _map_review_decision(decision: str | None) -> ReviewDecision:
    # REVIEW_REQUIRED and an empty decision both mean nobody has ruled yet.
    return _REVIEW_DECISIONS.get(decision or "", ReviewDecision.PENDING)


def _check_state(node: GHCheckNode) -> CheckState:
    if node.typename == "StatusContext" or (node.state and not node.status):
        return _STATUS_CONTEXT_STATES.get(node.state or "", CheckState.PENDING)
    if node.status != "COMPLETED":
        return CheckState.PENDING
    return _CHECK_RUN_CONCLUSIONS.get(node.conclusion or "", CheckState.PENDING)


def parse_check_nodes(nodes: cabc.Sequence[GHCheckNode] | None) -> tuple[CheckItem, ...]:
    """Convert ``statusCheckRollup`` entries into check items.

    Entries without a name or context are dropped; the rest keep GitHub's
    order.
    """
    checks: list[CheckItem] = []
    for node in nodes or ():
        name = node.name or node.context
        if not name:
            continue
        checks.append(
            CheckItem(
                name=name,
                status=_check_state(node),
                url=node.details_url or node.target_url,
            )
        )
    return tuple(checks)


def rollup_checks(checks: cabc.Sequence[CheckItem]) -> ChecksStatus:
    """Summarise individual checks into one status.

    Any failure wins, then any pending check; skipped and cancelled checks
    do not block success.
    """
    if not checks:
        return ChecksStatus.NONE
    states = {check.status for check in checks}
    if CheckState.FAILURE in states:
        return ChecksStatus.FAILURE
    if CheckState.PENDING in states:
        return ChecksStatus.PENDING
    return ChecksStatus.SUCCESS


def pull_request_from_response(
    response: GHPullRequestResponse, *, program: str = "gh"
) -> RawPullRequest:
    """Translate ``gh pr view`` output into the normalized vocabulary.

    ``program`` names the executable in shape errors for a malformed
    ``mergedAt``.
    """
    state = _map_pr_state(response.state, is_draft=response.is_draft)
    checks = parse_check_nodes(response.status_check_rollup)
    merged_at = (
        parse_cli_datetime(program, response.merged_at)
        if state is MergeRequestState.MERGED and response.merged_at
        else None
    )
    return RawPullRequest(
        number=response.number,
        title=response.title,
        url=response.url,
        state=state,
        merged_at=merged_at,
        additions=response.additions,
        deletions=response.deletions,
        review_decision=_map_review_decision(response.review_decision),
        checks_status=rollup_checks(checks),
        checks=checks,
    )


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubCLIFetcher:
    """Fetch pull request status for a worktree with ``gh``.

    Returns ``None`` when ``gh`` is missing or does not recognise the
    worktree as a GitHub repository. A missing pull request yields a status
    whose ``pull_request`` is ``None``. Other CLI failures raise.

    Examples
    --------
    >>> import asyncio
    >>> fetcher = GitHubCLIFetcher()
    >>> # status = asyncio.run(fetcher(Path("/src/project")))

    """

    config: HostCLIConfig = dataclasses.field(default_factory=HostCLIConfig)
    runner: CommandRunner = run_command

    async def __call__(self, worktree_path: Path) -> RawGitHubStatus | None:
        """Query ``gh`` and ``git`` for the worktree's branch and pull request."""
        worktree = Path(worktree_path)
        repo_url = await self._repo_url(worktree)
        if repo_url is None:
            return None

        branch = await current_branch(worktree, config=self.config, runner=self.runner)
        exists_on_remote, pull_request = await gather_settled(
            branch_exists_on_remote(
                worktree, branch, config=self.config, runner=self.runner
            ),
            self._pull_request_for_branch(worktree, branch),
        )
        return RawGitHubStatus(
            pull_request=pull_request,
            repo_url=repo_url,
            branch_exists_on_remote=exists_on_remote,
            last_refreshed=utcnow(),
        )

    async def _gh(self, worktree: Path, args: tuple[str, ...]) -> CommandResult:
        return await self.runner(
            self.config.gh_executable,
            args,
            cwd=worktree,
            timeout_s=self.config.timeout_s,
        )

    async def _repo_url(self, worktree: Path) -> str | None:
        try:
            result = await self._gh(worktree, ("repo", "view", "--json", "url"))
        except HostCLIUnavailableError as exc:
            log_warning(logger, "GitHub status unavailable: %s", exc)
            return None
        if not result.ok:
            log_warning(
                logger,
                "gh repo view failed in %s (status %d): %s",
                worktree,
                result.returncode,
                result.stderr.strip(),
            )
            return None
        repo = decode_cli_json(self.config.gh_executable, result.stdout, GHRepoResponse)
        return repo.url

    async def _pull_request_for_branch(
        self, worktree: Path, branch: str
    ) -> RawPullRequest | None:
        args = ("pr", "view", branch, "--json", ",".join(GH_PULL_REQUEST_FIELDS))
        result = await self._gh(worktree, args)
        if not result.ok:
            stderr = result.stderr.lower()
            if any(marker in stderr for marker in _NO_PULL_REQUEST_MARKERS):
                log_debug(
                    logger, "No pull request for branch %s in %s", branch, worktree
                )
                return None
            raise HostCLIError.command_failed(
                self.config.gh_executable, args, result.returncode, result.stderr
            )
        response = decode_cli_json(
            self.config.gh_executable, result.stdout, GHPullRequestResponse
        )
        return pull_request_from_response(
            response, program=self.config.gh_executable
        )
