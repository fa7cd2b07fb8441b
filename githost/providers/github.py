"""GitHub adapter for the git host provider protocol."""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path

from githost.common.urls import encode_component
from githost.models import (
    GitHostStatus,
    MergeCommand,
    MergeMethod,
    MergeRequestSummary,
    ProviderId,
)

if typ.TYPE_CHECKING:
    from githost.hosts.models import RawGitHubStatus, RawPullRequest
    from githost.providers.protocol import RawStatusFetcher

_CLI_TOOL = "gh"
_DELETE_BRANCH_METHODS = frozenset({MergeMethod.MERGE, MergeMethod.SQUASH})


def _summary_from_pull_request(pr: RawPullRequest) -> MergeRequestSummary:
    return MergeRequestSummary(
        number=pr.number,
        title=pr.title,
        url=pr.url,
        state=pr.state,
        merged_at=pr.merged_at,
        additions=pr.additions,
        deletions=pr.deletions,
        review_decision=pr.review_decision,
        checks_status=pr.checks_status,
        checks=pr.checks,
    )


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubProvider:
    """Pull request status and workflow commands for GitHub.

    Parameters
    ----------
    fetcher
        Raw status fetcher for GitHub worktrees, normally
        ``githost.hosts.GitHubCLIFetcher``.

    Examples
    --------
    >>> provider = GitHubProvider(fetcher=fetcher)
    >>> provider.get_compare_url("https://github.com/o/r", "feat/a b", "main")
    'https://github.com/o/r/compare/main...feat%2Fa%20b?expand=1'
    >>> provider.get_merge_command(42, "rebase").args
    ('pr', 'merge', '42', '--rebase')

    """

    fetcher: RawStatusFetcher[RawGitHubStatus]

    @property
    def id(self) -> ProviderId:
        """Return ``ProviderId.GITHUB``."""
        return ProviderId.GITHUB

    @property
    def cli_tool_name(self) -> str:
        """Return the GitHub CLI name."""
        return _CLI_TOOL

    async def fetch_status(self, worktree_path: str | Path) -> GitHostStatus | None:
        """Fetch pull request status and rename it into the shared model."""
        raw = await self.fetcher(Path(worktree_path))
        if raw is None:
            return None

        pr = raw.pull_request
        return GitHostStatus(
            provider=ProviderId.GITHUB,
            merge_request=_summary_from_pull_request(pr) if pr is not None else None,
            repo_url=raw.repo_url,
            branch_exists_on_remote=raw.branch_exists_on_remote,
            last_refreshed=raw.last_refreshed,
        )

    def get_compare_url(self, repo_url: str, branch: str, base_branch: str) -> str:
        """Return the compare view that offers to open a pull request.

        Only the head branch is encoded; GitHub expects the base branch as
        written.
        """
        return f"{repo_url}/compare/{base_branch}...{encode_component(branch)}?expand=1"

    def get_merge_command(
        self, number: int, method: MergeMethod | str
    ) -> MergeCommand:
        """Return ``gh pr merge`` arguments for ``method``.

        Merge and squash also delete the head branch; rebase leaves it.
        """
        merge_method = MergeMethod(method)
        args = ["pr", "merge", str(number), f"--{merge_method}"]
        if merge_method in _DELETE_BRANCH_METHODS:
            args.append("--delete-branch")
        return MergeCommand(command=_CLI_TOOL, args=tuple(args))
