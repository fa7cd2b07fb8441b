"""GitLab adapter for the git host provider protocol."""

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
    from githost.hosts.models import RawGitLabStatus, RawMergeRequest
    from githost.providers.protocol import RawStatusFetcher

_CLI_TOOL = "glab"

_METHOD_FLAGS: dict[MergeMethod, tuple[str, ...]] = {
    MergeMethod.MERGE: (),
    MergeMethod.SQUASH: ("--squash",),
    MergeMethod.REBASE: ("--rebase",),
}


def _summary_from_merge_request(mr: RawMergeRequest) -> MergeRequestSummary:
    return MergeRequestSummary(
        number=mr.iid,
        title=mr.title,
        url=mr.web_url,
        state=mr.state,
        merged_at=mr.merged_at,
        additions=mr.additions,
        deletions=mr.deletions,
        review_decision=mr.review_decision,
        checks_status=mr.checks_status,
        checks=mr.checks,
    )


@dataclasses.dataclass(frozen=True, slots=True)
class GitLabProvider:
    """Merge request status and workflow commands for GitLab.

    The merge request IID becomes ``MergeRequestSummary.number``.
    """

    fetcher: RawStatusFetcher[RawGitLabStatus]

    @property
    def id(self) -> ProviderId:
        """Return ``ProviderId.GITLAB``."""
        return ProviderId.GITLAB

    @property
    def cli_tool_name(self) -> str:
        """Return the GitLab CLI name."""
        return _CLI_TOOL

    async def fetch_status(self, worktree_path: str | Path) -> GitHostStatus | None:
        """Fetch merge request status and rename it into the shared model."""
        raw = await self.fetcher(Path(worktree_path))
        if raw is None:
            return None

        mr = raw.merge_request
        return GitHostStatus(
            provider=ProviderId.GITLAB,
            merge_request=_summary_from_merge_request(mr) if mr is not None else None,
            repo_url=raw.web_url,
            branch_exists_on_remote=raw.branch_exists_on_remote,
            last_refreshed=raw.last_refreshed,
        )

    def get_compare_url(self, repo_url: str, branch: str, base_branch: str) -> str:
        """Return the new merge request form with both branches preselected."""
        source = encode_component(branch)
        target = encode_component(base_branch)
        return (
            f"{repo_url}/-/merge_requests/new"
            f"?merge_request[source_branch]={source}"
            f"&merge_request[target_branch]={target}"
        )

    def get_merge_command(
        self, number: int, method: MergeMethod | str
    ) -> MergeCommand:
        """Return ``glab mr merge`` arguments for ``method``.

        The source branch is always removed and the prompt skipped.
        """
        merge_method = MergeMethod(method)
        args = (
            "mr",
            "merge",
            str(number),
            *_METHOD_FLAGS[merge_method],
            "--remove-source-branch",
            "--yes",
        )
        return MergeCommand(command=_CLI_TOOL, args=args)
