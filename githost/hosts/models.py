"""Host CLI payloads and the raw status records produced by fetchers.

Two layers live here:

- Wire structs (``GH*`` / ``GL*``) mirror the JSON printed by ``gh`` and
  ``glab`` and are decoded with ``msgspec``. Only the fields the fetchers
  read are declared; unknown fields are ignored.
- Raw status records (``RawGitHubStatus`` / ``RawGitLabStatus``) are what a
  ``RawStatusFetcher`` returns. Values already use the normalized
  vocabulary, but the shapes keep each host's own naming (``pull_request``
  and ``url`` for GitHub, ``merge_request``, ``iid`` and ``web_url`` for
  GitLab). Provider adapters only rename and reshape them.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import typing as typ

import msgspec

from githost.models import (  # noqa: TC001
    CheckItem,
    ChecksStatus,
    MergeRequestState,
    ReviewDecision,
)

# ---------------------------------------------------------------------------
# gh wire format
# ---------------------------------------------------------------------------


class GHRepoResponse(msgspec.Struct, kw_only=True):
    """Output of ``gh repo view --json url``."""

    url: str


class GHCheckNode(msgspec.Struct, kw_only=True, rename="camel"):
    """Entry of ``statusCheckRollup``: a check run or a commit status.

    Check runs carry ``name``, ``status``, ``conclusion`` and
    ``details_url``; commit status contexts carry ``context``, ``state`` and
    ``target_url``.
    """

    typename: str | None = msgspec.field(default=None, name="__typename")
    name: str | None = None
    status: str | None = None
    conclusion: str | None = None
    details_url: str | None = None
    context: str | None = None
    state: str | None = None
    target_url: str | None = None


class GHPullRequestResponse(msgspec.Struct, kw_only=True, rename="camel"):
    """Output of ``gh pr view <branch> --json ...``."""

    number: int
    title: str
    url: str
    state: typ.Literal["OPEN", "CLOSED", "MERGED"]
    is_draft: bool = False
    merged_at: str | None = None
    additions: int = 0
    deletions: int = 0
    review_decision: str | None = None
    status_check_rollup: list[GHCheckNode] | None = None


GH_PULL_REQUEST_FIELDS: tuple[str, ...] = (
    "number",
    "title",
    "url",
    "state",
    "isDraft",
    "mergedAt",
    "additions",
    "deletions",
    "reviewDecision",
    "statusCheckRollup",
)

# ---------------------------------------------------------------------------
# glab wire format
# ---------------------------------------------------------------------------


class GLRepoResponse(msgspec.Struct, kw_only=True):
    """Output of ``glab repo view --output json``."""

    web_url: str


class GLPipelineJob(msgspec.Struct, kw_only=True):
    """Job within a merge request's head pipeline."""

    name: str
    status: str
    web_url: str | None = None


class GLPipeline(msgspec.Struct, kw_only=True):
    """Head pipeline attached to a merge request."""

    id: int
    status: str
    web_url: str | None = None
    jobs: list[GLPipelineJob] | None = None


class GLDiffStats(msgspec.Struct, kw_only=True):
    """Line counts for a merge request diff."""

    additions: int
    deletions: int


class GLMergeRequestResponse(msgspec.Struct, kw_only=True):
    """Output of ``glab mr view <branch> --output json``."""

    iid: int
    title: str
    web_url: str
    state: typ.Literal["opened", "closed", "merged", "locked"]
    draft: bool = False
    merged_at: str | None = None
    diff_stats: GLDiffStats | None = None
    head_pipeline: GLPipeline | None = None
    approved: bool | None = None
    approvals_left: int | None = None


# ---------------------------------------------------------------------------
# Raw status records returned by fetchers
# ---------------------------------------------------------------------------


class RawPullRequest(msgspec.Struct, kw_only=True, frozen=True):
    """GitHub pull request with values in the normalized vocabulary."""

    number: int
    title: str
    url: str
    state: MergeRequestState
    additions: int
    deletions: int
    review_decision: ReviewDecision
    checks_status: ChecksStatus
    checks: tuple[CheckItem, ...] = ()
    merged_at: dt.datetime | None = None


class RawGitHubStatus(msgspec.Struct, kw_only=True, frozen=True):
    """Everything the GitHub fetcher learned about one worktree."""

    pull_request: RawPullRequest | None
    repo_url: str
    branch_exists_on_remote: bool
    last_refreshed: dt.datetime


class RawMergeRequest(msgspec.Struct, kw_only=True, frozen=True):
    """GitLab merge request with values in the normalized vocabulary."""

    iid: int
    title: str
    web_url: str
    state: MergeRequestState
    additions: int
    deletions: int
    review_decision: ReviewDecision
    checks_status: ChecksStatus
    checks: tuple[CheckItem, ...] = ()
    merged_at: dt.datetime | None = None


class RawGitLabStatus(msgspec.Struct, kw_only=True, frozen=True):
    """Everything the GitLab fetcher learned about one worktree."""

    merge_request: RawMergeRequest | None
    web_url: str
    branch_exists_on_remote: bool
    last_refreshed: dt.datetime
