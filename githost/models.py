"""Normalized review-state model shared by every git host provider.

Adapters translate host-specific payloads into these shapes; consumers only
ever see this vocabulary. Nothing in this module names a GitHub or GitLab
field or state value.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import enum

import msgspec


class ProviderId(enum.StrEnum):
    """Git hosting platforms known to the provider layer.

    ``BITBUCKET`` is recognised so callers can name it, but no adapter
    serves it yet.
    """

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"

    @classmethod
    def parse(cls, value: object) -> ProviderId | None:
        """Return the matching identifier, or ``None`` when unrecognised.

        Parameters
        ----------
        value
            A ``ProviderId``, or a string equal to one of the lowercase
            tags. Any other value, including ``"GitLab"`` or a padded tag,
            yields ``None``.

        Examples
        --------
        >>> ProviderId.parse("gitlab")
        <ProviderId.GITLAB: 'gitlab'>
        >>> ProviderId.parse("GitLab") is None
        True

        """
        if isinstance(value, ProviderId):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class CheckState(enum.StrEnum):
    """Outcome of a single CI check or pipeline job."""

    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"


class MergeRequestState(enum.StrEnum):
    """Lifecycle of a pull or merge request."""

    OPEN = "open"
    DRAFT = "draft"
    MERGED = "merged"
    CLOSED = "closed"


class ReviewDecision(enum.StrEnum):
    """Aggregate reviewer verdict for a request."""

    APPROVED = "approved"
    CHANGES_REQUESTED = "changes_requested"
    PENDING = "pending"


class ChecksStatus(enum.StrEnum):
    """Rollup of every check on a request; ``NONE`` means no checks exist."""

    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"
    NONE = "none"


class MergeMethod(enum.StrEnum):
    """Strategy used when merging a request from the command line."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


class CheckItem(msgspec.Struct, kw_only=True, frozen=True):
    """One CI check, in the order the host reported it.

    Attributes
    ----------
    name
        Check or job name; never empty.
    status
        Normalized outcome.
    url
        Link to the check details, when the host provides one.

    """

    name: str
    status: CheckState
    url: str | None = None

    def __post_init__(self) -> None:
        """Reject checks without a name."""
        if not self.name:
            msg = "CheckItem name must be non-empty"
            raise ValueError(msg)


class MergeRequestSummary(msgspec.Struct, kw_only=True, frozen=True):
    """Host-agnostic view of a pull request or merge request.

    Attributes
    ----------
    number
        Host-native identifier: PR number on GitHub, MR IID on GitLab. Not
        unique across hosts.
    title
        Request title.
    url
        Web URL of the request.
    state
        Normalized lifecycle state.
    additions
        Lines added, exactly as the host reported them.
    deletions
        Lines deleted, exactly as the host reported them.
    review_decision
        Aggregate reviewer verdict.
    checks_status
        Rollup of ``checks``.
    checks
        Individual checks in host order.
    merged_at
        Merge timestamp; only set for merged requests.

    """

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

    def __post_init__(self) -> None:
        """Reject a merge timestamp on a request that is not merged."""
        if self.merged_at is not None and self.state is not MergeRequestState.MERGED:
            msg = f"merged_at is only valid for merged requests, got {self.state}"
            raise ValueError(msg)


class GitHostStatus(msgspec.Struct, kw_only=True, frozen=True):
    """Snapshot of review state for one worktree on one host.

    A new instance is produced by every fetch; instances are never updated
    in place. ``last_refreshed`` lets callers detect stale snapshots.

    Attributes
    ----------
    provider
        Host that produced the snapshot.
    merge_request
        Request for the worktree's branch, or ``None`` when the host has
        none.
    repo_url
        Web URL of the repository.
    branch_exists_on_remote
        Whether the worktree's branch has been pushed.
    last_refreshed
        When the host was queried (aware UTC).

    """

    provider: ProviderId
    merge_request: MergeRequestSummary | None
    repo_url: str
    branch_exists_on_remote: bool
    last_refreshed: dt.datetime


class MergeCommand(msgspec.Struct, kw_only=True, frozen=True):
    """CLI invocation that merges a request.

    The program and its arguments are kept apart so the caller controls
    process spawning and quoting. Argument order is significant.
    """

    command: str
    args: tuple[str, ...]


__all__ = [
    "CheckItem",
    "CheckState",
    "ChecksStatus",
    "GitHostStatus",
    "MergeCommand",
    "MergeMethod",
    "MergeRequestState",
    "MergeRequestSummary",
    "ProviderId",
    "ReviewDecision",
]
