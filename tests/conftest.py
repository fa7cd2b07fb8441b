"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import datetime as dt

import pytest

from githost.hosts.models import (
    RawGitHubStatus,
    RawGitLabStatus,
    RawMergeRequest,
    RawPullRequest,
)
from githost.models import (
    CheckItem,
    CheckState,
    ChecksStatus,
    MergeRequestState,
    ReviewDecision,
)
from githost.providers import GitHostEventLogger, GitHostRegistry, observability
from tests.helpers import FakeFetcher, FakeLogger

REFRESHED_AT = dt.datetime(2026, 3, 14, 9, 30, tzinfo=dt.UTC)


@pytest.fixture
def refreshed_at() -> dt.datetime:
    """Return the fixed snapshot timestamp used by canned statuses."""
    return REFRESHED_AT


@pytest.fixture
def raw_pull_request() -> RawPullRequest:
    """Return an open GitHub pull request with one passing check."""
    return RawPullRequest(
        number=42,
        title="Add widget",
        url="https://github.com/octo/reef/pull/42",
        state=MergeRequestState.OPEN,
        additions=120,
        deletions=8,
        review_decision=ReviewDecision.APPROVED,
        checks_status=ChecksStatus.SUCCESS,
        checks=(
            CheckItem(
                name="ci / test",
                status=CheckState.SUCCESS,
                url="https://github.com/octo/reef/actions/runs/1",
            ),
        ),
    )


@pytest.fixture
def raw_github_status(raw_pull_request: RawPullRequest) -> RawGitHubStatus:
    """Return a GitHub raw status wrapping ``raw_pull_request``."""
    return RawGitHubStatus(
        pull_request=raw_pull_request,
        repo_url="https://github.com/octo/reef",
        branch_exists_on_remote=True,
        last_refreshed=REFRESHED_AT,
    )


@pytest.fixture
def raw_merge_request() -> RawMergeRequest:
    """Return a merged GitLab merge request."""
    return RawMergeRequest(
        iid=7,
        title="Fix pipeline cache",
        web_url="https://gitlab.com/group/project/-/merge_requests/7",
        state=MergeRequestState.MERGED,
        merged_at=dt.datetime(2026, 3, 13, 17, 0, tzinfo=dt.UTC),
        additions=3,
        deletions=1,
        review_decision=ReviewDecision.PENDING,
        checks_status=ChecksStatus.FAILURE,
        checks=(
            CheckItem(name="lint", status=CheckState.SUCCESS),
            CheckItem(name="test", status=CheckState.FAILURE),
        ),
    )


@pytest.fixture
def raw_gitlab_status(raw_merge_request: RawMergeRequest) -> RawGitLabStatus:
    """Return a GitLab raw status wrapping ``raw_merge_request``."""
    return RawGitLabStatus(
        merge_request=raw_merge_request,
        web_url="https://gitlab.com/group/project",
        branch_exists_on_remote=False,
        last_refreshed=REFRESHED_AT,
    )


@pytest.fixture
def github_fetcher(raw_github_status: RawGitHubStatus) -> FakeFetcher[RawGitHubStatus]:
    """Return a fetcher that always reports ``raw_github_status``."""
    return FakeFetcher(result=raw_github_status)


@pytest.fixture
def gitlab_fetcher(raw_gitlab_status: RawGitLabStatus) -> FakeFetcher[RawGitLabStatus]:
    """Return a fetcher that always reports ``raw_gitlab_status``."""
    return FakeFetcher(result=raw_gitlab_status)


@pytest.fixture
def provider_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    """Replace the provider-layer module logger with a recorder."""
    fake = FakeLogger()
    monkeypatch.setattr(observability, "logger", fake)
    return fake


@pytest.fixture
def registry(
    github_fetcher: FakeFetcher[RawGitHubStatus],
    gitlab_fetcher: FakeFetcher[RawGitLabStatus],
    provider_logger: FakeLogger,
) -> GitHostRegistry:
    """Return a registry wired to canned fetchers and a recording logger."""
    del provider_logger
    return GitHostRegistry(
        github_fetcher=github_fetcher,
        gitlab_fetcher=gitlab_fetcher,
        events=GitHostEventLogger(),
    )
