"""Behavioural tests for the git host provider registry."""

from __future__ import annotations

import typing as typ

import msgspec
import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from tests.helpers import run_async

if typ.TYPE_CHECKING:
    from githost.hosts.models import RawGitHubStatus
    from githost.models import GitHostStatus, MergeCommand
    from githost.providers import GitHostRegistry
    from tests.helpers import FakeFetcher, FakeLogger

scenarios("../git_host_providers.feature")


class ProviderContext(typ.TypedDict, total=False):
    """Shared state used by BDD steps."""

    registry: GitHostRegistry
    status: GitHostStatus | None
    compare_url: str | None
    merge_command: MergeCommand | None


@pytest.fixture
def provider_context() -> ProviderContext:
    """Provide fresh context for each scenario."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------


@given("a registry with canned host fetchers")
def registry_with_fetchers(
    provider_context: ProviderContext, registry: GitHostRegistry
) -> None:
    """Use the shared registry wired to canned fetchers."""
    provider_context["registry"] = registry


@given("the GitHub branch has no pull request")
def github_branch_without_pull_request(
    github_fetcher: FakeFetcher[RawGitHubStatus],
) -> None:
    """Strip the pull request from the canned GitHub status."""
    assert github_fetcher.result is not None
    github_fetcher.result = msgspec.structs.replace(
        github_fetcher.result, pull_request=None
    )


@given("the GitHub fetcher has no data")
def github_fetcher_without_data(github_fetcher: FakeFetcher[RawGitHubStatus]) -> None:
    """Make the GitHub fetcher report nothing, as when gh is missing."""
    github_fetcher.result = None


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------


@when(parsers.parse('I fetch the status of "{worktree}" from "{provider}"'))
def fetch_status(
    provider_context: ProviderContext, worktree: str, provider: str
) -> None:
    """Fetch status through the registry."""
    registry = provider_context["registry"]
    provider_context["status"] = run_async(
        lambda: registry.fetch_status(worktree, provider)
    )


@when(
    parsers.parse(
        'I ask "{provider}" for the compare URL of "{branch}" against "{base}" '
        'in "{repo_url}"'
    )
)
def ask_compare_url(
    provider_context: ProviderContext,
    provider: str,
    branch: str,
    base: str,
    repo_url: str,
) -> None:
    """Build a compare URL through the registry."""
    provider_context["compare_url"] = provider_context["registry"].get_compare_url(
        provider, repo_url, branch, base
    )


@when(
    parsers.parse(
        'I ask for the "{method}" command for request {number:d} on "{provider}"'
    )
)
def ask_merge_command(
    provider_context: ProviderContext, method: str, number: int, provider: str
) -> None:
    """Build a merge command through the registry."""
    provider_context["merge_command"] = provider_context[
        "registry"
    ].get_merge_command(provider, number, method)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------


def _status(provider_context: ProviderContext) -> GitHostStatus:
    status = provider_context.get("status")
    assert status is not None, "Expected a status snapshot."
    return status


@then(parsers.parse('the status comes from provider "{provider}"'))
def status_provider(provider_context: ProviderContext, provider: str) -> None:
    """Assert the snapshot's provider."""
    assert _status(provider_context).provider == provider


@then(parsers.parse('the merge request number is {number:d} in state "{state}"'))
def merge_request_number_and_state(
    provider_context: ProviderContext, number: int, state: str
) -> None:
    """Assert the normalized request identity and lifecycle."""
    mr = _status(provider_context).merge_request
    assert mr is not None, "Expected a merge request."
    assert mr.number == number
    assert mr.state == state


@then(parsers.parse('the checks rollup is "{rollup}"'))
def checks_rollup(provider_context: ProviderContext, rollup: str) -> None:
    """Assert the checks rollup."""
    mr = _status(provider_context).merge_request
    assert mr is not None
    assert mr.checks_status == rollup


@then(parsers.parse('the repository URL is "{repo_url}"'))
def repository_url(provider_context: ProviderContext, repo_url: str) -> None:
    """Assert the repository web URL."""
    assert _status(provider_context).repo_url == repo_url


@then("the status has no merge request")
def status_without_merge_request(provider_context: ProviderContext) -> None:
    """Assert the branch has no request."""
    assert _status(provider_context).merge_request is None


@then("no status is returned")
def no_status(provider_context: ProviderContext) -> None:
    """Assert the registry reported absence."""
    assert provider_context.get("status") is None


@then("no merge command is returned")
def no_merge_command(provider_context: ProviderContext) -> None:
    """Assert command synthesis reported absence."""
    assert provider_context.get("merge_command") is None


@then(parsers.parse('a "{event}" event is logged'))
def event_logged(provider_logger: FakeLogger, event: str) -> None:
    """Assert a provider-layer event reached the logger."""
    messages = provider_logger.messages()
    assert any(message.startswith(f"[{event}]") for message in messages), (
        f"Expected {event} in {messages!r}"
    )


@then(parsers.parse('the compare URL is "{url}"'))
def compare_url_is(provider_context: ProviderContext, url: str) -> None:
    """Assert the synthesized compare URL."""
    assert provider_context.get("compare_url") == url


@then(parsers.parse('the merge command is "{command}"'))
def merge_command_is(provider_context: ProviderContext, command: str) -> None:
    """Assert the full merge invocation."""
    merge_command = provider_context.get("merge_command")
    assert merge_command is not None
    assert " ".join((merge_command.command, *merge_command.args)) == command
