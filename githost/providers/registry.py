"""Single resolution point from provider identifier to adapter."""

from __future__ import annotations

import dataclasses
import typing as typ

from githost.models import ProviderId
from githost.providers.github import GitHubProvider
from githost.providers.gitlab import GitLabProvider
from githost.providers.observability import GitHostEventLogger

if typ.TYPE_CHECKING:
    from pathlib import Path

    from githost.hosts.models import RawGitHubStatus, RawGitLabStatus
    from githost.models import GitHostStatus, MergeCommand, MergeMethod
    from githost.providers.protocol import GitHostProvider, RawStatusFetcher


@dataclasses.dataclass(frozen=True, slots=True)
class GitHostRegistry:
    """Resolve providers and delegate provider-agnostic operations.

    Every operation returns ``None`` for identifiers without an adapter
    (``bitbucket`` or anything unrecognised) instead of raising, so callers
    may try providers freely. Adding a host means adding one ``match`` arm
    in :meth:`resolve`; callers never branch on the provider themselves.

    Parameters
    ----------
    github_fetcher
        Raw status fetcher injected into the GitHub adapter.
    gitlab_fetcher
        Raw status fetcher injected into the GitLab adapter.
    events
        Structured event logger; defaults to a fresh ``GitHostEventLogger``.

    Examples
    --------
    >>> registry = GitHostRegistry(github_fetcher=gh, gitlab_fetcher=glab)
    >>> registry.get_merge_command("gitlab", 7, "merge").args
    ('mr', 'merge', '7', '--remove-source-branch', '--yes')
    >>> registry.get_merge_command("bitbucket", 7, "merge") is None
    True

    """

    github_fetcher: RawStatusFetcher[RawGitHubStatus]
    gitlab_fetcher: RawStatusFetcher[RawGitLabStatus]
    events: GitHostEventLogger = dataclasses.field(default_factory=GitHostEventLogger)

    def resolve(self, identifier: ProviderId | str | None) -> GitHostProvider | None:
        """Return the adapter for ``identifier``, or ``None``.

        Never raises: unknown values, ``None``, and providers without an
        adapter all resolve to ``None``.
        """
        provider = ProviderId.parse(identifier)
        match provider:
            case ProviderId.GITHUB:
                return GitHubProvider(fetcher=self.github_fetcher)
            case ProviderId.GITLAB:
                return GitLabProvider(fetcher=self.gitlab_fetcher)
            case ProviderId.BITBUCKET:
                self.events.log_provider_unsupported(provider)
                return None
            case None:
                self.events.log_provider_unknown(identifier)
                return None

    async def fetch_status(
        self,
        worktree_path: str | Path,
        identifier: ProviderId | str | None,
    ) -> GitHostStatus | None:
        """Fetch a normalized status snapshot through the resolved adapter.

        Parameters
        ----------
        worktree_path
            Worktree whose current branch is inspected.
        identifier
            Provider to query.

        Returns
        -------
        GitHostStatus | None
            The snapshot, or ``None`` when the provider is unsupported or its
            fetcher had no data. Fetcher exceptions propagate unchanged.

        """
        adapter = self.resolve(identifier)
        if adapter is None:
            return None

        status = await adapter.fetch_status(worktree_path)
        if status is None:
            self.events.log_status_unavailable(
                adapter.id, adapter.cli_tool_name, worktree_path
            )
            return None

        self.events.log_status_fetched(status, worktree_path)
        return status

    def get_compare_url(
        self,
        identifier: ProviderId | str | None,
        repo_url: str,
        branch: str,
        base_branch: str,
    ) -> str | None:
        """Return the URL for opening a new request, or ``None``."""
        adapter = self.resolve(identifier)
        if adapter is None:
            return None
        return adapter.get_compare_url(repo_url, branch, base_branch)

    def get_merge_command(
        self,
        identifier: ProviderId | str | None,
        number: int,
        method: MergeMethod | str,
    ) -> MergeCommand | None:
        """Return the CLI merge invocation, or ``None``."""
        adapter = self.resolve(identifier)
        if adapter is None:
            return None
        return adapter.get_merge_command(number, method)
