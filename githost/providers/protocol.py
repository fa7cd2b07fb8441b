"""Protocols for git host provider adapters and their raw fetchers."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from githost.models import GitHostStatus, MergeCommand, MergeMethod, ProviderId


T = typ.TypeVar("T")


class RawStatusFetcher(typ.Protocol[T]):
    """Host-specific collaborator that gathers raw review state.

    Fetchers own all network and CLI access, authentication, and any
    caching. They return ``None`` when they have nothing to report for the
    worktree (not a repository on that host, CLI missing) and raise through
    their own exceptions when a query fails.
    """

    def __call__(self, worktree_path: Path) -> cabc.Awaitable[T | None]:
        """Fetch raw status for ``worktree_path``."""
        ...


@typ.runtime_checkable
class GitHostProvider(typ.Protocol):
    """Capabilities every git host adapter provides.

    Adapters are stateless apart from their injected fetcher. Only
    ``fetch_status`` touches the outside world, and only through that
    fetcher; URL and command synthesis are pure.

    Examples
    --------
    >>> from githost.providers import GitHostProvider, GitHubProvider
    >>> adapter = GitHubProvider(fetcher=my_fetcher)
    >>> isinstance(adapter, GitHostProvider)
    True

    """

    @property
    def id(self) -> ProviderId:
        """Identifier of the host this adapter serves."""
        ...

    @property
    def cli_tool_name(self) -> str:
        """Name of the host's review CLI, for user-facing messages."""
        ...

    async def fetch_status(self, worktree_path: str | Path) -> GitHostStatus | None:
        """Fetch and normalize review state for a worktree.

        Parameters
        ----------
        worktree_path
            Path of the worktree whose current branch is inspected.

        Returns
        -------
        GitHostStatus | None
            A fresh snapshot, or ``None`` when the fetcher reported no data.
            Fetcher exceptions propagate unchanged.

        """
        ...

    def get_compare_url(self, repo_url: str, branch: str, base_branch: str) -> str:
        """Build the host URL that opens a new request for ``branch``."""
        ...

    def get_merge_command(
        self, number: int, method: MergeMethod | str
    ) -> MergeCommand:
        """Build the CLI invocation that merges request ``number``.

        Raises
        ------
        ValueError
            If ``method`` is not a ``MergeMethod`` value.

        """
        ...
