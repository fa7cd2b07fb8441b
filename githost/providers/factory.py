"""Factory for a provider registry wired to the host CLI fetchers."""

from __future__ import annotations

from githost.hosts.config import HostCLIConfig
from githost.hosts.github import GitHubCLIFetcher
from githost.hosts.gitlab import GitLabCLIFetcher
from githost.providers.registry import GitHostRegistry


def create_registry(config: HostCLIConfig | None = None) -> GitHostRegistry:
    """Create a registry whose adapters fetch through ``gh`` and ``glab``.

    Parameters
    ----------
    config
        Executables and timeout for the CLI fetchers. When omitted, the
        configuration is read with :meth:`HostCLIConfig.from_env`:

        - ``GITHOST_GIT_PATH``: Optional ``git`` executable
        - ``GITHOST_GH_PATH``: Optional ``gh`` executable
        - ``GITHOST_GLAB_PATH``: Optional ``glab`` executable
        - ``GITHOST_CLI_TIMEOUT_S``: Optional timeout in seconds

    Returns
    -------
    GitHostRegistry
        Registry with CLI-backed GitHub and GitLab fetchers.

    Raises
    ------
    HostConfigError
        If the environment configuration is invalid.

    Examples
    --------
    >>> registry = create_registry(HostCLIConfig(timeout_s=5.0))
    >>> registry.resolve("github").cli_tool_name
    'gh'

    """
    resolved = config if config is not None else HostCLIConfig.from_env()
    return GitHostRegistry(
        github_fetcher=GitHubCLIFetcher(config=resolved),
        gitlab_fetcher=GitLabCLIFetcher(config=resolved),
    )
