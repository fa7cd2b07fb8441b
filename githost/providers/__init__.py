"""Git host provider abstraction.

This package normalizes pull and merge request state across hosting
platforms. The `GitHostProvider` protocol defines the adapter interface,
`GitHubProvider` and `GitLabProvider` implement it, and `GitHostRegistry`
resolves identifiers to adapters.

Public API
----------
GitHostProvider
    Protocol every host adapter implements.
RawStatusFetcher
    Protocol for injected per-host status fetchers.
GitHubProvider
    Adapter for GitHub pull requests and the ``gh`` CLI.
GitLabProvider
    Adapter for GitLab merge requests and the ``glab`` CLI.
GitHostRegistry
    Resolves identifiers and exposes the provider-agnostic operations.
create_registry
    Factory wiring the registry to the CLI-backed fetchers.
GitHostEventLogger
    Structured logging for resolution and fetch outcomes.

Examples
--------
>>> from githost.providers import create_registry
>>> registry = create_registry()
>>> registry.get_compare_url("github", "https://github.com/o/r", "feat/x", "main")
'https://github.com/o/r/compare/main...feat%2Fx?expand=1'
>>> registry.resolve("bitbucket") is None
True

"""

from __future__ import annotations

from githost.providers.factory import create_registry
from githost.providers.github import GitHubProvider
from githost.providers.gitlab import GitLabProvider
from githost.providers.observability import GitHostEventLogger, GitHostEventType
from githost.providers.protocol import GitHostProvider, RawStatusFetcher
from githost.providers.registry import GitHostRegistry

__all__ = [
    "GitHostEventLogger",
    "GitHostEventType",
    "GitHostProvider",
    "GitHostRegistry",
    "GitHubProvider",
    "GitLabProvider",
    "RawStatusFetcher",
    "create_registry",
]
