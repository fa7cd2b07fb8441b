"""Host CLI fetchers that collect raw review state for a worktree.

These are the default ``RawStatusFetcher`` implementations injected into the
provider registry. They shell out to ``git``, ``gh`` and ``glab``; the
provider layer itself never performs I/O.
"""

from __future__ import annotations

from .config import HostCLIConfig
from .errors import (
    HostCLIError,
    HostCLIUnavailableError,
    HostConfigError,
    HostResponseShapeError,
)
from .git import detect_provider
from .github import GitHubCLIFetcher
from .gitlab import GitLabCLIFetcher
from .models import RawGitHubStatus, RawGitLabStatus
from .process import CommandResult, run_command

__all__ = [
    "CommandResult",
    "GitHubCLIFetcher",
    "GitLabCLIFetcher",
    "HostCLIConfig",
    "HostCLIError",
    "HostCLIUnavailableError",
    "HostConfigError",
    "HostResponseShapeError",
    "RawGitHubStatus",
    "RawGitLabStatus",
    "detect_provider",
    "run_command",
]
