"""Configuration for the git and host CLI fetchers."""

from __future__ import annotations

import dataclasses
import math
import os

from githost.hosts.errors import HostConfigError

# Default configuration values - single source of truth
_DEFAULT_GIT = "git"
_DEFAULT_GH = "gh"
_DEFAULT_GLAB = "glab"
_DEFAULT_TIMEOUT_S = 30.0


@dataclasses.dataclass(frozen=True, slots=True)
class HostCLIConfig:
    """Executables and limits used when shelling out to host CLIs.

    Attributes
    ----------
    git_executable
        ``git`` binary used for branch and remote queries.
    gh_executable
        GitHub CLI binary.
    glab_executable
        GitLab CLI binary.
    timeout_s
        Per-invocation timeout in seconds.

    """

    git_executable: str = _DEFAULT_GIT
    gh_executable: str = _DEFAULT_GH
    glab_executable: str = _DEFAULT_GLAB
    timeout_s: float = _DEFAULT_TIMEOUT_S

    @staticmethod
    def _executable_from_env(env_var: str, default: str) -> str:
        """Read an executable override, rejecting blank values."""
        raw = os.environ.get(env_var)
        if raw is None:
            return default
        value = raw.strip()
        if not value:
            raise HostConfigError.empty_executable(env_var)
        return value

    @staticmethod
    def _parse_timeout_from_env() -> float:
        """Parse and validate the CLI timeout from the environment.

        Raises
        ------
        HostConfigError
            If the value is not a finite positive number.

        """
        raw_timeout = os.environ.get("GITHOST_CLI_TIMEOUT_S")
        if raw_timeout is None:
            return _DEFAULT_TIMEOUT_S

        try:
            timeout_s = float(raw_timeout)
        except ValueError as exc:
            raise HostConfigError.invalid_timeout(raw_timeout) from exc

        if not math.isfinite(timeout_s) or timeout_s <= 0:
            raise HostConfigError.invalid_timeout(raw_timeout)

        return timeout_s

    @classmethod
    def from_env(cls) -> HostCLIConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``GITHOST_GIT_PATH``: Optional ``git`` executable override
        - ``GITHOST_GH_PATH``: Optional ``gh`` executable override
        - ``GITHOST_GLAB_PATH``: Optional ``glab`` executable override
        - ``GITHOST_CLI_TIMEOUT_S``: Optional timeout (positive seconds)

        Raises
        ------
        HostConfigError
            If an override is blank or the timeout is invalid.

        """
        return cls(
            git_executable=cls._executable_from_env("GITHOST_GIT_PATH", _DEFAULT_GIT),
            gh_executable=cls._executable_from_env("GITHOST_GH_PATH", _DEFAULT_GH),
            glab_executable=cls._executable_from_env(
                "GITHOST_GLAB_PATH", _DEFAULT_GLAB
            ),
            timeout_s=cls._parse_timeout_from_env(),
        )
