"""Git queries needed to build a host status snapshot."""

from __future__ import annotations

import typing as typ

from githost.common.remote import parse_remote_url
from githost.hosts.errors import HostCLIError
from githost.hosts.process import run_command

if typ.TYPE_CHECKING:
    from pathlib import Path

    from githost.hosts.config import HostCLIConfig
    from githost.hosts.process import CommandRunner
    from githost.models import ProviderId


async def current_branch(
    worktree_path: Path,
    *,
    config: HostCLIConfig,
    runner: CommandRunner = run_command,
) -> str:
    """Return the branch checked out in ``worktree_path``.

    Raises
    ------
    HostCLIError
        If git cannot resolve ``HEAD``.

    """
    args = ("rev-parse", "--abbrev-ref", "HEAD")
    result = await runner(
        config.git_executable, args, cwd=worktree_path, timeout_s=config.timeout_s
    )
    if not result.ok:
        raise HostCLIError.command_failed(
            config.git_executable, args, result.returncode, result.stderr
        )
    return result.stdout.strip()


async def branch_exists_on_remote(
    worktree_path: Path,
    branch: str,
    *,
    config: HostCLIConfig,
    runner: CommandRunner = run_command,
) -> bool:
    """Return True only when ``origin`` has a head named ``branch``.

    ``git ls-remote --exit-code`` exits with status 2 when the head is
    missing; that and any other failure (no ``origin``, offline remote)
    count as "not on remote".
    """
    result = await runner(
        config.git_executable,
        ("ls-remote", "--exit-code", "--heads", "origin", branch),
        cwd=worktree_path,
        timeout_s=config.timeout_s,
    )
    return result.ok


async def remote_url(
    worktree_path: Path,
    *,
    config: HostCLIConfig,
    runner: CommandRunner = run_command,
) -> str | None:
    """Return the ``origin`` remote URL, or ``None`` when it is not set."""
    result = await runner(
        config.git_executable,
        ("remote", "get-url", "origin"),
        cwd=worktree_path,
        timeout_s=config.timeout_s,
    )
    if not result.ok:
        return None
    return result.stdout.strip() or None


async def detect_provider(
    worktree_path: Path,
    *,
    config: HostCLIConfig,
    runner: CommandRunner = run_command,
) -> ProviderId | None:
    """Infer the hosting platform from the ``origin`` remote URL."""
    url = await remote_url(worktree_path, config=config, runner=runner)
    if url is None:
        return None
    return parse_remote_url(url).provider
