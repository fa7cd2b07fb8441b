"""Command-line access to git host review status and workflow commands."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path

import msgspec

from githost.hosts.config import HostCLIConfig
from githost.hosts.errors import HostCLIError, HostConfigError, HostResponseShapeError
from githost.hosts.git import detect_provider
from githost.logging import configure_logging, get_logger, log_exception, log_warning
from githost.models import MergeMethod
from githost.providers.factory import create_registry

logger = get_logger(__name__)

_AUTO_PROVIDER = "auto"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="githost", description=__doc__)
    parser.add_argument(
        "--log-level",
        default=os.environ.get("GITHOST_LOG_LEVEL"),
        help="femtologging level (default: $GITHOST_LOG_LEVEL or INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    status = commands.add_parser(
        "status", help="Print the review status of a worktree as JSON"
    )
    status.add_argument(
        "worktree",
        type=Path,
        nargs="?",
        default=Path(),
        help="Worktree to inspect (default: current directory)",
    )
    status.add_argument(
        "--provider",
        default=_AUTO_PROVIDER,
        help="Provider identifier, or 'auto' to detect it from the origin remote",
    )

    compare = commands.add_parser(
        "compare-url", help="Print the URL that opens a new request for a branch"
    )
    compare.add_argument("--provider", required=True, help="Provider identifier")
    compare.add_argument("repo_url", help="Repository web URL")
    compare.add_argument("branch", help="Source branch")
    compare.add_argument("base_branch", help="Target branch")

    merge = commands.add_parser(
        "merge-command", help="Print the CLI invocation that merges a request"
    )
    merge.add_argument("--provider", required=True, help="Provider identifier")
    merge.add_argument("number", type=int, help="Pull or merge request number")
    merge.add_argument(
        "--method",
        choices=[method.value for method in MergeMethod],
        default=MergeMethod.SQUASH.value,
        help="Merge strategy (default: squash)",
    )
    return parser


async def _status(worktree: Path, provider: str, config: HostCLIConfig) -> bytes | None:
    identifier: str | None = provider
    if provider == _AUTO_PROVIDER:
        identifier = await detect_provider(worktree, config=config)
        if identifier is None:
            log_warning(logger, "Could not detect a git host for %s", worktree)
            return None

    registry = create_registry(config)
    status = await registry.fetch_status(worktree, identifier)
    if status is None:
        return None
    return msgspec.json.encode(status)


def _emit(payload: bytes | str | None) -> int:
    if payload is None:
        return 1
    text = payload.decode() if isinstance(payload, bytes) else payload
    print(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run a ``githost`` subcommand.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the provider is unsupported or no
        status is available, 2 when a host CLI or configuration fails.

    """
    args = _build_parser().parse_args(argv)
    _, invalid = configure_logging(args.log_level)
    if invalid and args.log_level:
        log_warning(logger, "Unknown log level %r, using INFO", args.log_level)

    try:
        config = HostCLIConfig.from_env()
        match args.command:
            case "status":
                payload = asyncio.run(_status(args.worktree, args.provider, config))
                return _emit(payload)
            case "compare-url":
                url = create_registry(config).get_compare_url(
                    args.provider, args.repo_url, args.branch, args.base_branch
                )
                return _emit(url)
            case "merge-command":
                command = create_registry(config).get_merge_command(
                    args.provider, args.number, args.method
                )
                return _emit(msgspec.json.encode(command) if command else None)
            case _:  # pragma: no cover - argparse enforces the choices
                return 2
    except (HostCLIError, HostConfigError, HostResponseShapeError) as exc:
        log_exception(logger, f"githost {args.command} failed", exc)
        print(f"githost: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
