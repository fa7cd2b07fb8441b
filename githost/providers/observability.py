"""Structured log events for provider resolution and status fetches.

Callers receive ``None`` for an unsupported provider, for a fetcher with no
data, and see ``merge_request=None`` when a branch has no request. These
events keep the cases apart in logs.
"""

from __future__ import annotations

import enum
import typing as typ

from githost.logging import get_logger, log_event

if typ.TYPE_CHECKING:
    from pathlib import Path

    from githost.models import GitHostStatus, ProviderId

logger = get_logger(__name__)


class GitHostEventType(enum.StrEnum):
    """Structured log event types for the provider layer."""

    PROVIDER_UNSUPPORTED = "githost.provider.unsupported"
    PROVIDER_UNKNOWN = "githost.provider.unknown"
    STATUS_UNAVAILABLE = "githost.status.unavailable"
    STATUS_FETCHED = "githost.status.fetched"
    MERGE_REQUEST_ABSENT = "githost.merge_request.absent"


class GitHostEventLogger:
    """Emit provider-layer events through femtologging.

    Unknown identifiers are logged at DEBUG because callers try providers
    speculatively; a recognised provider without an adapter, or a fetcher
    that returned nothing, is a WARNING.
    """

    def log_provider_unsupported(self, provider: ProviderId) -> None:
        """Log a recognised provider that has no adapter."""
        log_event(
            logger, "WARNING", GitHostEventType.PROVIDER_UNSUPPORTED, provider=provider
        )

    def log_provider_unknown(self, identifier: object) -> None:
        """Log an identifier that names no known provider."""
        log_event(
            logger,
            "DEBUG",
            GitHostEventType.PROVIDER_UNKNOWN,
            identifier=repr(identifier),
        )

    def log_status_unavailable(
        self, provider: ProviderId, cli_tool_name: str, worktree_path: str | Path
    ) -> None:
        """Log a fetcher that produced no status for a worktree."""
        log_event(
            logger,
            "WARNING",
            GitHostEventType.STATUS_UNAVAILABLE,
            provider=provider,
            worktree=worktree_path,
            hint=f"is {cli_tool_name} installed and authenticated?",
        )

    def log_status_fetched(
        self, status: GitHostStatus, worktree_path: str | Path
    ) -> None:
        """Log a snapshot, distinguishing a missing merge request."""
        mr = status.merge_request
        if mr is None:
            log_event(
                logger,
                "INFO",
                GitHostEventType.MERGE_REQUEST_ABSENT,
                provider=status.provider,
                worktree=worktree_path,
                branch_exists_on_remote=status.branch_exists_on_remote,
            )
            return
        log_event(
            logger,
            "INFO",
            GitHostEventType.STATUS_FETCHED,
            provider=status.provider,
            worktree=worktree_path,
            number=mr.number,
            state=mr.state,
            checks=mr.checks_status,
        )
