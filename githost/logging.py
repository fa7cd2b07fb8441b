"""femtologging helpers shared by the provider layer, fetchers, and CLI.

Messages are rendered before they reach femtologging, either from a
percent-style template or as a structured ``[event] key=value`` line.

Example:
>>> from githost.logging import get_logger, log_event
>>> logger = get_logger(__name__)
>>> log_event(logger, "INFO", "githost.status.fetched", provider="gitlab")

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger

_DEFAULT_LEVEL = "INFO"


class LogLevel(enum.StrEnum):
    """Level names accepted by ``femtologging.basicConfig``."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Return ``(level, invalid)`` for a user-supplied level name.

    Blank or unknown names fall back to ``INFO`` with ``invalid`` set, so
    a typo in ``GITHOST_LOG_LEVEL`` never stops the command line.

    Examples
    --------
    >>> normalize_log_level(" debug ")
    ('DEBUG', False)
    >>> normalize_log_level("loud")
    ('INFO', True)

    """
    candidate = (level or "").strip().upper()
    try:
        return (LogLevel(candidate).value, False)
    except ValueError:
        return (_DEFAULT_LEVEL, True)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Install the femtologging root handler at the normalized level.

    Parameters
    ----------
    level : str | None
        Level name, typically from ``--log-level`` or ``GITHOST_LOG_LEVEL``.
    force : bool, optional
        Replace an existing handler configuration.

    Returns
    -------
    tuple[str, bool]
        The level applied and whether the input had to be replaced.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into a percent-style template.

    A template without arguments is returned as-is, so literal ``%`` signs
    in paths or branch names are safe.
    """
    if not args:
        return template
    return template % args


def format_event(event: str, **fields: object) -> str:
    """Render a structured event as ``[event] key=value ...``.

    Fields keep their keyword order; values are rendered with ``str``.

    Examples
    --------
    >>> format_event("githost.provider.unsupported", provider="bitbucket")
    '[githost.provider.unsupported] provider=bitbucket'

    """
    parts = [f"[{event}]"]
    parts.extend(f"{key}={value}" for key, value in fields.items())
    return " ".join(parts)


class _SupportsLog(typ.Protocol):
    """The subset of the femtologging logger API these helpers call."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: str,
    message: str,
    exc_info: object | None = None,
) -> None:
    logger.log(level, message, exc_info=exc_info, stack_info=False)


def log_event(
    logger: _SupportsLog, level: str, event: str, **fields: object
) -> None:
    """Log a structured event line at ``level``."""
    _emit(logger, level, format_event(event, **fields))


def log_debug(
    logger: _SupportsLog, template: str, *args: object, exc_info: object | None = None
) -> None:
    """Log at DEBUG."""
    _emit(logger, "DEBUG", format_log_message(template, *args), exc_info)


def log_warning(
    logger: _SupportsLog, template: str, *args: object, exc_info: object | None = None
) -> None:
    """Log at WARNING.

    Parameters
    ----------
    logger : _SupportsLog
        Destination logger.
    template : str
        Percent-style message template.
    *args : object
        Values for the template.
    exc_info : object | None, optional
        Exception to attach, for failures that are reported but tolerated.

    """
    _emit(logger, "WARNING", format_log_message(template, *args), exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Log ``message`` at ERROR with ``exc`` attached as exc_info."""
    _emit(logger, "ERROR", message, exc)


__all__ = [
    "LogLevel",
    "configure_logging",
    "format_event",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_event",
    "log_exception",
    "log_warning",
    "normalize_log_level",
]
