"""Shared test utilities."""

from __future__ import annotations

import asyncio
import dataclasses
import typing as typ

from githost.hosts.process import CommandResult

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


T = typ.TypeVar("T")


def run_async(coro_func: typ.Callable[[], typ.Coroutine[typ.Any, typ.Any, T]]) -> T:
    """Execute an async callable within the test context."""
    return asyncio.run(coro_func())


def ok(stdout: str = "") -> CommandResult:
    """Return a successful command result."""
    return CommandResult(returncode=0, stdout=stdout, stderr="")


def failed(stderr: str = "", returncode: int = 1) -> CommandResult:
    """Return a failed command result."""
    return CommandResult(returncode=returncode, stdout="", stderr=stderr)


@dataclasses.dataclass
class ScriptedRunner:
    """Command runner that answers from a table keyed by leading arguments.

    Each key is ``(program, *leading_args)``; the longest matching key wins.
    Values are either a ``CommandResult`` or an exception to raise.
    """

    script: dict[tuple[str, ...], CommandResult | Exception]
    calls: list[tuple[str, tuple[str, ...], Path]] = dataclasses.field(
        default_factory=list
    )

    async def __call__(
        self,
        program: str,
        args: cabc.Sequence[str],
        *,
        cwd: Path,
        timeout_s: float,
    ) -> CommandResult:
        """Record the call and return the scripted outcome."""
        del timeout_s
        argv = (program, *args)
        self.calls.append((program, tuple(args), cwd))
        matches = [key for key in self.script if argv[: len(key)] == key]
        if not matches:
            msg = f"unexpected command: {' '.join(argv)}"
            raise AssertionError(msg)
        outcome = self.script[max(matches, key=len)]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def programs(self) -> list[str]:
        """Return the programs invoked, in call order."""
        return [program for program, _, _ in self.calls]


@dataclasses.dataclass
class FakeFetcher(typ.Generic[T]):
    """Raw status fetcher returning a canned value and recording paths."""

    result: T | None = None
    error: Exception | None = None
    paths: list[Path] = dataclasses.field(default_factory=list)

    async def __call__(self, worktree_path: Path) -> T | None:
        """Return the canned status or raise the canned error."""
        self.paths.append(worktree_path)
        if self.error is not None:
            raise self.error
        return self.result


@dataclasses.dataclass
class FakeLogger:
    """Collects femtologging-style log calls for assertions."""

    calls: list[tuple[str, str]] = dataclasses.field(default_factory=list)

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        """Record the level and message."""
        del exc_info, stack_info
        self.calls.append((level, message))
        return message

    def messages(self, level: str | None = None) -> list[str]:
        """Return recorded messages, optionally filtered by level."""
        return [msg for lvl, msg in self.calls if level is None or lvl == level]
