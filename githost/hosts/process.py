"""Async subprocess execution for git and host CLIs."""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import contextlib
import dataclasses
import typing as typ

from githost.hosts.errors import HostCLIError, HostCLIUnavailableError

if typ.TYPE_CHECKING:
    from pathlib import Path


@dataclasses.dataclass(frozen=True, slots=True)
class CommandResult:
    """Completed process output, decoded as UTF-8."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Return True when the process exited with status zero."""
        return self.returncode == 0


class CommandRunner(typ.Protocol):
    """Callable that runs a program and captures its output."""

    def __call__(
        self,
        program: str,
        args: cabc.Sequence[str],
        *,
        cwd: Path,
        timeout_s: float,
    ) -> cabc.Awaitable[CommandResult]:
        """Run ``program`` with ``args`` inside ``cwd``."""
        ...


async def run_command(
    program: str,
    args: cabc.Sequence[str],
    *,
    cwd: Path,
    timeout_s: float,
) -> CommandResult:
    """Run a program without a shell and capture its output.

    Parameters
    ----------
    program
        Executable name or path.
    args
        Arguments passed verbatim.
    cwd
        Working directory, normally the worktree.
    timeout_s
        Seconds to wait before killing the process.

    Returns
    -------
    CommandResult
        Exit status and decoded output. Non-zero exits are returned, not
        raised, so callers can interpret host-specific failure messages.

    Raises
    ------
    HostCLIUnavailableError
        If the executable does not exist.
    HostCLIError
        If the process exceeds ``timeout_s``.

    """
    try:
        proc = await asyncio.create_subprocess_exec(
            program,
            *args,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise HostCLIUnavailableError.not_installed(program) from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_s)
    except TimeoutError as exc:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        raise HostCLIError.timed_out(program, timeout_s) from exc

    return CommandResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )


A = typ.TypeVar("A")
B = typ.TypeVar("B")


async def gather_settled(
    first: cabc.Awaitable[A], second: cabc.Awaitable[B]
) -> tuple[A, B]:
    """Await both concurrently and raise the first failure once both settle.

    Unlike a plain ``asyncio.gather``, a failing call never leaves its
    sibling subprocess running unobserved.
    """
    first_result, second_result = await asyncio.gather(
        first, second, return_exceptions=True
    )
    for outcome in (first_result, second_result):
        if isinstance(outcome, BaseException):
            raise outcome
    return (typ.cast("A", first_result), typ.cast("B", second_result))
