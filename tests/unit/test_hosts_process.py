"""Unit tests for async subprocess execution and CLI error types."""

from __future__ import annotations

import asyncio
import sys
import typing as typ

import pytest

from githost.hosts.errors import (
    HostCLIError,
    HostCLIUnavailableError,
    HostResponseShapeError,
)
from githost.hosts.process import CommandResult, gather_settled, run_command

if typ.TYPE_CHECKING:
    from pathlib import Path


class TestRunCommand:
    """Tests for run_command against the running interpreter."""

    @pytest.mark.asyncio
    async def test_captures_output_and_status(self, tmp_path: Path) -> None:
        """Stdout, stderr and a non-zero exit are returned, not raised."""
        script = (
            "import os, sys; print(os.getcwd()); "
            "print('oops', file=sys.stderr); sys.exit(3)"
        )

        result = await run_command(
            sys.executable, ("-c", script), cwd=tmp_path, timeout_s=30
        )

        assert result.returncode == 3
        assert not result.ok
        assert result.stdout.strip() == str(tmp_path.resolve())
        assert result.stderr.strip() == "oops"

    @pytest.mark.asyncio
    async def test_missing_executable_raises_unavailable(
        self, tmp_path: Path
    ) -> None:
        """A program that does not exist maps to HostCLIUnavailableError."""
        with pytest.raises(HostCLIUnavailableError, match="not installed"):
            await run_command(
                "githost-no-such-cli", ("--version",), cwd=tmp_path, timeout_s=5
            )

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, tmp_path: Path) -> None:
        """A process exceeding the timeout is killed and reported."""
        with pytest.raises(HostCLIError, match="timed out") as excinfo:
            await run_command(
                sys.executable,
                ("-c", "import time; time.sleep(30)"),
                cwd=tmp_path,
                timeout_s=0.2,
            )

        assert not isinstance(excinfo.value, HostCLIUnavailableError)


class TestGatherSettled:
    """Tests for gather_settled."""

    @pytest.mark.asyncio
    async def test_returns_both_results_in_order(self) -> None:
        """Results come back positionally."""

        async def value(result: object) -> object:
            await asyncio.sleep(0)
            return result

        assert await gather_settled(value("main"), value(True)) == ("main", True)

    @pytest.mark.asyncio
    async def test_failure_waits_for_sibling(self) -> None:
        """The sibling finishes before the first failure is raised."""
        finished: list[str] = []

        async def fail() -> None:
            raise HostCLIError("gh exited", program="gh")

        async def slow() -> bool:
            for _ in range(5):
                await asyncio.sleep(0)
            finished.append("slow")
            return True

        with pytest.raises(HostCLIError, match="gh exited"):
            await gather_settled(slow(), fail())

        assert finished == ["slow"]


def test_command_result_ok() -> None:
    """Only exit status zero counts as success."""
    assert CommandResult(returncode=0, stdout="", stderr="").ok
    assert not CommandResult(returncode=2, stdout="", stderr="").ok


class TestErrors:
    """Tests for error constructors."""

    def test_command_failed_includes_command_and_stderr(self) -> None:
        """The message names the full command and the trimmed stderr."""
        exc = HostCLIError.command_failed("gh", ("pr", "view"), 4, "  auth required\n")

        assert str(exc) == "gh pr view exited with status 4: auth required"
        assert exc.program == "gh"
        assert exc.returncode == 4
        assert exc.stderr == "auth required"

    def test_command_failed_without_stderr(self) -> None:
        """An empty stderr leaves only the exit status in the message."""
        exc = HostCLIError.command_failed("git", ("status",), 128, "")
        assert str(exc) == "git status exited with status 128"

    def test_invalid_json_truncates_preview(self) -> None:
        """Long output is truncated to a preview."""
        exc = HostResponseShapeError.invalid_json("glab", "x" * 150)
        assert str(exc).endswith("x" * 100 + "...")
