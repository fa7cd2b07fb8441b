"""Errors raised by the host CLI fetchers."""

from __future__ import annotations

# Content preview length for error messages
_CONTENT_PREVIEW_LIMIT = 100


class HostCLIError(RuntimeError):
    """Raised when a git or host CLI invocation fails.

    Attributes
    ----------
    program
        Executable that was run.
    returncode
        Exit status, when the process finished.
    stderr
        Captured standard error, stripped.

    """

    def __init__(
        self,
        message: str,
        *,
        program: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialise with a message and the failing process details."""
        self.program = program
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    @classmethod
    def command_failed(
        cls, program: str, args: tuple[str, ...], returncode: int, stderr: str
    ) -> HostCLIError:
        """Return an error for a non-zero exit status."""
        command = " ".join((program, *args))
        detail = stderr.strip()
        msg = f"{command} exited with status {returncode}"
        if detail:
            msg = f"{msg}: {detail}"
        return cls(msg, program=program, returncode=returncode, stderr=detail)

    @classmethod
    def timed_out(cls, program: str, timeout_s: float) -> HostCLIError:
        """Return an error for a process that exceeded its time budget."""
        return cls(f"{program} timed out after {timeout_s}s", program=program)


class HostCLIUnavailableError(HostCLIError):
    """Raised when a CLI executable cannot be found."""

    @classmethod
    def not_installed(cls, program: str) -> HostCLIUnavailableError:
        """Return an error for a missing executable."""
        return cls(f"{program} is not installed or not on PATH", program=program)


class HostResponseShapeError(RuntimeError):
    """Raised when CLI JSON output is malformed or missing fields."""

    @classmethod
    def invalid_json(cls, program: str, content: str) -> HostResponseShapeError:
        """Return an error with a truncated preview of the bad output."""
        if len(content) > _CONTENT_PREVIEW_LIMIT:
            preview = content[:_CONTENT_PREVIEW_LIMIT] + "..."
        else:
            preview = content
        return cls(f"Failed to parse {program} JSON output: {preview}")


class HostConfigError(RuntimeError):
    """Raised when host CLI configuration from the environment is invalid."""

    @classmethod
    def invalid_timeout(cls, value: str) -> HostConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(
            f"Invalid GITHOST_CLI_TIMEOUT_S '{value}'. Must be a positive number"
        )

    @classmethod
    def empty_executable(cls, env_var: str) -> HostConfigError:
        """Return an error for an executable override set to blank."""
        return cls(f"{env_var} must name an executable when set")
