"""Bucket storage error types.

Provides typed exceptions for gsutil-backed bucket operations. Every failure
path raises to the caller, who decides whether to continue a batch of copies
or abort. Nothing here terminates the process.
"""

from __future__ import annotations

from collections.abc import Sequence


class BucketStorageError(Exception):
    """Base exception for bucket storage operations.

    Attributes:
        message: Human-readable error message.
        path: Local or bucket path associated with the operation (if applicable).
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"path={self.path}")
        return " ".join(parts)


class SourceNotFoundError(BucketStorageError):
    """Raised when a local copy source does not exist and missing sources are not allowed."""

    def __init__(
        self,
        message: str = "source directory does not exist",
        *,
        path: str | None = None,
    ) -> None:
        super().__init__(message, path=path)


class GSUtilCommandError(BucketStorageError):
    """Raised when a gsutil invocation fails.

    Covers both a non-zero exit status and a failure to launch the process
    at all. In the latter case ``returncode`` is None and ``cause`` holds the
    OS error.

    Attributes:
        command_args: Arguments passed to gsutil (without the executable).
        returncode: Process exit status, or None if the process never ran.
        output: Combined stdout/stderr captured from the process.
        cause: Underlying exception for launch failures.
    """

    def __init__(
        self,
        message: str = "gsutil command failed",
        *,
        command_args: Sequence[str] = (),
        returncode: int | None = None,
        output: str = "",
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.command_args = tuple(command_args)
        self.returncode = returncode
        self.output = output
        self.cause = cause

    def __str__(self) -> str:
        parts = [self.message]
        if self.returncode is not None:
            parts.append(f"exit_status={self.returncode}")
        if self.command_args:
            parts.append(f"args={' '.join(self.command_args)}")
        return " ".join(parts)


class ToolNotFoundError(BucketStorageError):
    """Raised when the gsutil executable cannot be found on PATH."""

    def __init__(
        self,
        message: str = "gsutil executable not found",
        *,
        executable: str | None = None,
    ) -> None:
        super().__init__(message)
        self.executable = executable

    def __str__(self) -> str:
        if self.executable:
            return f"{self.message}: {self.executable}"
        return self.message


class BucketOperationError(BucketStorageError):
    """Raised when a facade operation fails because gsutil failed.

    Wraps the underlying error with the name of the operation, e.g.
    ``"gcs copy"`` or ``"running gsutil rsync"``.
    """

    def __init__(
        self,
        context: str,
        *,
        cause: Exception | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(context, path=path)
        self.context = context
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.context
        return f"{self.context}: {self.cause}"
