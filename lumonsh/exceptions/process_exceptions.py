"""
Process Exceptions

Exceptions related to child process creation, program loading and reaping.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from typing import Optional, Any


class ProcessException(Exception):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        pid: Process ID associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.pid = pid
        self.error_code = error_code or 2000
        self.context = context or {}
        if pid is not None:
            self.context["pid"] = pid

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.pid is not None:
            base = f"{base} (pid={self.pid})"
        return base


class ForkError(ProcessException):
    """
    Error during fork().

    Common causes include:
    - Process limit exceeded
    - Memory allocation failure for the child

    Example:
        >>> raise ForkError("Resource temporarily unavailable", parent_pid=1)
    """

    def __init__(
        self,
        message: str,
        parent_pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            pid=parent_pid,
            error_code=2005,
            context=context
        )
        self.parent_pid = parent_pid


class ExecError(ProcessException):
    """
    Error opening or executing a program inside a child.

    Common causes include:
    - File not found
    - Permission denied
    - Invalid executable format

    Example:
        >>> raise ExecError("Exec format error", pid=42, path="c/prog")
    """

    def __init__(
        self,
        message: str,
        pid: int,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            pid=pid,
            error_code=2006,
            context=ctx
        )
        self.path = path


class WaitError(ProcessException):
    """Error waiting for a child to terminate."""

    def __init__(
        self,
        message: str,
        pid: int,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            pid=pid,
            error_code=2010,
            context=context
        )
