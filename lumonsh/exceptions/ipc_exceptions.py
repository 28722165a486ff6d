"""
IPC Exceptions

Exceptions related to the pipe joining the two halves of a pipeline.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from typing import Optional, Any


class IPCException(Exception):
    """
    Base exception for all IPC-related errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 6000
        self.context = context or {}

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class PipeError(IPCException):
    """
    Error in pipe operations.

    This exception is raised when:
    - The pipe cannot be created (descriptor table full)
    - An endpoint is used after it has been closed

    Example:
        >>> raise PipeError("pipe failed", errno=24)
    """

    def __init__(
        self,
        message: str,
        errno: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if errno is not None:
            ctx["errno"] = errno
        super().__init__(
            message=message,
            error_code=6001,
            context=ctx
        )
        self.errno = errno
