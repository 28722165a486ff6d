"""
Filesystem Exceptions

Exceptions related to path resolution and file handling.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class FileNotFoundError(FileSystemException):
    """
    The specified file does not exist.

    Example:
        >>> raise FileNotFoundError("c/missing")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"No such file: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class PermissionDeniedError(FileSystemException):
    """
    Permission denied for a file operation.

    Example:
        >>> raise PermissionDeniedError("c/secret", operation="open")
    """

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(
            message=f"Permission denied: {path}",
            path=path,
            error_code=4003,
            context=ctx
        )
        self.operation = operation


class PathResolutionError(FileSystemException):
    """
    A user token cannot be mapped onto a filesystem path.

    Raised for empty tokens and tokens made only of the root separator.

    Example:
        >>> raise PathResolutionError("/", reason="root only")
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Path resolution failed: {path!r}",
            path=path,
            error_code=4006,
            context=ctx
        )
        self.reason = reason


class RedirectionError(FileSystemException):
    """
    A redirection target could not be opened.

    Example:
        >>> raise RedirectionError("c/in.txt", stream="input")
    """

    def __init__(
        self,
        path: str,
        stream: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["stream"] = stream
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"{stream} redirection failure",
            path=path,
            error_code=4010,
            context=ctx
        )
        self.stream = stream
        self.reason = reason


class FileIOError(FileSystemException):
    """Any other failed open, create, read, write or close."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        errno: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if errno is not None:
            ctx["errno"] = errno
        super().__init__(
            message=message,
            path=path,
            error_code=4011,
            context=ctx
        )
        self.errno = errno
