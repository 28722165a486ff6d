"""
Shell Exceptions

Exceptions related to shell configuration and command-line handling.
These cover configuration loading and command shapes the engine refuses
to run.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """
    Base exception for all shell-level errors.

    Attributes:
        message: Human-readable error description
        error_code: Numeric error code for programmatic handling
        recoverable: Whether the shell can keep running after the error
        context: Additional context about the error

    Example:
        >>> raise ShellException("Bad command line", error_code=1000)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        recoverable: bool = True,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 1000
        self.recoverable = recoverable
        self.context = context or {}

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code}, "
            f"recoverable={self.recoverable})"
        )


class ConfigLoadError(ShellException):
    """
    The configuration file could not be read or parsed.

    Common causes:
    - File does not exist
    - Invalid JSON
    - Unreadable file

    Example:
        >>> raise ConfigLoadError("Configuration file not found", path="x.json")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(
            message=message,
            error_code=1001,
            recoverable=False,
            context=ctx
        )
        self.path = path


class ConfigValidationError(ShellException):
    """Raised when a configuration key or value is invalid."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        super().__init__(
            message=message,
            error_code=1002,
            recoverable=False,
            context=ctx
        )
        self.key = key


class UnsupportedRedirectionError(ShellException):
    """
    A pipeline segment asked for a redirection the pipe already owns.

    The left segment of a pipeline cannot redirect its output and the
    right segment cannot redirect its input.

    Example:
        >>> raise UnsupportedRedirectionError("left", "output")
    """

    def __init__(
        self,
        side: str,
        stream: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["side"] = side
        ctx["stream"] = stream
        super().__init__(
            message=f"{stream} redirection on the {side} side of a pipe is not supported",
            error_code=1003,
            context=ctx
        )
        self.side = side
        self.stream = stream
