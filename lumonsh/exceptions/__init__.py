"""
LUMON Shell Exception Hierarchy

Each subsystem owns one exception family, every member carrying a
numeric error code and a context dict.

Architecture:
    ShellException
    ├── ConfigLoadError
    ├── ConfigValidationError
    └── UnsupportedRedirectionError
    ProcessException
    ├── ForkError
    ├── ExecError
    └── WaitError
    FileSystemException
    ├── FileNotFoundError
    ├── PermissionDeniedError
    ├── PathResolutionError
    ├── RedirectionError
    └── FileIOError
    IPCException
    └── PipeError
"""

from .shell_exceptions import (
    ShellException,
    ConfigLoadError,
    ConfigValidationError,
    UnsupportedRedirectionError,
)

from .process_exceptions import (
    ProcessException,
    ForkError,
    ExecError,
    WaitError,
)

from .fs_exceptions import (
    FileSystemException,
    FileNotFoundError,
    PermissionDeniedError,
    PathResolutionError,
    RedirectionError,
    FileIOError,
)

from .ipc_exceptions import (
    IPCException,
    PipeError,
)

# Failures scoped to a single command line; the prompt loop survives them.
RECOVERABLE_ERRORS = (
    ShellException,
    ProcessException,
    FileSystemException,
    IPCException,
)

__all__ = [
    # Shell exceptions
    "ShellException",
    "ConfigLoadError",
    "ConfigValidationError",
    "UnsupportedRedirectionError",
    # Process exceptions
    "ProcessException",
    "ForkError",
    "ExecError",
    "WaitError",
    # Filesystem exceptions
    "FileSystemException",
    "FileNotFoundError",
    "PermissionDeniedError",
    "PathResolutionError",
    "RedirectionError",
    "FileIOError",
    # IPC exceptions
    "IPCException",
    "PipeError",
    "RECOVERABLE_ERRORS",
]
