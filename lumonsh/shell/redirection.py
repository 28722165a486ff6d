"""
Redirection Module

Opening the file a segment's standard stream is redirected to.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from dataclasses import dataclass

from lumonsh.exceptions import FileSystemException, RedirectionError
from lumonsh.filesystem import PathResolver
from lumonsh.process import StdStream
from lumonsh.syscalls import OpenMode, SyscallInterface


@dataclass(frozen=True)
class RedirectionRequest:
    """A resolved path, how to open it, and the slot it will replace."""
    path: str
    mode: OpenMode
    slot: StdStream

    @classmethod
    def for_input(cls, resolver: PathResolver, token: str) -> 'RedirectionRequest':
        return cls(path=resolver.resolve(token), mode=OpenMode.READ, slot=StdStream.STDIN)

    @classmethod
    def for_output(cls, resolver: PathResolver, token: str) -> 'RedirectionRequest':
        return cls(path=resolver.resolve(token), mode=OpenMode.WRITE, slot=StdStream.STDOUT)

    @property
    def stream(self) -> str:
        return 'input' if self.slot == StdStream.STDIN else 'output'


def open_redirection(syscalls: SyscallInterface, request: RedirectionRequest) -> int:
    """
    Open a redirection target on a scratch descriptor.

    Output targets are created (or truncated) first, then opened for
    writing.

    Raises:
        RedirectionError: If the target cannot be created or opened
    """
    try:
        if request.mode is OpenMode.WRITE:
            syscalls.create_file(request.path)
        return syscalls.open(request.path, request.mode)
    except FileSystemException as e:
        raise RedirectionError(request.path, request.stream, reason=e.message) from e
