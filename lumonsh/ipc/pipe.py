"""
Pipe Module

The endpoint pair joining the two children of a pipeline.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional

from lumonsh.exceptions import PipeError
from lumonsh.logger import get_logger
from lumonsh.syscalls import SyscallInterface


@dataclass
class Pipe:
    """
    One write endpoint and one read endpoint from a single pipe call.

    Each process holding a copy of the pair must close the ends it does
    not use, or the reader never sees end-of-stream. Closing is
    idempotent per process: an end already retired is skipped.
    """
    write_fd: Optional[int]
    read_fd: Optional[int]
    syscalls: SyscallInterface = field(default=None, repr=False)

    @classmethod
    def create(cls, syscalls: SyscallInterface) -> 'Pipe':
        """Allocate a pipe through the kernel interface."""
        write_fd, read_fd = syscalls.create_pipe()
        get_logger('ipc').debug(
            "Pipe created",
            context={'write_fd': write_fd, 'read_fd': read_fd}
        )
        return cls(write_fd=write_fd, read_fd=read_fd, syscalls=syscalls)

    @property
    def is_open(self) -> bool:
        return self.write_fd is not None or self.read_fd is not None

    def _require(self, fd: Optional[int], end: str) -> int:
        if fd is None:
            raise PipeError(f"pipe {end} end already closed")
        return fd

    def attach_write_end(self, slot: int) -> None:
        """Duplicate the write end onto slot (child side)."""
        self.syscalls.duplicate(self._require(self.write_fd, 'write'), slot)

    def attach_read_end(self, slot: int) -> None:
        """Duplicate the read end onto slot (child side)."""
        self.syscalls.duplicate(self._require(self.read_fd, 'read'), slot)

    def close_write(self) -> None:
        if self.write_fd is not None:
            fd, self.write_fd = self.write_fd, None
            self.syscalls.close(fd)

    def close_read(self) -> None:
        if self.read_fd is not None:
            fd, self.read_fd = self.read_fd, None
            self.syscalls.close(fd)

    def close(self) -> None:
        """Close both raw endpoints."""
        try:
            self.close_write()
        finally:
            self.close_read()
