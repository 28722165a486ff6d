"""
Syscall Interface Module

Thin wrapper over the operating system primitives the engine needs.

Every primitive:
- is counted per call (see get_stats)
- is traced at DEBUG level
- turns OSError into the shell's exception hierarchy

Author: LUMON Shell Developers
Version: 1.0.0
"""

import errno
import os
import signal
import sys
from enum import Enum
from typing import List, NoReturn, Optional, Sequence, Tuple

from .syscall_table import SyscallNumber, SYSCALL_NAMES
from lumonsh.exceptions import (
    ExecError,
    FileIOError,
    FileNotFoundError,
    ForkError,
    PermissionDeniedError,
    PipeError,
    WaitError,
)
from lumonsh.logger import get_logger


class OpenMode(Enum):
    """File open modes."""
    READ = 'r'
    WRITE = 'w'

    @property
    def flags(self) -> int:
        if self is OpenMode.READ:
            return os.O_RDONLY
        return os.O_WRONLY | os.O_TRUNC


class SyscallInterface:
    """
    Kernel primitives used by the runners and the utility programs.

    Contracts:
        open            -> descriptor, or FileSystemException
        create_file     -> None, create-or-truncate
        create_pipe     -> (write_fd, read_fd), or PipeError
        create_process  -> 0 in the child, child pid in the parent, or ForkError
        load_and_execute-> never returns on success, ExecError otherwise
        await_child     -> exit code (negative signal number if killed)

    Example:
        >>> sys_ = SyscallInterface()
        >>> write_fd, read_fd = sys_.create_pipe()
    """

    CHUNK_SIZE = 4096

    def __init__(self, file_mode: int = 0o644):
        self._file_mode = file_mode
        self._counts: dict[SyscallNumber, int] = {}
        self._logger = get_logger('syscalls')

    def _trace(self, number: SyscallNumber, **context) -> None:
        self._counts[number] = self._counts.get(number, 0) + 1
        self._logger.debug(
            f"Syscall: {SYSCALL_NAMES[number]}",
            pid=os.getpid(),
            context=context
        )

    @staticmethod
    def _fs_error(exc: OSError, path: str, operation: str):
        if exc.errno == errno.ENOENT:
            return FileNotFoundError(path)
        if exc.errno in (errno.EACCES, errno.EPERM):
            return PermissionDeniedError(path, operation=operation)
        return FileIOError(
            f"{operation} failed: {exc.strerror}",
            path=path,
            errno=exc.errno
        )

    # Files

    def open(self, path: str, mode: OpenMode = OpenMode.READ) -> int:
        """Open an existing file and return its descriptor."""
        self._trace(SyscallNumber.OPEN, path=path, mode=mode.value)
        try:
            return os.open(path, mode.flags)
        except OSError as e:
            raise self._fs_error(e, path, 'open') from e

    def create_file(self, path: str, truncate: bool = True) -> None:
        """Create a file, truncating it if it exists and truncate is set."""
        self._trace(SyscallNumber.CREAT, path=path, truncate=truncate)
        flags = os.O_WRONLY | os.O_CREAT
        if truncate:
            flags |= os.O_TRUNC
        try:
            fd = os.open(path, flags, self._file_mode)
        except OSError as e:
            raise self._fs_error(e, path, 'create') from e
        os.close(fd)

    def delete_file(self, path: str) -> None:
        """Remove a file."""
        self._trace(SyscallNumber.UNLINK, path=path)
        try:
            os.unlink(path)
        except OSError as e:
            raise self._fs_error(e, path, 'delete') from e

    def read(self, fd: int, size: int = CHUNK_SIZE) -> bytes:
        """Read at most size bytes; b'' means end of stream."""
        self._trace(SyscallNumber.READ, fd=fd, size=size)
        try:
            return os.read(fd, size)
        except OSError as e:
            raise FileIOError(f"read failed: {e.strerror}", errno=e.errno) from e

    def read_all(self, fd: int, limit: Optional[int] = None) -> bytes:
        """Read until end of stream, or until limit bytes have arrived."""
        chunks: List[bytes] = []
        total = 0
        while limit is None or total < limit:
            size = self.CHUNK_SIZE if limit is None else min(self.CHUNK_SIZE, limit - total)
            data = self.read(fd, size)
            if not data:
                break
            chunks.append(data)
            total += len(data)
        return b''.join(chunks)

    def write_all(self, fd: int, data: bytes) -> int:
        """Write every byte of data, returning the number written."""
        view = memoryview(data)
        written = 0
        while written < len(view):
            self._trace(SyscallNumber.WRITE, fd=fd, size=len(view) - written)
            try:
                n = os.write(fd, view[written:])
            except OSError as e:
                raise FileIOError(f"write failed: {e.strerror}", errno=e.errno) from e
            if n <= 0:
                raise FileIOError("write failed: no progress")
            written += n
        return written

    # Descriptors

    def duplicate(self, src: int, slot: int) -> None:
        """Make slot refer to src's open file; slot's old file is retired."""
        self._trace(SyscallNumber.DUP, src=src, slot=slot)
        try:
            os.dup2(src, slot)
        except OSError as e:
            raise FileIOError(f"dup failed: {e.strerror}", errno=e.errno) from e

    def close(self, fd: int) -> None:
        """Close a descriptor."""
        self._trace(SyscallNumber.CLOSE, fd=fd)
        try:
            os.close(fd)
        except OSError as e:
            raise FileIOError(f"close failed: {e.strerror}", errno=e.errno) from e

    def create_pipe(self) -> Tuple[int, int]:
        """Create a pipe and return (write_fd, read_fd)."""
        self._trace(SyscallNumber.PIPE)
        try:
            read_fd, write_fd = os.pipe()
        except OSError as e:
            raise PipeError(f"pipe failed: {e.strerror}", errno=e.errno) from e
        return write_fd, read_fd

    # Processes

    def create_process(self) -> int:
        """
        Fork the current process.

        Returns:
            0 in the child, the child's pid in the parent

        Raises:
            ForkError: If the kernel refuses to create the process
        """
        self._trace(SyscallNumber.FORK)
        # Unflushed Python buffers would otherwise be written twice.
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            return os.fork()
        except OSError as e:
            raise ForkError(f"fork failed: {e.strerror}", parent_pid=os.getpid()) from e

    def open_program(self, path: str, slot: int) -> int:
        """
        Open a program image on a fixed descriptor slot.

        The slot stays open across exec so interpreters of script
        programs can read it.
        """
        self._trace(SyscallNumber.OPEN, path=path, slot=slot)
        try:
            fd = os.open(path, os.O_RDONLY)
        except OSError as e:
            raise ExecError(
                f"failed to open program: {e.strerror}",
                pid=os.getpid(),
                path=path
            ) from e
        if fd != slot:
            os.dup2(fd, slot)
            os.close(fd)
        else:
            os.set_inheritable(slot, True)
        return slot

    def load_and_execute(self, program_fd: int, argv: Sequence[str]) -> NoReturn:
        """
        Replace the current process image.

        argv[0] holds the resolved program path. Where the platform cannot
        execute a descriptor, that path is executed instead.
        """
        self._trace(SyscallNumber.EXECVE, fd=program_fd, argv=' '.join(argv))
        try:
            if os.execve in os.supports_fd:
                os.execve(program_fd, list(argv), os.environ)
            else:
                os.execv(argv[0], list(argv))
        except OSError as e:
            raise ExecError(
                f"exec of program failed: {e.strerror}",
                pid=os.getpid(),
                path=argv[0]
            ) from e

    def await_child(self, pid: int) -> int:
        """Block until the child exits and return its exit code."""
        self._trace(SyscallNumber.WAITPID, child=pid)
        try:
            _, status = os.waitpid(pid, 0)
        except ChildProcessError as e:
            raise WaitError(f"no such child: {e.strerror}", pid=pid) from e
        return os.waitstatus_to_exitcode(status)

    def restore_signals(self) -> None:
        """
        Put SIGPIPE and SIGXFSZ back to their default action.

        The interpreter ignores both at startup and an ignored signal
        survives exec, so a child must reset them before loading a program.
        """
        for name in ('SIGPIPE', 'SIGXFSZ'):
            if hasattr(signal, name):
                self._trace(SyscallNumber.SIGNAL, signal=name)
                signal.signal(getattr(signal, name), signal.SIG_DFL)

    def signal_child(self, pid: int, signum: int) -> None:
        """Send signum to a child that has not been reaped yet."""
        self._trace(SyscallNumber.KILL, child=pid, signal=signum)
        try:
            os.kill(pid, signum)
        except ProcessLookupError:
            self._logger.debug("Signal target already gone", pid=pid)

    def exit_child(self, code: int) -> NoReturn:
        """Terminate a child without running any parent-side cleanup."""
        self._trace(SyscallNumber.EXIT, code=code)
        os._exit(code)

    def report(self, message: str, program: str = 'lumonsh') -> None:
        """Write a diagnostic straight to descriptor 2."""
        self.write_all(2, f"{program}: {message}\n".encode('utf-8', errors='replace'))

    # Accounting

    def count(self, number: SyscallNumber) -> int:
        return self._counts.get(number, 0)

    def get_stats(self) -> dict[str, int]:
        """Per-primitive call counts, keyed by name."""
        return {SYSCALL_NAMES[n]: c for n, c in sorted(self._counts.items())}

    def reset_stats(self) -> None:
        self._counts.clear()
