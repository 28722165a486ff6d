"""
Process Manager Module

Creates and reaps the shell's child processes.

Author: LUMON Shell Developers
Version: 1.0.0
"""

import signal
import threading
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Sequence

from .child import ChildProcess, ChildSide, ForkOutcome, ParentSide
from .states import StdStream
from lumonsh.exceptions import WaitError
from lumonsh.logger import get_logger
from lumonsh.syscalls import SyscallInterface


class ProcessManager:
    """
    Tracks the children of the shell.

    spawn() wraps fork into a ParentSide/ChildSide outcome so the
    caller branches on a value, not on a magic pid. wait() blocks until
    the child exits and records its status.

    Example:
        >>> pm = ProcessManager(SyscallInterface())
        >>> outcome = pm.spawn(['c/echo', 'hi'])
        >>> if isinstance(outcome, ChildSide):
        ...     ...  # configure streams, exec
        >>> pm.wait(outcome.child)
    """

    def __init__(self, syscalls: SyscallInterface):
        self._syscalls = syscalls
        self._children: dict[int, ChildProcess] = {}
        self._spawned = 0
        self._logger = get_logger('process')

    @property
    def spawned_count(self) -> int:
        """Number of children created over the manager's lifetime."""
        return self._spawned

    @property
    def live_count(self) -> int:
        """Number of children created but not yet reaped."""
        return len(self._children)

    def spawn(
        self,
        argv: Sequence[str],
        remapped: Iterable[StdStream] = ()
    ) -> ForkOutcome:
        """
        Create one child process.

        Args:
            argv: Argument vector the child will execute
            remapped: Standard streams the child will rebind

        Returns:
            ParentSide(child) in the shell, ChildSide() in the child

        Raises:
            ForkError: If the process cannot be created
        """
        pid = self._syscalls.create_process()

        if pid == 0:
            return ChildSide()

        child = ChildProcess(
            pid=pid,
            argv=tuple(argv),
            remapped=frozenset(remapped),
        )
        self._children[pid] = child
        self._spawned += 1

        self._logger.debug(
            "Spawned child",
            pid=pid,
            context={'argv': ' '.join(argv)}
        )
        return ParentSide(child)

    def wait(self, child: ChildProcess) -> int:
        """
        Block until the child terminates.

        Returns:
            The child's exit code

        Raises:
            WaitError: If the child is not ours or was already reaped
        """
        if child.pid not in self._children:
            raise WaitError("child is not running under this shell", pid=child.pid)

        try:
            exit_code = self._syscalls.await_child(child.pid)
        finally:
            self._children.pop(child.pid, None)

        child.mark_reaped(exit_code)

        self._logger.debug(
            "Reaped child",
            pid=child.pid,
            context={'exit_code': exit_code}
        )
        return exit_code

    def list_processes(self) -> List[dict[str, Any]]:
        """Describe every child not yet reaped."""
        return [child.to_dict() for child in self._children.values()]

    @contextmanager
    def forwarding_interrupts(self) -> Iterator[None]:
        """
        Hand SIGINT to the live children instead of the shell.

        While the block runs, Ctrl-C interrupts the programs being waited
        on and the wait simply resumes. Outside the main thread signal
        handlers cannot be installed, so the block runs unchanged.
        """
        if threading.current_thread() is not threading.main_thread():
            yield
            return

        def forward(signum, frame):
            for pid in list(self._children):
                self._syscalls.signal_child(pid, signum)

        previous = signal.signal(signal.SIGINT, forward)
        try:
            yield
        finally:
            signal.signal(signal.SIGINT, previous)
