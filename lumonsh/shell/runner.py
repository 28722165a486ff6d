"""
Command Runner Module

Runs one command segment, or two segments joined by a pipe, as child
processes with their standard streams rewired.

Descriptor ownership rules:
- Redirection targets and the pipe are opened by the shell before the
  child that needs them is created.
- A child duplicates what it needs onto its standard slots and closes
  the originals.
- The shell closes its copy of every descriptor once the child holding
  it exists, then waits.

Author: LUMON Shell Developers
Version: 1.0.0
"""

import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, NoReturn, Optional, Sequence

from .parser import CommandParser
from .redirection import RedirectionRequest, open_redirection
from lumonsh.core.config_loader import Config, get_config
from lumonsh.exceptions import (
    RECOVERABLE_ERRORS,
    UnsupportedRedirectionError,
    WaitError,
)
from lumonsh.filesystem import PathResolver
from lumonsh.ipc import Pipe
from lumonsh.logger import get_logger
from lumonsh.process import ChildProcess, ChildSide, ProcessManager, StdStream
from lumonsh.syscalls import SyscallInterface


EXIT_SUCCESS = 0
EXIT_SETUP_FAILED = 1
EXIT_EXEC_FAILED = 126
EXIT_PROGRAM_NOT_OPENED = 127


@dataclass
class ExecutionResult:
    """Outcome of running one command line."""
    status: int = EXIT_SUCCESS
    children: List[ChildProcess] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def spawned(self) -> bool:
        return bool(self.children)

    @property
    def exit_codes(self) -> List[Optional[int]]:
        return [child.exit_code for child in self.children]


def describe_error(error: Exception) -> str:
    """Operator-facing one-line description of an engine error."""
    message = getattr(error, 'message', str(error))
    path = getattr(error, 'path', None)
    reason = getattr(error, 'reason', None)
    if path:
        message = f"{message}: {path}"
    if reason:
        message = f"{message} ({reason})"
    return message


class CommandRunner:
    """
    Runs single commands and two-stage pipelines.

    Example:
        >>> runner = CommandRunner.from_config()
        >>> runner.run_single("wc < notes > count")
        >>> runner.run_pipeline("cat notes", "wc > count")
    """

    def __init__(
        self,
        parser: CommandParser,
        resolver: PathResolver,
        syscalls: SyscallInterface,
        processes: ProcessManager,
        program_fd: int = 6
    ):
        self._parser = parser
        self._resolver = resolver
        self._syscalls = syscalls
        self._processes = processes
        self._program_fd = program_fd
        self._logger = get_logger('runner')

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'CommandRunner':
        """Build a runner and its collaborators from configuration."""
        config = config or get_config()
        syscalls = SyscallInterface(file_mode=config.execution.file_mode)
        return cls(
            parser=CommandParser(max_args=config.parser.max_args),
            resolver=PathResolver(config.execution.command_root),
            syscalls=syscalls,
            processes=ProcessManager(syscalls),
            program_fd=config.execution.program_fd,
        )

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    @property
    def syscalls(self) -> SyscallInterface:
        return self._syscalls

    @property
    def processes(self) -> ProcessManager:
        return self._processes

    # Single command

    def run_single(self, segment_text: str) -> ExecutionResult:
        """
        Run one command with optional < and > redirections.

        Redirection targets are opened before the child is created, so a
        bad target never leaves a half-started child behind.
        """
        text = segment_text.strip()
        if not text:
            return ExecutionResult()

        segment = self._parser.parse_segment(text)
        if segment.is_empty:
            return ExecutionResult()

        opened: dict[StdStream, int] = {}
        try:
            segment = segment.with_program(self._resolver.resolve(segment.program))

            if segment.in_path is not None:
                request = RedirectionRequest.for_input(self._resolver, segment.in_path)
                opened[request.slot] = open_redirection(self._syscalls, request)

            if segment.out_path is not None:
                request = RedirectionRequest.for_output(self._resolver, segment.out_path)
                opened[request.slot] = open_redirection(self._syscalls, request)

            outcome = self._processes.spawn(segment.argv, remapped=opened.keys())
        except RECOVERABLE_ERRORS as e:
            self._close_all(opened.values())
            return self._fail(e)

        if isinstance(outcome, ChildSide):
            self._become_program(
                segment.argv,
                lambda: self._remap_all(opened)
            )

        self._close_all(opened.values())
        return self._collect([outcome.child])

    # Pipeline

    def run_pipeline(self, left_text: str, right_text: str) -> ExecutionResult:
        """
        Run ``left | right``.

        The left child writes into the pipe, the right child reads from
        it. Left may redirect its input; right may redirect its output.
        The result's status is the right child's exit code.
        """
        left_text = left_text.strip()
        right_text = right_text.strip()
        if not left_text or not right_text:
            return ExecutionResult()

        left = self._parser.parse_segment(left_text)
        right = self._parser.parse_segment(right_text)
        if left.is_empty or right.is_empty:
            return ExecutionResult()

        left_input: Optional[int] = None
        pipe: Optional[Pipe] = None
        left_child: Optional[ChildProcess] = None

        try:
            if left.out_path is not None:
                raise UnsupportedRedirectionError('left', 'output')
            if right.in_path is not None:
                raise UnsupportedRedirectionError('right', 'input')

            if left.in_path is not None:
                request = RedirectionRequest.for_input(self._resolver, left.in_path)
                left_input = open_redirection(self._syscalls, request)

            left = left.with_program(self._resolver.resolve(left.program))
            right = right.with_program(self._resolver.resolve(right.program))

            pipe = Pipe.create(self._syscalls)

            left_slots = {StdStream.STDOUT}
            if left_input is not None:
                left_slots.add(StdStream.STDIN)
            outcome = self._processes.spawn(left.argv, remapped=left_slots)
            if isinstance(outcome, ChildSide):
                self._become_program(
                    left.argv,
                    lambda: self._configure_left(pipe, left_input)
                )
            left_child = outcome.child

            # The left child owns the input file now.
            if left_input is not None:
                fd, left_input = left_input, None
                self._syscalls.close(fd)

            right_slots = {StdStream.STDIN}
            if right.out_path is not None:
                right_slots.add(StdStream.STDOUT)
            outcome = self._processes.spawn(right.argv, remapped=right_slots)
            if isinstance(outcome, ChildSide):
                self._become_program(
                    right.argv,
                    lambda: self._configure_right(pipe, right.out_path)
                )
            right_child = outcome.child
        except RECOVERABLE_ERRORS as e:
            if left_input is not None:
                self._syscalls.close(left_input)
            if pipe is not None:
                pipe.close()
            children = [left_child] if left_child is not None else []
            # A started left child still has to be reaped.
            self._wait_all(children)
            return self._fail(e, children)

        pipe.close()
        return self._collect([left_child, right_child])

    # Child side

    def _configure_left(self, pipe: Pipe, left_input: Optional[int]) -> None:
        if left_input is not None:
            self._remap(left_input, StdStream.STDIN)
        pipe.attach_write_end(StdStream.STDOUT)
        pipe.close()

    def _configure_right(self, pipe: Pipe, out_path: Optional[str]) -> None:
        pipe.attach_read_end(StdStream.STDIN)
        pipe.close()
        if out_path is not None:
            request = RedirectionRequest.for_output(self._resolver, out_path)
            self._remap(open_redirection(self._syscalls, request), request.slot)

    def _remap_all(self, opened: dict[StdStream, int]) -> None:
        for slot, fd in opened.items():
            self._remap(fd, slot)

    def _remap(self, fd: int, slot: StdStream) -> None:
        """Rebind a standard slot to fd and retire fd's own number."""
        if fd == slot:
            return
        self._syscalls.duplicate(fd, slot)
        self._syscalls.close(fd)

    def _become_program(
        self,
        argv: Sequence[str],
        configure: Callable[[], None]
    ) -> NoReturn:
        """
        Child side of a fork: set up streams, then exec argv[0].

        Never returns. Any failure is reported on descriptor 2 and the
        child exits on the spot.
        """
        code = EXIT_SETUP_FAILED
        try:
            self._syscalls.restore_signals()
            configure()
            code = EXIT_PROGRAM_NOT_OPENED
            program_fd = self._syscalls.open_program(argv[0], self._program_fd)
            code = EXIT_EXEC_FAILED
            self._syscalls.load_and_execute(program_fd, argv)
        except RECOVERABLE_ERRORS as e:
            self._syscalls.report(describe_error(e))
        finally:
            self._syscalls.exit_child(code)

    # Parent side

    def _close_all(self, fds: Iterable[int]) -> None:
        for fd in list(fds):
            self._syscalls.close(fd)

    def _wait_all(self, children: List[ChildProcess]) -> Optional[WaitError]:
        """Reap every child, returning the first wait failure if any."""
        first_error: Optional[WaitError] = None
        with self._processes.forwarding_interrupts():
            for child in children:
                try:
                    self._processes.wait(child)
                except WaitError as e:
                    first_error = first_error or e
        return first_error

    def _collect(self, children: List[ChildProcess]) -> ExecutionResult:
        error = self._wait_all(children)
        if error is not None:
            return self._fail(error, children)

        for child in children:
            if child.killed_by_signal:
                self._logger.warning(
                    f"{child.program} terminated by signal {-child.exit_code}",
                    pid=child.pid
                )

        status = children[-1].exit_code
        self._logger.info(
            "Command finished",
            context={
                'programs': ' | '.join(c.program for c in children),
                'exit_codes': [c.exit_code for c in children],
            }
        )
        return ExecutionResult(status=status, children=children)

    def _fail(
        self,
        error: Exception,
        children: Optional[List[ChildProcess]] = None
    ) -> ExecutionResult:
        """Report a failure scoped to the current command."""
        message = describe_error(error)
        print(f"lumonsh: {message}", file=sys.stderr)
        self._logger.error(
            message,
            context={'error_code': getattr(error, 'error_code', None)}
        )
        return ExecutionResult(
            status=EXIT_SETUP_FAILED,
            children=children or [],
            error=error
        )
