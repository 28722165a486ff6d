"""
xargs - run a command with extra arguments read from standard input.

Usage: xargs command [args...]

Reads at most 1023 bytes, splits them on whitespace and appends the
words to the command line (31 entries at most), then replaces itself
with the command.
"""

import sys
from typing import List, Optional

from lumonsh.exceptions import ExecError, FileSystemException
from lumonsh.filesystem import PathResolver
from lumonsh.process import StdStream
from lumonsh.syscalls import SyscallInterface


INPUT_LIMIT = 1023
MAX_ARGV = 31
PROGRAM_FD = 3


def build_argv(args: List[str], data: bytes) -> List[str]:
    """Command words followed by input words, capped at MAX_ARGV."""
    argv = list(args[:MAX_ARGV])
    for word in data.decode('utf-8', errors='replace').split():
        if len(argv) >= MAX_ARGV:
            break
        argv.append(word)
    return argv


def main(argv: Optional[List[str]] = None, command_root: str = 'c') -> int:
    args = sys.argv[1:] if argv is None else argv
    syscalls = SyscallInterface()

    if not args:
        syscalls.report("missing command", program='xargs')
        return 1

    try:
        data = syscalls.read_all(StdStream.STDIN, limit=INPUT_LIMIT)
        command = build_argv(args, data)
        command[0] = PathResolver(command_root).resolve(command[0])
        program_fd = syscalls.open_program(command[0], PROGRAM_FD)
    except (FileSystemException, ExecError):
        syscalls.report("cannot open", program='xargs')
        return 1

    try:
        syscalls.load_and_execute(program_fd, command)
    except ExecError as e:
        syscalls.report(e.message, program='xargs')
    return 1


if __name__ == '__main__':
    sys.exit(main())
