"""
cat - copy a file (or standard input) to standard output.

Usage: cat [file]
"""

import sys
from typing import List, Optional

from lumonsh.exceptions import FileSystemException, PathResolutionError
from lumonsh.filesystem import PathResolver
from lumonsh.process import StdStream
from lumonsh.syscalls import SyscallInterface


def main(argv: Optional[List[str]] = None, command_root: str = 'c') -> int:
    args = sys.argv[1:] if argv is None else argv
    syscalls = SyscallInterface()

    in_fd = StdStream.STDIN
    if args:
        try:
            in_fd = syscalls.open(PathResolver(command_root).resolve(args[0]))
        except PathResolutionError:
            syscalls.report("invalid path", program='cat')
            return 1
        except FileSystemException:
            syscalls.report("open failed", program='cat')
            return 1

    try:
        while True:
            chunk = syscalls.read(in_fd)
            if not chunk:
                break
            syscalls.write_all(StdStream.STDOUT, chunk)
    except FileSystemException:
        syscalls.report("write failed", program='cat')
        return 1
    finally:
        if in_fd != StdStream.STDIN:
            syscalls.close(in_fd)

    return 0


if __name__ == '__main__':
    sys.exit(main())
