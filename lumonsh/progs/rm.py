"""
rm - remove files.

Usage: rm file...
"""

import sys
from typing import List, Optional

from lumonsh.exceptions import FileSystemException, PathResolutionError
from lumonsh.filesystem import PathResolver
from lumonsh.syscalls import SyscallInterface


def main(argv: Optional[List[str]] = None, command_root: str = 'c') -> int:
    args = sys.argv[1:] if argv is None else argv
    syscalls = SyscallInterface()
    resolver = PathResolver(command_root)

    if not args:
        syscalls.report("missing file operand", program='rm')
        return 1

    status = 0
    for name in args:
        try:
            syscalls.delete_file(resolver.resolve(name))
        except PathResolutionError:
            syscalls.report("invalid path", program='rm')
            status = 1
        except FileSystemException:
            syscalls.report(f"cannot remove {name}", program='rm')
            status = 1

    return status


if __name__ == '__main__':
    sys.exit(main())
