"""
touch - create files that do not exist yet.

Usage: touch file...

Existing files keep their contents.
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
        syscalls.report("missing operand", program='touch')
        return 1

    status = 0
    for name in args:
        try:
            syscalls.create_file(resolver.resolve(name), truncate=False)
        except PathResolutionError:
            syscalls.report("path invalid", program='touch')
            status = 1
        except FileSystemException:
            syscalls.report(f"create not possible {name}", program='touch')
            status = 1

    return status


if __name__ == '__main__':
    sys.exit(main())
