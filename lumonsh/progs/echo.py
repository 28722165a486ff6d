"""
echo - print the arguments separated by spaces.

Usage: echo [words...]
"""

import sys
from typing import List, Optional

from lumonsh.exceptions import FileSystemException
from lumonsh.process import StdStream
from lumonsh.syscalls import SyscallInterface


def main(argv: Optional[List[str]] = None, command_root: str = 'c') -> int:
    args = sys.argv[1:] if argv is None else argv
    syscalls = SyscallInterface()
    line = ' '.join(args) + '\n'
    try:
        syscalls.write_all(StdStream.STDOUT, line.encode('utf-8'))
    except FileSystemException:
        syscalls.report("write failed", program='echo')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
