"""
wc - count lines, words and bytes.

Usage: wc [file]

Prints ``lines<TAB>words<TAB>bytes``.
"""

import sys
from typing import List, Optional, Tuple

from lumonsh.exceptions import FileSystemException
from lumonsh.filesystem import PathResolver
from lumonsh.process import StdStream
from lumonsh.syscalls import SyscallInterface


_SPACE = b' \t\n'


def count(data: bytes) -> Tuple[int, int, int]:
    """Return (lines, words, bytes) for data."""
    lines = data.count(b'\n')
    words = 0
    in_word = False
    for byte in data:
        if byte in _SPACE:
            if in_word:
                words += 1
                in_word = False
        else:
            in_word = True
    if in_word:
        words += 1
    return lines, words, len(data)


def main(argv: Optional[List[str]] = None, command_root: str = 'c') -> int:
    args = sys.argv[1:] if argv is None else argv
    syscalls = SyscallInterface()

    fd = StdStream.STDIN
    if args:
        try:
            fd = syscalls.open(PathResolver(command_root).resolve(args[0]))
        except FileSystemException:
            syscalls.report("cannot open", program='wc')
            return 1

    try:
        data = syscalls.read_all(fd)
    except FileSystemException:
        syscalls.report("read failed", program='wc')
        return 1
    finally:
        if fd != StdStream.STDIN:
            syscalls.close(fd)

    lines, words, size = count(data)
    try:
        syscalls.write_all(StdStream.STDOUT, f"{lines}\t{words}\t{size}\n".encode())
    except FileSystemException:
        syscalls.report("write failed", program='wc')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
