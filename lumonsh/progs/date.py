"""
date - print the current UTC date and time.

Usage: date

Output looks like ``19 Oct 2026 14:05:09``.
"""

import sys
import time
from typing import List, Optional

from lumonsh.process import StdStream
from lumonsh.syscalls import SyscallInterface


MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def format_date(seconds: float) -> str:
    t = time.gmtime(seconds)
    return (
        f"{t.tm_mday} {MONTHS[t.tm_mon - 1]} {t.tm_year} "
        f"{t.tm_hour:02d}:{t.tm_min:02d}:{t.tm_sec:02d}"
    )


def main(argv: Optional[List[str]] = None, command_root: str = 'c') -> int:
    line = format_date(time.time()) + '\n'
    SyscallInterface().write_all(StdStream.STDOUT, line.encode())
    return 0


if __name__ == '__main__':
    sys.exit(main())
