"""
LUMON Shell Syscalls Module

Kernel primitives wrapped for the execution engine.
"""

from .syscall_table import SyscallNumber, SYSCALL_NAMES
from .interface import SyscallInterface, OpenMode

__all__ = [
    'SyscallNumber',
    'SYSCALL_NAMES',
    'SyscallInterface',
    'OpenMode',
]
