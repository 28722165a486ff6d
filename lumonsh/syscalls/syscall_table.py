"""
Syscall Table Module

Names of the kernel primitives the shell engine relies on.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from enum import IntEnum


class SyscallNumber(IntEnum):
    """Kernel primitives used by the engine and the utility programs."""
    EXIT = 1
    FORK = 2
    READ = 3
    WRITE = 4
    OPEN = 5
    CLOSE = 6
    WAITPID = 7
    CREAT = 8
    UNLINK = 10
    EXECVE = 11
    KILL = 37
    DUP = 41
    PIPE = 42
    SIGNAL = 48


SYSCALL_NAMES = {
    SyscallNumber.EXIT: "exit",
    SyscallNumber.FORK: "fork",
    SyscallNumber.READ: "read",
    SyscallNumber.WRITE: "write",
    SyscallNumber.OPEN: "open",
    SyscallNumber.CLOSE: "close",
    SyscallNumber.WAITPID: "waitpid",
    SyscallNumber.CREAT: "creat",
    SyscallNumber.UNLINK: "unlink",
    SyscallNumber.EXECVE: "execve",
    SyscallNumber.DUP: "dup",
    SyscallNumber.PIPE: "pipe",
    SyscallNumber.KILL: "kill",
    SyscallNumber.SIGNAL: "signal",
}
