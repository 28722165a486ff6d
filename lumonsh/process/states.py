"""
Process States Module

Lifecycle states and standard stream slots for child processes.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from enum import Enum, IntEnum, auto


class ProcessState(Enum):
    """
    Child process lifecycle as seen from the shell.

    State transitions:
        RUNNING -> REAPED: the shell collected the exit status
    """

    RUNNING = auto()
    """Created by fork; configuring itself or running the program."""

    REAPED = auto()
    """Terminated and collected by the shell."""


class StdStream(IntEnum):
    """Standard stream descriptor slots."""
    STDIN = 0
    STDOUT = 1
    STDERR = 2
