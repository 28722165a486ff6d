"""
Child Process Module

Parent-side record of a process created to run one command segment,
and the two-armed outcome of process creation.

Author: LUMON Shell Developers
Version: 1.0.0
"""

import time
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Optional, Tuple, Union

from .states import ProcessState, StdStream


@dataclass
class ChildProcess:
    """
    A child created to run one command segment.

    The shell owns the record from fork until the child is reaped.
    """
    pid: int
    argv: Tuple[str, ...]
    remapped: FrozenSet[StdStream] = frozenset()
    state: ProcessState = ProcessState.RUNNING
    exit_code: Optional[int] = None
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def program(self) -> str:
        return self.argv[0] if self.argv else ''

    @property
    def is_reaped(self) -> bool:
        return self.state == ProcessState.REAPED

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def killed_by_signal(self) -> bool:
        return self.exit_code is not None and self.exit_code < 0

    def mark_reaped(self, exit_code: int) -> None:
        self.exit_code = exit_code
        self.state = ProcessState.REAPED
        self.end_time = time.time()

    def to_dict(self) -> dict[str, Any]:
        return {
            'pid': self.pid,
            'program': self.program,
            'argv': list(self.argv),
            'remapped': sorted(s.name for s in self.remapped),
            'state': self.state.name,
            'exit_code': self.exit_code,
        }


@dataclass(frozen=True)
class ParentSide:
    """Process creation returned in the shell; holds the new child."""
    child: ChildProcess


@dataclass(frozen=True)
class ChildSide:
    """Process creation returned in the new child."""


ForkOutcome = Union[ParentSide, ChildSide]
