"""
LUMON Shell Process Module

Child process creation, bookkeeping and reaping.
"""

from .states import ProcessState, StdStream
from .child import ChildProcess, ParentSide, ChildSide, ForkOutcome
from .process_manager import ProcessManager

__all__ = [
    'ProcessState',
    'StdStream',
    'ChildProcess',
    'ParentSide',
    'ChildSide',
    'ForkOutcome',
    'ProcessManager',
]
