"""
LUMON Shell Module

Provides the command-line shell:
- Segment parsing
- Single commands and two-stage pipelines
- I/O redirection
- Built-in commands
"""

from .parser import CommandParser, CommandSegment
from .redirection import RedirectionRequest, open_redirection
from .runner import CommandRunner, ExecutionResult
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'CommandSegment',
    'RedirectionRequest',
    'open_redirection',
    'CommandRunner',
    'ExecutionResult',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
