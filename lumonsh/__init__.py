"""
LUMON Shell - a small POSIX command shell

This package provides a line-oriented shell that runs single commands and
two-stage pipelines as real child processes, with < and > redirection.
"""

__version__ = "1.0.0"
__author__ = "LUMON Shell Developers"

from .shell.runner import CommandRunner, ExecutionResult
from .shell.shell import Shell, create_shell

__all__ = [
    'CommandRunner',
    'ExecutionResult',
    'Shell',
    'create_shell',
]
