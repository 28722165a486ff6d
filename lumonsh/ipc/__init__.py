"""
LUMON Shell IPC Module

The pipe joining the two halves of a pipeline.
"""

from .pipe import Pipe

__all__ = [
    'Pipe',
]
