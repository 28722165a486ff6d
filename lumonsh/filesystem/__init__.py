"""
LUMON Shell Filesystem Module

Path resolution against the command/content root.
"""

from .path_resolver import PathResolver, SEPARATOR

__all__ = [
    'PathResolver',
    'SEPARATOR',
]
