"""
LUMON Shell Core Module

Configuration for the shell and its execution engine.
"""

from .config_loader import (
    ConfigLoader,
    Config,
    ShellConfig,
    ParserConfig,
    ExecConfig,
    LoggingConfig,
    DEFAULT_CONFIG_PATH,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'ShellConfig',
    'ParserConfig',
    'ExecConfig',
    'LoggingConfig',
    'DEFAULT_CONFIG_PATH',
    'get_config',
]
