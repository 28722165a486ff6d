#!/usr/bin/env python3
"""
LUMON Shell

This is the main entry point for the shell.

Usage:
    lumonsh                          interactive prompt
    lumonsh -c LINE                  run one line and exit with its status
    lumonsh --install-commands [DIR] write the utility programs into DIR
    lumonsh --config PATH ...        load settings from PATH first

Author: LUMON Shell Developers
Version: 1.0.0
"""

import os
import sys
from typing import List, Optional

# Ensure the package directory is importable when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lumonsh.core.config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from lumonsh.exceptions import ShellException
from lumonsh.logger import Logger, LogLevel
from lumonsh.progs import install_commands
from lumonsh.shell.shell import Shell


USAGE = "usage: lumonsh [--config PATH] [-c LINE | --install-commands [DIR]]"


def _take_option(args: List[str], flag: str) -> Optional[str]:
    """Remove flag and its value from args, returning the value."""
    if flag not in args:
        return None
    index = args.index(flag)
    if index + 1 >= len(args):
        raise ValueError(f"{flag} needs a value")
    value = args[index + 1]
    del args[index:index + 2]
    return value


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the shell.

    Startup sequence:
    1. Load configuration
    2. Initialize logging
    3. Install programs, run one line, or start the prompt
    """
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config_path = _take_option(args, '--config') or DEFAULT_CONFIG_PATH
        line = _take_option(args, '-c')
    except ValueError as e:
        print(f"lumonsh: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2

    try:
        config = ConfigLoader().load(config_path)
    except ShellException as e:
        print(f"lumonsh: {e.message}", file=sys.stderr)
        return 1

    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
    )

    if args and args[0] == '--install-commands':
        root = args[1] if len(args) > 1 else config.execution.command_root
        for path in install_commands(root):
            print(path)
        return 0

    if args:
        print(USAGE, file=sys.stderr)
        return 2

    shell = Shell(config=config)

    if line is not None:
        return shell.execute_line(line)

    try:
        return shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
