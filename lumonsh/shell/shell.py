"""
LUMON Shell Module

The interactive command-line dispatcher.

Author: LUMON Shell Developers
Version: 1.0.0
"""

import sys
from typing import Optional

from .builtins import BuiltinCommands
from .runner import CommandRunner, ExecutionResult
from lumonsh.core.config_loader import Config, get_config
from lumonsh.logger import get_logger


class Shell:
    """
    LUMON interactive shell.

    Reads one line at a time and hands it to the runner:
    - empty lines are ignored
    - the exit keyword leaves the loop
    - a line with a pipe operator runs as a two-stage pipeline
    - anything else runs as a single command

    Every failure is scoped to the line that caused it.

    Example:
        >>> shell = Shell()
        >>> shell.run()
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        config: Optional[Config] = None
    ):
        self._config = config or get_config()
        self._runner = runner or CommandRunner.from_config(self._config)
        self._builtins = BuiltinCommands(self, self._config.shell.exit_command)
        self._logger = get_logger('shell')
        self._running = False
        self._exiting = False
        self._last_status = 0
        self._last_result: Optional[ExecutionResult] = None

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    @property
    def command_root(self) -> str:
        return self._runner.resolver.command_root

    @property
    def max_args(self) -> int:
        return self._runner.parser.max_args

    @property
    def last_status(self) -> int:
        return self._last_status

    @property
    def last_result(self) -> Optional[ExecutionResult]:
        return self._last_result

    @property
    def exiting(self) -> bool:
        return self._exiting

    def run(self) -> int:
        """
        Run the interactive shell.

        This is the main REPL loop.

        Returns:
            Status of the last command
        """
        self._running = True

        print(self._config.shell.banner)

        while self._running and not self._exiting:
            try:
                try:
                    line = input(self._config.shell.prompt)
                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print("^C")
                    continue

                self.execute_line(line)

            except KeyboardInterrupt:
                print("^C", file=sys.stderr)
            except Exception as e:
                self._logger.error(f"Shell error: {e}")
                print(f"lumonsh: error: {e}", file=sys.stderr)

        self._running = False
        return self._last_status

    def execute_line(self, line: str) -> int:
        """
        Execute a command line.

        Args:
            line: Raw line as read from the console

        Returns:
            Exit code
        """
        line = line[:self._config.shell.max_line_length]
        command = line.rstrip().lstrip()

        if not command:
            return 0

        if self._builtins.is_builtin(command):
            self._last_status = self._builtins.execute(command)
            self._last_result = None
            return self._last_status

        left, right = self._runner.parser.split_pipeline(command)

        if right is None:
            result = self._runner.run_single(left)
        else:
            result = self._runner.run_pipeline(left, right)

        self._last_result = result
        self._last_status = result.status
        return self._last_status

    def run_script(self, script: str) -> int:
        """
        Run several lines, one after another.

        Stops early at the exit keyword.

        Returns:
            Last exit code
        """
        for line in script.split('\n'):
            if self._exiting:
                break
            self.execute_line(line)

        return self._last_status

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True


def create_shell(config: Optional[Config] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(config=config)
