"""
Shell Built-in Commands

Commands the shell handles itself instead of creating a process.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from typing import Callable, List


class BuiltinCommands:
    """
    Built-in shell commands.

    Only whole lines are matched: ``exit`` ends the shell, ``help``
    prints the line grammar. Anything else is a program.
    """

    def __init__(self, shell, exit_command: str = 'exit'):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
            exit_command: Keyword that terminates the shell
        """
        self._shell = shell
        self._exit_command = exit_command
        self._commands: dict[str, Callable[[List[str]], int]] = {
            exit_command: self.cmd_exit,
            'help': self.cmd_help,
        }

    def is_builtin(self, line: str) -> bool:
        """Check if a trimmed line is a built-in command."""
        return line in self._commands

    def execute(self, line: str) -> int:
        """
        Execute a built-in command.

        Returns:
            Exit code
        """
        return self._commands[line]([])

    def cmd_exit(self, args: List[str]) -> int:
        """Exit the shell."""
        self._shell.request_exit()
        return 0

    def cmd_help(self, args: List[str]) -> int:
        """Display the command grammar."""
        print(f"""
LUMON Shell

  program [args...] [< input] [> output]
  left [args...] [< input] | right [args...] [> output]

Bare names and /names are looked up under '{self._shell.command_root}/'.
At most {self._shell.max_args} words per command; one pipe per line.

  help      Show this text
  {self._exit_command:<9} Leave the shell
""")
        return 0
