"""
Command Parser Module

Splits a command line at its pipe operator and parses each segment into
an argument vector plus optional input/output redirection targets.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from lumonsh.logger import get_logger


WHITESPACE = ' \t'
INPUT_MARKER = '<'
OUTPUT_MARKER = '>'
PIPE_OPERATOR = '|'

# Characters that end a word.
_WORD_DELIMITERS = WHITESPACE + INPUT_MARKER + OUTPUT_MARKER


@dataclass(frozen=True)
class CommandSegment:
    """One parsed command: program and arguments plus redirections."""
    argv: Tuple[str, ...] = ()
    in_path: Optional[str] = None
    out_path: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.argv

    @property
    def program(self) -> Optional[str]:
        return self.argv[0] if self.argv else None

    def with_program(self, path: str) -> 'CommandSegment':
        """Copy of the segment whose argv[0] is replaced by path."""
        return replace(self, argv=(path,) + self.argv[1:])


class CommandParser:
    """
    Parses command segments.

    Grammar of one segment:
        program [args...] [< inputPath] [> outputPath]

    Handles:
    - Spaces and tabs between words
    - Redirection markers attached to words (``prog>out``)
    - Repeated markers (the last target wins)
    - Markers with no target (ignored)
    - More than max_args words (argv truncated, rest of segment ignored)

    Parsing never fails; malformed input degrades to fewer arguments
    or no redirection.

    Example:
        >>> parser = CommandParser()
        >>> parser.parse_segment("wc < in > out")
        CommandSegment(argv=('wc',), in_path='in', out_path='out')
    """

    def __init__(self, max_args: int = 8):
        self._max_args = max_args
        self._logger = get_logger('parser')

    @property
    def max_args(self) -> int:
        return self._max_args

    def split_pipeline(self, line: str) -> Tuple[str, Optional[str]]:
        """
        Split a line at its first pipe operator.

        Returns:
            (left, right) when the line contains a pipe, (line, None)
            otherwise. Later pipe operators stay inside right.
        """
        index = line.find(PIPE_OPERATOR)
        if index < 0:
            return line, None

        left, right = line[:index], line[index + 1:]
        if PIPE_OPERATOR in right:
            self._logger.warning(
                "Only two-stage pipelines are supported; "
                "later pipe operators are passed to the right command as words",
                context={'right': right.strip()}
            )
        return left, right

    def parse_segment(self, text: str) -> CommandSegment:
        """
        Parse one command segment.

        Args:
            text: Segment text without an unescaped pipe operator

        Returns:
            CommandSegment, empty when text holds no words
        """
        argv: List[str] = []
        in_path: Optional[str] = None
        out_path: Optional[str] = None

        pos = 0
        end = len(text)

        while True:
            pos = self._skip_whitespace(text, pos)
            if pos >= end:
                break

            char = text[pos]

            if char in (INPUT_MARKER, OUTPUT_MARKER):
                pos = self._skip_whitespace(text, pos + 1)
                target, pos = self._read_word(text, pos)
                if not target:
                    self._logger.debug(
                        "Ignoring redirection marker without a target",
                        context={'marker': char}
                    )
                    continue
                if char == INPUT_MARKER:
                    in_path = target
                else:
                    out_path = target
                continue

            word, pos = self._read_word(text, pos)
            argv.append(word)

            if len(argv) >= self._max_args:
                if self._skip_whitespace(text, pos) < end:
                    self._logger.debug(
                        "Argument list truncated",
                        context={'max_args': self._max_args}
                    )
                break

        return CommandSegment(argv=tuple(argv), in_path=in_path, out_path=out_path)

    @staticmethod
    def _skip_whitespace(text: str, pos: int) -> int:
        while pos < len(text) and text[pos] in WHITESPACE:
            pos += 1
        return pos

    @staticmethod
    def _read_word(text: str, pos: int) -> Tuple[str, int]:
        start = pos
        while pos < len(text) and text[pos] not in _WORD_DELIMITERS:
            pos += 1
        return text[start:pos], pos
