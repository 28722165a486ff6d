"""
Path Resolver Module

Maps user-supplied program and file names onto the command/content root.

Author: LUMON Shell Developers
Version: 1.0.0
"""

from lumonsh.exceptions import PathResolutionError


SEPARATOR = '/'


class PathResolver:
    """
    Resolves user tokens against the command root.

    Rules, applied in order:
        1. ``""`` and ``"/"`` (or any run of separators) are invalid.
        2. ``"/name/x"`` drops the leading separator: ``<root>/name/x``.
        3. ``"name"`` (no separator) becomes ``<root>/name``.
        4. Anything else (``"dir/name"``, ``"c/name"``) is used verbatim.

    The same resolver is used for programs, redirection targets and the
    file arguments of the utility programs.

    Example:
        >>> PathResolver('c').resolve('/trek')
        'c/trek'
    """

    def __init__(self, command_root: str = 'c'):
        if not command_root or command_root.strip(SEPARATOR) == '':
            raise PathResolutionError(command_root or '', reason="invalid command root")
        # Keep a leading separator for absolute roots, drop trailing ones.
        self._root = command_root.rstrip(SEPARATOR)

    @property
    def command_root(self) -> str:
        return self._root

    def resolve(self, token: str) -> str:
        """
        Resolve a token to a filesystem path.

        Args:
            token: Program or file name as typed by the operator

        Returns:
            Non-empty resolved path

        Raises:
            PathResolutionError: For empty and root-only tokens
        """
        if not token:
            raise PathResolutionError(token, reason="empty path")

        if token.strip(SEPARATOR) == '':
            raise PathResolutionError(token, reason="root only")

        if token.startswith(SEPARATOR):
            return self._under_root(token[1:])

        if SEPARATOR not in token:
            return self._under_root(token)

        return token

    def _under_root(self, name: str) -> str:
        return f"{self._root}{SEPARATOR}{name}"

    def is_rooted(self, path: str) -> bool:
        """Check whether a resolved path lives under the command root."""
        return path.startswith(self._root + SEPARATOR)
