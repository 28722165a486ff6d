"""
LUMON Shell Utility Programs

Small programs that live in the command root and run as the shell's
children: cat, date, echo, rm, touch, wc and xargs.

install_commands() writes one executable launcher per program into a
command root so the shell can find them by bare name.
"""

import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from lumonsh.logger import get_logger


PROGRAMS = {
    'cat': 'lumonsh.progs.cat',
    'date': 'lumonsh.progs.date',
    'echo': 'lumonsh.progs.echo',
    'rm': 'lumonsh.progs.rm',
    'touch': 'lumonsh.progs.touch',
    'wc': 'lumonsh.progs.wc',
    'xargs': 'lumonsh.progs.xargs',
}

_PACKAGE_PARENT = str(Path(__file__).resolve().parent.parent.parent)

_LAUNCHER = """#!{python}
import sys
sys.path.insert(0, {package_parent!r})
from {module} import main
sys.exit(main(sys.argv[1:], command_root={command_root!r}))
"""


def install_commands(
    command_root: str,
    names: Optional[Iterable[str]] = None,
    python: Optional[str] = None
) -> List[str]:
    """
    Write launchers for the utility programs into command_root.

    Args:
        command_root: Directory the shell resolves bare names against
        names: Subset of PROGRAMS to install (default: all)
        python: Interpreter for the launchers (default: this one)

    Returns:
        Paths of the launchers written
    """
    logger = get_logger('progs')
    root = Path(command_root)
    root.mkdir(parents=True, exist_ok=True)

    written = []
    for name in names or sorted(PROGRAMS):
        if name not in PROGRAMS:
            raise KeyError(f"Unknown program: {name}")

        launcher = root / name
        launcher.write_text(_LAUNCHER.format(
            python=python or sys.executable,
            package_parent=_PACKAGE_PARENT,
            module=PROGRAMS[name],
            command_root=command_root,
        ))
        os.chmod(launcher, 0o755)
        written.append(str(launcher))

    logger.notice(
        "Installed utility programs",
        context={'root': command_root, 'count': len(written)}
    )
    return written


__all__ = [
    'PROGRAMS',
    'install_commands',
]
