"""
Runtime path helpers.

Answer "where am I running from?" for both a plain interpreter and a frozen
application bundle (PyInstaller and friends).
"""

import sys
from pathlib import Path


def is_frozen() -> bool:
    """True when running from a frozen executable."""
    return bool(getattr(sys, "frozen", False))


def executable_dir() -> Path:
    """
    Directory of the running application executable.

    Frozen builds use the executable itself; otherwise the directory of the
    launching script, which is where a developer drops a local binary.
    """
    if is_frozen():
        return Path(sys.executable).resolve().parent
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent
    return Path.cwd()


def resource_dir() -> Path:
    """
    Directory where bundled resources live.

    For PyInstaller onefile builds this is the temporary extraction folder.
    """
    meipass = getattr(sys, "_MEIPASS", None)
    if is_frozen() and meipass:
        return Path(meipass).resolve()
    return Path(__file__).resolve().parent.parent
