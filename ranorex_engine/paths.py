"""Expansion of folder placeholders in test script paths.

Placeholders let the same linked test run on machines with different folder
layouts, e.g. ``[MyDocuments]\\Tests\\Login.exe``.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path

PLACEHOLDER_PATTERN = re.compile(r"\[(\w+)\]")


def special_folders() -> Mapping[str, str]:
    """Return the folders each placeholder resolves to on this machine."""
    home = Path.home()
    documents = home / "Documents"

    if os.name == "nt":
        profile = Path(os.environ.get("USERPROFILE", str(home)))
        public = Path(os.environ.get("PUBLIC", r"C:\Users\Public"))
        program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
        return {
            "MyDocuments": str(profile / "Documents"),
            "CommonDocuments": str(public / "Documents"),
            "DesktopDirectory": str(profile / "Desktop"),
            "ProgramFiles": program_files,
            "ProgramFilesX86": os.environ.get("ProgramFiles(x86)", program_files),
        }

    return {
        "MyDocuments": str(documents),
        "CommonDocuments": str(documents),
        "DesktopDirectory": str(home / "Desktop"),
        "ProgramFiles": "/opt",
        "ProgramFilesX86": "/opt",
    }


def resolve_placeholders(path: str, folders: Mapping[str, str] | None = None) -> str:
    """Replace every known ``[Token]`` in ``path`` with its folder.

    Args:
        path: Raw path as configured on the test
        folders: Placeholder name to folder mapping (defaults to this machine's)

    Returns:
        The path with known placeholders substituted. Unknown placeholders are
        left as they are, so a later existence check reports the literal path.

    """
    resolved = special_folders() if folders is None else folders

    def _substitute(match: re.Match[str]) -> str:
        return resolved.get(match.group(1), match.group(0))

    return PLACEHOLDER_PATTERN.sub(_substitute, path)
