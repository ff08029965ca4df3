from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the small set of real-filesystem helpers the workspace needs at
its boundaries: the per-user data directory (configuration and logs),
path normalization for export targets, and collision-free artifact names.
The in-memory forest never touches this module.
"""

import os
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "WorkspaceVFS"
UNIX_APP_DIR_NAME = ".workspace_vfs"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/WorkspaceVFS
    - Linux/Mac: ~/.workspace_vfs

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def safe_filename(name: str, fallback: str = "download") -> str:
    """
    Reduce an arbitrary node name to a single safe path component.

    Separators of either platform are honored, so '../x', '/etc/x' and
    'a\\b.txt' all collapse to their last segment.

    Args:
        name: Raw node name.
        fallback: Name used when nothing usable remains.

    Returns:
        str: A bare file name without directory parts.
    """
    base = os.path.basename((name or "").replace("\\", "/")).strip()
    if base in ("", ".", ".."):
        return fallback
    return base


def is_within(directory: str, path: str) -> bool:
    """Check that `path` resolves inside `directory`."""
    root = os.path.realpath(directory)
    target = os.path.realpath(path)
    try:
        return os.path.commonpath([root, target]) == root
    except ValueError:
        # Different drives on Windows
        return False


def unique_destination(directory: str, filename: str) -> str:
    """
    Compute a destination path that does not collide with existing files.

    Mirrors browser download behavior: 'name.ext', 'name (1).ext', ...
    The file name is reduced to a single component first.

    Args:
        directory: Target directory.
        filename: Desired file name.

    Returns:
        str: Absolute path that does not exist yet.
    """
    filename = safe_filename(filename)
    stem, ext = os.path.splitext(filename)
    candidate = os.path.join(directory, filename)
    counter = 1
    while os.path.exists(candidate):
        candidate = os.path.join(directory, f"{stem} ({counter}){ext}")
        counter += 1
    return os.path.abspath(candidate)

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
