# Sharelink Path Utilities
# Symlink tests, effectively-empty folders, purge and unique rename

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from sharelink.logger import EventCode, log_event

DEFAULT_MARKER = ".stfs"


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables and make the path absolute.

    Symlinks are not resolved: the home directory is compared by the
    path it was given as, not by its real location.

    Args:
        path: Path string or Path object.

    Returns:
        Absolute, normalized Path object.
    """
    path_str = os.path.expanduser(str(path))
    path_str = os.path.expandvars(path_str)
    return Path(os.path.normpath(os.path.abspath(path_str)))


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_within(path: Path, base: Path) -> bool:
    """Check whether path is base itself or lies below it (lexically)."""
    try:
        path.relative_to(base)
    except ValueError:
        return False
    return True


def is_real_dir(path: Path) -> bool:
    """Check whether path is a directory and not a symlink to one."""
    return path.is_dir() and not path.is_symlink()


def symlinked_ancestor(path: Path, home: Path) -> Optional[Path]:
    """
    Find the first folder between home and path that is a symlink.

    Home itself and path itself are not checked.

    Returns:
        The symlinked folder, or None if every parent below home is real.
    """
    for parent in reversed(path.parents):
        if parent == home or not is_within(parent, home):
            continue
        if parent.is_symlink():
            return parent
    return None


def is_effectively_empty(path: Path, marker: str = DEFAULT_MARKER) -> bool:
    """
    Check whether a directory is empty or holds only the marker entry.

    Args:
        path: Directory to inspect.
        marker: Name of the reserved marker entry.

    Returns:
        True if the directory has no entries, or exactly one named marker.
    """
    names = os.listdir(path)
    return not names or names == [marker]


def purge_dir(path: Path) -> bool:
    """
    Recursively delete a directory and everything in it.

    Stops at the first entry that cannot be deleted; whatever was already
    deleted stays deleted.

    Args:
        path: Directory to purge.

    Returns:
        True if the directory is gone.
    """
    try:
        shutil.rmtree(path)
    except OSError as e:
        log_event(EventCode.FOLDER_PURGE_FAILED, "could not purge folder", level=logging.ERROR, path=path, error=e)
        return False
    log_event(EventCode.FOLDER_PURGED, "purged folder", path=path)
    return True


def delete_empty_dir(path: Path, marker: str = DEFAULT_MARKER) -> Optional[str]:
    """
    Delete a directory if it is effectively empty.

    A directory containing only the marker entry counts as empty and is
    purged. Symlinks and non-directories are never deleted here.

    Args:
        path: Directory to delete.
        marker: Name of the reserved marker entry.

    Returns:
        ``"pruned"`` if an empty directory was removed, ``"purged"`` if a
        marker-only directory was purged, None if nothing was deleted.
    """
    if not is_real_dir(path):
        return None

    try:
        if not is_effectively_empty(path, marker):
            return None
    except OSError as e:
        log_event(EventCode.FOLDER_DELETE_FAILED, "error reading folder", level=logging.ERROR, path=path, error=e)
        return None

    if os.path.lexists(path / marker):
        return "purged" if purge_dir(path) else None

    try:
        path.rmdir()
    except OSError as e:
        log_event(EventCode.FOLDER_DELETE_FAILED, "error deleting folder", level=logging.ERROR, path=path, error=e)
        return None

    log_event(EventCode.FOLDER_PRUNED, "deleted empty folder", path=path)
    return "pruned"


def unique_sibling(path: Path) -> Path:
    """
    Find the first free ``<name>.N`` sibling of path, starting with N=1.

    Existence is checked without following symlinks, so a dangling link
    occupies its name.
    """
    i = 1
    while os.path.lexists(path.with_name(f"{path.name}.{i}")):
        i += 1
    return path.with_name(f"{path.name}.{i}")


def rename_unique(path: Path) -> Path | None:
    """
    Move path aside to the first free ``<name>.N`` sibling.

    Args:
        path: Entry to rename.

    Returns:
        The new path, or None if the rename failed.
    """
    dest = unique_sibling(path)
    try:
        os.rename(path, dest)
    except OSError as e:
        log_event(
            EventCode.FOLDER_RENAME_FAILED, "unable to rename existing entry", level=logging.ERROR, path=path, error=e
        )
        return None
    log_event(EventCode.FOLDER_RENAMED, "renamed existing entry", level=logging.WARNING, path=path, dest=dest)
    return dest
