# Sharelink Filesystem Surveyor
# Find symlinked directories under the home directory

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from sharelink.logger import EventCode, log_event


@dataclass(frozen=True)
class DirEntryRecord:
    """A single entry seen during the walk."""

    path: Path
    is_symlink: bool
    is_dir: bool


def walk_entries(root: Path) -> Iterator[DirEntryRecord]:
    """
    Lazily walk the tree below root without following symlinks.

    A symlink is reported with ``is_dir`` telling whether its target is a
    directory, but the walk never descends into it. Directories that
    cannot be read are logged and skipped.

    Args:
        root: Directory to walk. Root itself is not reported.

    Yields:
        DirEntryRecord for every entry below root.
    """
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            log_event(EventCode.SURVEY_ERROR, "could not read directory", level=logging.ERROR, path=current, error=e)
            continue

        for entry in entries:
            path = current / entry.name
            try:
                is_symlink = entry.is_symlink()
                is_dir = entry.is_dir(follow_symlinks=True)
            except OSError as e:
                log_event(EventCode.SURVEY_ERROR, "could not stat entry", level=logging.ERROR, path=path, error=e)
                continue

            yield DirEntryRecord(path=path, is_symlink=is_symlink, is_dir=is_dir)

            if is_dir and not is_symlink:
                stack.append(path)


def find_shared_folders(home: Path) -> set[Path]:
    """
    Collect every symlink to a directory in the home subtree.

    Args:
        home: Account home directory.

    Returns:
        Set of absolute link paths. Partial if parts of the tree were unreadable.
    """
    result: set[Path] = set()
    for record in walk_entries(home):
        if record.is_symlink and record.is_dir:
            result.add(record.path)
            log_event(EventCode.LINK_FOUND, "found shared folder", path=record.path)
    return result
