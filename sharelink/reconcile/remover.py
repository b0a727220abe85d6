# Sharelink Link Remover
# Delete stale links and prune the folders they leave empty

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from sharelink.logger import EventCode, log_event
from sharelink.reconcile.models import ActionType, LinkAction
from sharelink.utils.paths import DEFAULT_MARKER, delete_empty_dir, is_within


def remove_link(path: Path) -> LinkAction:
    """
    Delete a symlink without touching what it points at.

    Args:
        path: Symlink to delete.

    Returns:
        LinkAction describing the outcome.
    """
    try:
        os.unlink(path)
    except OSError as e:
        log_event(
            EventCode.LINK_REMOVE_FAILED, "could not delete incorrect symlink", level=logging.ERROR, path=path, error=e
        )
        return LinkAction(ActionType.REMOVED, path, success=False, error=str(e))

    log_event(EventCode.LINK_REMOVED, "deleted symlink", level=logging.INFO, path=path)
    return LinkAction(ActionType.REMOVED, path)


def prune_parents(path: Path, home: Path, marker: str = DEFAULT_MARKER) -> list[LinkAction]:
    """
    Delete the now-empty folders above a removed link.

    Walks upward from the parent of path, deleting each folder that is
    empty (or holds only the marker), and stops at the first folder that
    stays, or at home. Home itself is never deleted.

    Args:
        path: Removed link.
        home: Account home directory.
        marker: Name of the reserved marker entry.

    Returns:
        A PRUNED or PURGED action for each deleted folder.
    """
    actions: list[LinkAction] = []
    folder = path.parent
    while folder != home and folder != folder.parent and is_within(folder, home):
        outcome = delete_empty_dir(folder, marker)
        if outcome is None:
            break
        actions.append(LinkAction(ActionType(outcome), folder))
        folder = folder.parent
    return actions


def remove_stale_links(paths: Iterable[Path], home: Path, marker: str = DEFAULT_MARKER) -> list[LinkAction]:
    """
    Remove every stale link and prune its empty parent folders.

    A link that cannot be deleted is logged and skipped; the others are
    still processed.

    Args:
        paths: Links to remove.
        home: Account home directory, the upper bound for pruning.
        marker: Name of the reserved marker entry.

    Returns:
        Actions for every removal attempt and every pruned folder.
    """
    actions: list[LinkAction] = []
    for path in sorted(paths):
        action = remove_link(path)
        actions.append(action)
        if action.success:
            actions.extend(prune_parents(path, home, marker))
    return actions
