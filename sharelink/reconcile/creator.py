# Sharelink Link Creator
# Clear obstructions and create the missing links

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from sharelink.logger import EventCode, log_event
from sharelink.reconcile.models import ActionType, DesiredLink, LinkAction
from sharelink.utils.paths import DEFAULT_MARKER, delete_empty_dir, ensure_dir, rename_unique, symlinked_ancestor


def clear_obstruction(share: DesiredLink, marker: str = DEFAULT_MARKER) -> list[LinkAction]:
    """
    Make room for a link.

    An empty (or marker-only) folder at the link path is deleted. Anything
    else is moved aside to ``<name>.N`` so no data is lost.

    Args:
        share: Link about to be created.
        marker: Name of the reserved marker entry.

    Returns:
        Actions taken, empty if nothing was in the way.
    """
    path = share.link
    if not os.path.lexists(path):
        return []

    outcome = delete_empty_dir(path, marker)
    if outcome is not None:
        return [LinkAction(ActionType(outcome), path)]

    dest = rename_unique(path)
    if dest is None:
        return [LinkAction(ActionType.RENAMED, path, success=False, error="rename failed")]
    return [LinkAction(ActionType.RENAMED, path, target=dest)]


def create_link(share: DesiredLink) -> LinkAction:
    """
    Create the symlink for a desired link.

    Missing parent folders are created first.

    Args:
        share: Link to create.

    Returns:
        LinkAction describing the outcome.
    """
    try:
        ensure_dir(share.link.parent)
        os.symlink(share.target, share.link, target_is_directory=True)
    except OSError as e:
        log_event(
            EventCode.LINK_CREATE_FAILED,
            "unable to link",
            level=logging.ERROR,
            path=share.link,
            target=share.target,
            error=e,
        )
        return LinkAction(ActionType.CREATED, share.link, target=share.target, success=False, error=str(e))

    log_event(EventCode.LINK_CREATED, "linked", level=logging.INFO, path=share.link, target=share.target)
    return LinkAction(ActionType.CREATED, share.link, target=share.target)


def create_links(desired: Iterable[DesiredLink], home: Path, marker: str = DEFAULT_MARKER) -> list[LinkAction]:
    """
    Create every desired link, clearing the link path first.

    A link whose path runs through a symlinked folder is refused: writing
    there would land outside home. Failures are logged and recorded;
    remaining links are still created.

    Args:
        desired: Links to create.
        home: Account home directory.
        marker: Name of the reserved marker entry.

    Returns:
        Actions for every obstruction handled and every link attempted.
    """
    actions: list[LinkAction] = []
    for share in desired:
        through = symlinked_ancestor(share.link, home)
        if through is not None:
            log_event(
                EventCode.LINK_PARENT_SYMLINK,
                "link path runs through a symlink -- not created",
                level=logging.ERROR,
                path=share.link,
                via=through,
            )
            actions.append(
                LinkAction(
                    ActionType.CREATED,
                    share.link,
                    target=share.target,
                    success=False,
                    error=f"parent {through} is a symlink",
                )
            )
            continue
        actions.extend(clear_obstruction(share, marker))
        actions.append(create_link(share))
    return actions
