# Sharelink Desired-State Resolver
# Turn subscription metadata into the set of links that should exist

import logging
import os
from pathlib import Path

from sharelink.exceptions import ApplicationNotFoundError
from sharelink.logger import EventCode, log_event
from sharelink.reconcile.models import DesiredLink
from sharelink.resolver.notes import parse_share_directive
from sharelink.resolver.source import SubscriptionSource
from sharelink.utils.paths import is_within


def link_path_for(home: Path, folder: str) -> Path | None:
    """
    Map a subscription folder to an absolute link path under home.

    Folders are always home-relative; a leading ``/`` is ignored.

    Args:
        home: Account home directory (absolute).
        folder: Subscription folder path.

    Returns:
        The link path, or None if the folder is the root, home itself,
        or would leave the home subtree.
    """
    relative = folder.strip().lstrip("/")
    if not relative:
        return None
    link = Path(os.path.normpath(home / relative))
    if link == home or not is_within(link, home):
        return None
    return link


def resolve_desired_links(source: SubscriptionSource, account: str, home: Path) -> list[DesiredLink]:
    """
    Build the desired links for an account.

    Every subscription whose application notes carry a ``share=`` line
    contributes one link from its folder to the share. Subscriptions are
    skipped, with a log line, when their application cannot be found, the
    folder is the root, the folder leaves home, the share is not an
    absolute path, the share is not an existing folder, or another subscription
    already claimed the same folder, a folder above it or a folder below it.

    Args:
        source: Subscription and application metadata.
        account: Account identifier.
        home: Account home directory (absolute).

    Returns:
        Desired links in subscription order.

    Raises:
        MetadataError: If the subscriptions themselves cannot be listed.
    """
    result: list[DesiredLink] = []
    claimed: set[Path] = set()

    for sub in source.subscriptions(account):
        folder = sub.folder
        try:
            notes = source.application(sub.application).notes
        except ApplicationNotFoundError:
            log_event(
                EventCode.APPLICATION_NOT_FOUND,
                "application lookup failed",
                level=logging.WARNING,
                folder=folder,
                application=sub.application,
            )
            continue

        target = parse_share_directive(notes)
        if target is None:
            continue

        link = link_path_for(home, folder)
        if link is None:
            code = EventCode.SHARE_ROOT_REJECTED if not folder.strip().strip("/") else EventCode.SHARE_OUTSIDE_HOME
            log_event(code, "subscription folder cannot be shared", level=logging.WARNING, folder=folder, target=target)
            continue

        target_path = Path(target)
        if not target_path.is_absolute():
            log_event(
                EventCode.SHARE_TARGET_RELATIVE,
                "share target is not absolute -- ignored",
                level=logging.WARNING,
                folder=folder,
                target=target,
            )
            continue

        if not os.path.isdir(target_path):
            log_event(
                EventCode.SHARE_TARGET_MISSING,
                "share target is not an existing folder -- ignored",
                level=logging.WARNING,
                folder=folder,
                target=target,
            )
            continue

        if link in claimed:
            log_event(
                EventCode.SHARE_DUPLICATE,
                "folder already shared by another subscription -- ignored",
                level=logging.WARNING,
                folder=folder,
                target=target,
            )
            continue

        nested = next((other for other in claimed if is_within(link, other) or is_within(other, link)), None)
        if nested is not None:
            log_event(
                EventCode.SHARE_NESTED,
                "folder nests with another shared folder -- ignored",
                level=logging.WARNING,
                folder=folder,
                target=target,
                other=nested,
            )
            continue

        claimed.add(link)
        result.append(DesiredLink(link=link, target=target_path))
        log_event(EventCode.SHARE_DECLARED, "subscription shared", folder=folder, target=target)

    return result
