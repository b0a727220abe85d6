# Sharelink Reconciler
# Diff desired links against discovered links

import logging
from collections.abc import Iterable
from pathlib import Path

from sharelink.logger import EventCode, log_event
from sharelink.reconcile.models import DesiredLink, ReconciliationSets


def resolve_link(path: Path) -> Path:
    """
    Resolve the real target of a link, following every symlink.

    Raises:
        OSError: If the link is broken or cannot be read.
    """
    return path.resolve(strict=True)


def reconcile(discovered: Iterable[Path], desired: Iterable[DesiredLink]) -> ReconciliationSets:
    """
    Compare desired links with the symlinked folders found on disk.

    A desired link whose path was discovered and already resolves to the
    desired target is dropped from both sides. Everything else stays:
    discovered paths left over are removed later, desired links left over
    are created later. A link pointing elsewhere, or one that cannot be
    resolved, stays on both sides so it is removed and then recreated.

    The inputs are not modified.

    Args:
        discovered: Symlinked directories found under home.
        desired: Links that should exist.

    Returns:
        ReconciliationSets with the links to remove and to create.
    """
    result = ReconciliationSets(discovered=set(discovered))

    for share in desired:
        if share.link not in result.discovered:
            log_event(EventCode.LINK_NEW, "found new shared folder", path=share.link, target=share.target)
            result.desired.append(share)
            continue

        try:
            actual = resolve_link(share.link)
            expected = resolve_link(share.target)
        except (OSError, RuntimeError) as e:
            log_event(
                EventCode.LINK_UNRESOLVABLE,
                "error resolving symlink",
                level=logging.WARNING,
                path=share.link,
                error=e,
            )
            result.desired.append(share)
            continue

        if actual == expected:
            result.discovered.discard(share.link)
            result.matched.append(share)
            log_event(EventCode.LINK_MATCHED, "shared folder is correct", path=share.link, target=share.target)
        else:
            result.desired.append(share)
            log_event(
                EventCode.LINK_MISMATCHED,
                "shared folder is incorrect",
                level=logging.INFO,
                path=share.link,
                actual=actual,
                target=share.target,
            )

    for orphan in sorted(result.discovered - {s.link for s in result.desired}):
        log_event(EventCode.LINK_ORPHANED, "shared folder has no subscription", level=logging.INFO, path=orphan)

    return result

