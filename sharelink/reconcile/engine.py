# Sharelink Reconcile Engine
# Survey, reconcile, remove, create - in that order

from collections.abc import Iterable
from pathlib import Path

from sharelink.reconcile.creator import create_links
from sharelink.reconcile.models import ActionType, DesiredLink, LinkAction, ReconcileResult, ReconciliationSets
from sharelink.reconcile.reconciler import reconcile
from sharelink.reconcile.remover import remove_stale_links
from sharelink.reconcile.survey import find_shared_folders
from sharelink.utils.paths import DEFAULT_MARKER, expand_path


class ReconcileEngine:
    """
    Converges the links under one home directory to a desired set.

    Holds no state between runs: every run surveys the filesystem again.
    """

    def __init__(self, home: Path | str, *, marker: str = DEFAULT_MARKER):
        """
        Initialize engine.

        Args:
            home: Account home directory.
            marker: Marker entry that makes a directory count as empty.
        """
        self.home = expand_path(home)
        self.marker = marker

    def plan(self, desired: Iterable[DesiredLink]) -> ReconciliationSets:
        """
        Survey and reconcile without touching the filesystem.

        Args:
            desired: Links that should exist.

        Returns:
            ReconciliationSets with links to remove and links to create.
        """
        discovered = find_shared_folders(self.home)
        return reconcile(discovered, desired)

    def run(self, desired: Iterable[DesiredLink]) -> ReconcileResult:
        """
        Perform a full reconciliation run.

        All removals finish before any link is created, so a link that is
        both stale and desired is deleted before it is recreated.

        Args:
            desired: Links that should exist.

        Returns:
            ReconcileResult; success is True once the run has completed.
        """
        sets = self.plan(desired)

        actions: list[LinkAction] = [
            LinkAction(ActionType.MATCHED, share.link, target=share.target) for share in sets.matched
        ]
        actions.extend(remove_stale_links(sets.discovered, self.home, self.marker))
        actions.extend(create_links(sets.desired, self.home, self.marker))

        return ReconcileResult(success=True, actions=actions)
