# Sharelink Reconcile Module
# Survey, diff, and apply shared folder links

from sharelink.reconcile.creator import clear_obstruction, create_link, create_links
from sharelink.reconcile.engine import ReconcileEngine
from sharelink.reconcile.models import ActionType, DesiredLink, LinkAction, ReconcileResult, ReconciliationSets
from sharelink.reconcile.reconciler import reconcile
from sharelink.reconcile.remover import prune_parents, remove_link, remove_stale_links
from sharelink.reconcile.survey import DirEntryRecord, find_shared_folders, walk_entries

__all__ = [
    # Models
    "DesiredLink",
    "ReconciliationSets",
    "ActionType",
    "LinkAction",
    "ReconcileResult",
    # Survey
    "DirEntryRecord",
    "walk_entries",
    "find_shared_folders",
    # Reconcile
    "reconcile",
    # Remove
    "remove_link",
    "prune_parents",
    "remove_stale_links",
    # Create
    "clear_obstruction",
    "create_link",
    "create_links",
    # Engine
    "ReconcileEngine",
]
