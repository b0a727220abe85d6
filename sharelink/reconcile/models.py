# Sharelink Reconcile Models
# Desired links, working sets, and action records

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class DesiredLink:
    """A symlink that should exist: ``link`` pointing at ``target``."""

    link: Path
    target: Path


@dataclass
class ReconciliationSets:
    """
    Output of the reconciler.

    ``discovered`` holds links to remove, ``desired`` holds links to
    create. ``matched`` lists the desired links that were already correct.
    """

    discovered: set[Path] = field(default_factory=set)
    desired: list[DesiredLink] = field(default_factory=list)
    matched: list[DesiredLink] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """Check if applying these sets would touch the filesystem."""
        return bool(self.discovered or self.desired)


class ActionType(str, Enum):
    """Kinds of filesystem outcomes recorded during a run."""

    # No action needed
    MATCHED = "matched"

    # Remove phase
    REMOVED = "removed"
    PRUNED = "pruned"
    PURGED = "purged"

    # Create phase
    RENAMED = "renamed"
    CREATED = "created"


@dataclass
class LinkAction:
    """One decision or mutation applied to a path during a run."""

    action_type: ActionType
    path: Path
    target: Optional[Path] = None
    success: bool = True
    error: Optional[str] = None

    @property
    def is_mutation(self) -> bool:
        """Check if this action changed the filesystem."""
        return self.success and self.action_type != ActionType.MATCHED


@dataclass
class ReconcileResult:
    """
    Result of a complete reconciliation run.

    ``success`` reports that the run completed; individual item failures
    are recorded as failed actions and retried on the next run.
    """

    success: bool = True
    actions: list[LinkAction] = field(default_factory=list)

    def count(self, action_type: ActionType) -> int:
        """Count successful actions of a type."""
        return sum(1 for a in self.actions if a.success and a.action_type == action_type)

    @property
    def matched(self) -> int:
        return self.count(ActionType.MATCHED)

    @property
    def removed(self) -> int:
        return self.count(ActionType.REMOVED)

    @property
    def pruned(self) -> int:
        return self.count(ActionType.PRUNED)

    @property
    def purged(self) -> int:
        return self.count(ActionType.PURGED)

    @property
    def renamed(self) -> int:
        return self.count(ActionType.RENAMED)

    @property
    def created(self) -> int:
        return self.count(ActionType.CREATED)

    @property
    def failed(self) -> int:
        return sum(1 for a in self.actions if not a.success)

    @property
    def has_failures(self) -> bool:
        """Check if any item failed."""
        return self.failed > 0

    @property
    def mutations(self) -> list[LinkAction]:
        """Actions that changed the filesystem."""
        return [a for a in self.actions if a.is_mutation]
