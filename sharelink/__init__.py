"""Sharelink - shared folder link reconciler.

Converges the symbolic links in an account home directory to the set of
shared folders declared through subscription metadata, removing stale
links and creating missing ones on every run.
"""

__version__ = "1.0.0"
__author__ = "Sharelink Developers"

__all__ = [
    "__version__",
    "DesiredLink",
    "LinkAction",
    "ActionType",
    "ReconcileEngine",
    "ReconcileResult",
    "run_reconciliation",
    "resolve_desired_links",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("DesiredLink", "LinkAction", "ActionType", "ReconcileResult"):
        from sharelink.reconcile import models

        return getattr(models, name)
    if name == "ReconcileEngine":
        from sharelink.reconcile.engine import ReconcileEngine

        return ReconcileEngine
    if name == "run_reconciliation":
        from sharelink.agent import run_reconciliation

        return run_reconciliation
    if name == "resolve_desired_links":
        from sharelink.resolver.desired import resolve_desired_links

        return resolve_desired_links
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
