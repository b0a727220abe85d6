# Sharelink Agent
# Entry point invoked once per session start

from pathlib import Path

from sharelink.reconcile.engine import ReconcileEngine
from sharelink.reconcile.models import ReconcileResult
from sharelink.resolver.desired import resolve_desired_links
from sharelink.resolver.source import SubscriptionSource
from sharelink.utils.paths import DEFAULT_MARKER


def run_reconciliation(
    home: Path | str,
    source: SubscriptionSource,
    account: str,
    *,
    marker: str = DEFAULT_MARKER,
) -> ReconcileResult:
    """
    Resolve the desired links for an account and reconcile its home.

    Args:
        home: Account home directory.
        source: Subscription and application metadata.
        account: Account identifier.
        marker: Marker entry that makes a directory count as empty.

    Returns:
        ReconcileResult of the run.
    """
    engine = ReconcileEngine(home, marker=marker)
    desired = resolve_desired_links(source, account, engine.home)
    return engine.run(desired)
