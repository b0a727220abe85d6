# Sharelink Resolver Module
# Desired link set from subscription metadata

from sharelink.resolver.desired import link_path_for, resolve_desired_links
from sharelink.resolver.notes import parse_share_directive
from sharelink.resolver.source import (
    Application,
    InMemorySubscriptionSource,
    Subscription,
    SubscriptionSource,
    YamlSubscriptionSource,
)

__all__ = [
    # Notes
    "parse_share_directive",
    # Source
    "Subscription",
    "Application",
    "SubscriptionSource",
    "InMemorySubscriptionSource",
    "YamlSubscriptionSource",
    # Desired
    "link_path_for",
    "resolve_desired_links",
]
