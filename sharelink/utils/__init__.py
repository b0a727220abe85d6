# Sharelink Utilities Module
# Filesystem helpers for link reconciliation

from sharelink.utils.paths import (
    DEFAULT_MARKER,
    delete_empty_dir,
    ensure_dir,
    expand_path,
    is_effectively_empty,
    is_real_dir,
    is_within,
    purge_dir,
    rename_unique,
    symlinked_ancestor,
    unique_sibling,
)

__all__ = [
    "DEFAULT_MARKER",
    "expand_path",
    "ensure_dir",
    "is_within",
    "is_real_dir",
    "symlinked_ancestor",
    "is_effectively_empty",
    "purge_dir",
    "delete_empty_dir",
    "unique_sibling",
    "rename_unique",
]
