# Sharelink Notes Parsing
# Find the share directive in free-text application notes

import re
from typing import Optional

SHARE_DIRECTIVE = re.compile(r"\s*share\s*=\s*(.*)")


def parse_share_directive(notes: Optional[str]) -> Optional[str]:
    """
    Extract the share target from application notes.

    Looks for a line of the form ``share=/path/to/share``; lines end in
    LF or CRLF, and whitespace around ``=`` is ignored. If several lines
    match, the last one wins.

    Args:
        notes: Free-text notes, possibly None.

    Returns:
        The share target, or None if no line carries a non-empty value.

    Examples:
        >>> parse_share_directive("Team space\\r\\nshare = /srv/shares/team")
        '/srv/shares/team'
        >>> parse_share_directive("no directive here") is None
        True
    """
    if not notes:
        return None

    target = None
    for line in notes.split("\n"):
        match = SHARE_DIRECTIVE.fullmatch(line.removesuffix("\r"))
        if match:
            target = match.group(1).rstrip()
    return target or None
