# Sharelink Event Log
# Coded event records for every reconciliation decision

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler

EVENT_LOGGER_NAME = "sharelink.events"

eventlog = logging.getLogger(EVENT_LOGGER_NAME)


class EventCode(str, Enum):
    """Unique codes for event log lines."""

    # Resolver
    SHARE_DECLARED = "SL101"
    SHARE_ROOT_REJECTED = "SL102"
    SHARE_TARGET_MISSING = "SL103"
    SHARE_TARGET_RELATIVE = "SL104"
    SHARE_OUTSIDE_HOME = "SL105"
    SHARE_DUPLICATE = "SL106"
    APPLICATION_NOT_FOUND = "SL107"
    METADATA_ERROR = "SL108"
    SHARE_NESTED = "SL109"

    # Survey
    LINK_FOUND = "SL201"
    SURVEY_ERROR = "SL202"

    # Reconcile
    LINK_MATCHED = "SL301"
    LINK_MISMATCHED = "SL302"
    LINK_UNRESOLVABLE = "SL303"
    LINK_NEW = "SL304"
    LINK_ORPHANED = "SL305"

    # Remove
    LINK_REMOVED = "SL401"
    LINK_REMOVE_FAILED = "SL402"
    FOLDER_PRUNED = "SL403"
    FOLDER_PURGED = "SL404"
    FOLDER_PURGE_FAILED = "SL405"
    FOLDER_DELETE_FAILED = "SL406"

    # Create
    LINK_CREATED = "SL501"
    LINK_CREATE_FAILED = "SL502"
    FOLDER_RENAMED = "SL503"
    FOLDER_RENAME_FAILED = "SL504"
    LINK_PARENT_SYMLINK = "SL505"


def format_event(code: EventCode, message: str, **fields: Any) -> str:
    """
    Render an event line.

    Args:
        code: Event code.
        message: Short human-readable description.
        **fields: Structured values appended as key=value pairs.

    Returns:
        Formatted line, e.g. ``[SL401] deleted symlink path=/home/a/x``.
    """
    parts = [f"[{code.value}] {message}"]
    for key, value in fields.items():
        if value is not None:
            parts.append(f"{key}={value}")
    return " ".join(parts)


def log_event(code: EventCode, message: str, *, level: int = logging.DEBUG, **fields: Any) -> None:
    """Emit a coded event on the event logger."""
    eventlog.log(level, format_event(code, message, **fields), extra={"event_code": code.value})


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Install handlers on the event logger.

    Console output goes through rich; an optional log file receives every
    event regardless of verbosity.

    Args:
        verbose: Show debug events on the console.
        log_file: Optional path of a log file.
        console: Rich console to write to.

    Returns:
        The configured event logger.
    """
    for handler in list(eventlog.handlers):
        eventlog.removeHandler(handler)
        handler.close()

    eventlog.setLevel(logging.DEBUG)
    eventlog.propagate = False

    rich_handler = RichHandler(console=console, show_path=False, markup=False)
    rich_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    eventlog.addHandler(rich_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        eventlog.addHandler(file_handler)

    return eventlog
