# Sharelink Output Module
# Rich console output

from sharelink.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
