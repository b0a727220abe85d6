# Sharelink Console Output
# Rich-based console output for plans and run results

from pathlib import Path

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sharelink.reconcile.models import ActionType, LinkAction, ReconcileResult, ReconciliationSets


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for reconciliation runs.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        """Underlying rich console, shared with the log handler."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_plan(self, sets: ReconciliationSets, home: Path) -> None:
        """
        Print what a run would do.

        Args:
            sets: Output of the reconciler.
            home: Account home directory, used to shorten paths.
        """
        if not sets.has_changes and not sets.matched:
            self._console.print("[dim]No shared folders[/dim]")
            return

        table = Table(title="Shared Folders", show_header=True, header_style="bold")
        table.add_column("Folder", style="cyan")
        table.add_column("State", justify="center")
        table.add_column("Target", style="dim")

        for share in sets.matched:
            table.add_row(_short(share.link, home), "[green]✓ linked[/green]", str(share.target))
        for path in sorted(sets.discovered):
            table.add_row(_short(path, home), "[red]× remove[/red]", "")
        for share in sets.desired:
            table.add_row(_short(share.link, home), "[yellow]+ create[/yellow]", str(share.target))

        self._console.print()
        self._console.print(table)
        self._console.print()

    def print_actions(self, result: ReconcileResult, home: Path) -> None:
        """Print each action of a run; matched links only when verbose."""
        for action in result.actions:
            if action.action_type == ActionType.MATCHED and not self.verbose:
                continue
            self._console.print(f"  {self._get_action_icon(action)} {self._describe(action, home)}")

    def _describe(self, action: LinkAction, home: Path) -> str:
        path = _short(action.path, home)
        if action.action_type == ActionType.RENAMED and action.target is not None:
            text = f"{path} → {_short(action.target, home)}"
        elif action.target is not None:
            text = f"{path} → {action.target}"
        else:
            text = path

        if not action.success:
            return f"[red]{text}[/red] ({action.action_type.value} failed: {action.error})"
        return f"{text} [dim]({action.action_type.value})[/dim]"

    def _get_action_icon(self, action: LinkAction) -> str:
        """Get icon for action type."""
        if not action.success:
            return "[red]✗[/red]"
        icons = {
            ActionType.MATCHED: "[green]✓[/green]",
            ActionType.REMOVED: "[red]×[/red]",
            ActionType.PRUNED: "[dim]-[/dim]",
            ActionType.PURGED: "[dim]-[/dim]",
            ActionType.RENAMED: "[yellow]↷[/yellow]",
            ActionType.CREATED: "[green]+[/green]",
        }
        return icons.get(action.action_type, "?")

    def print_result(self, result: ReconcileResult, home: Path) -> None:
        """
        Print run actions and summary.

        Args:
            result: Result of the run.
            home: Account home directory.
        """
        self.print_actions(result, home)
        self._console.print()

        if not result.mutations and not result.has_failures:
            status_text = "[green]Everything is linked[/green]"
        elif result.has_failures:
            status_text = "[yellow]Run completed with failures (retried next run)[/yellow]"
        else:
            status_text = "[green]Run completed[/green]"

        self._console.print(
            Panel(
                f"{status_text}\n"
                f"Home: {home}\n"
                f"Links: {result.matched} matched, {result.created} created, {result.removed} removed\n"
                f"Folders: {result.pruned} pruned, {result.purged} purged, {result.renamed} renamed\n"
                f"Failures: {result.failed}",
                title="Summary",
                border_style="yellow" if result.has_failures else "green",
            )
        )

    def print_config_summary(self, config_path: str, home: str | None, account: str | None) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\n" f"Account: {account or '-'}\n" f"Home: {home or '-'}",
                title="Sharelink Configuration",
                border_style="blue",
            )
        )


def _short(path: Path, home: Path) -> str:
    """Show paths below home relative to it."""
    try:
        return str(path.relative_to(home))
    except ValueError:
        return str(path)


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
