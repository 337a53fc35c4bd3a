"""Rich console logging helpers.

Messages are escaped before printing, so git output such as ``[rejected]``
or ``github-actions[bot]`` is shown verbatim instead of being read as markup.
"""

from rich.console import Console
from rich.markup import escape

_console: Console | None = None


def get_console() -> Console:
    """Return the shared Rich console.

    Returns
    -------
    Console
        Console writing to stderr so stdout stays free for command output.

    """
    global _console
    if _console is None:
        _console = Console(stderr=True, highlight=False)
    return _console


def log_info(message: str) -> None:
    """Log an informational message."""
    get_console().print(f"[cyan]ℹ[/cyan] {escape(message)}")


def log_success(message: str) -> None:
    """Log a success message."""
    get_console().print(f"[green]✓[/green] {escape(message)}")


def log_warning(message: str) -> None:
    """Log a warning message."""
    get_console().print(f"[yellow]⚠[/yellow] {escape(message)}")


def log_error(message: str) -> None:
    """Log an error message."""
    get_console().print(f"[bold red]✗[/bold red] {escape(message)}")
