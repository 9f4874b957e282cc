"""
Human-readable output formatting.

All CLI output goes through here; results go to stdout and errors to stderr.
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from ..reference import RetagRequest

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)

PROGRAM_NAME = "docker-retag"


def print_retag_summary(request: RetagRequest) -> None:
    """Print the retag confirmation."""
    _console.print(f"Retagged {escape(request.source)} as {escape(request.target)}", soft_wrap=True)


def print_registry(registry_url: str) -> None:
    """Print the registry in use (verbose mode)."""
    _console.print(f"[bold]Registry:[/] [dim]{escape(registry_url)}[/]", soft_wrap=True)


def print_error(exc: BaseException) -> None:
    """Print an error as a single line on stderr."""
    message = str(exc) or type(exc).__name__
    _err_console.print(f"{PROGRAM_NAME}: {escape(message)}", soft_wrap=True)
