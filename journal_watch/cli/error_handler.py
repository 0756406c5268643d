"""Standardized error handling for the CLI."""

import sys
from enum import Enum
from functools import wraps
from typing import Any, Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..core.exceptions import (
    LogSourceError,
    SourceOpenError,
    TailLoopError,
)


class ErrorType(Enum):
    """Categories of errors for appropriate handling."""

    CONFIG = "Configuration Error"
    SOURCE = "Log Source Error"
    TAIL = "Tail Loop Error"
    RUNTIME = "Runtime Error"
    USER_INTERRUPT = "User Interrupted"


class CLIError(Exception):
    """Base exception for CLI-specific errors."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.RUNTIME,
        suggestion: Optional[str] = None,
        exit_code: int = 1,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.suggestion = suggestion
        self.exit_code = exit_code


class ConfigError(CLIError):
    """Configuration-related errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, ErrorType.CONFIG, suggestion, exit_code=2)


class SourceUnavailableError(CLIError):
    """The log source could not be opened."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, ErrorType.SOURCE, suggestion, exit_code=1)


class TailFailedError(CLIError):
    """The tail loop stopped on an unrecoverable error."""

    def __init__(self, message: str, errno: Optional[int] = None):
        super().__init__(message, ErrorType.TAIL, exit_code=errno or 1)


def to_cli_error(error: Exception) -> Optional[CLIError]:
    """Translate engine failures into CLI errors with exit codes."""
    if isinstance(error, CLIError):
        return error
    if isinstance(error, SourceOpenError):
        return SourceUnavailableError(
            str(error),
            suggestion="Check that the journal is readable by this user.",
        )
    if isinstance(error, (TailLoopError, LogSourceError)):
        return TailFailedError(str(error), errno=error.errno)
    return None


class CLIErrorHandler:
    """Centralized error handling for CLI commands."""

    def __init__(self, console: Optional[Console] = None, debug: bool = False):
        self.console = console or Console(stderr=True)
        self.debug = debug

    def handle_error(self, error: BaseException) -> None:
        """Handle an error with appropriate formatting and exit code."""
        if isinstance(error, KeyboardInterrupt):
            self._handle_interrupt()
            return

        cli_error = to_cli_error(error)
        if cli_error is not None:
            self._handle_cli_error(cli_error)
        else:
            self._handle_unexpected_error(error)

    def _handle_interrupt(self) -> None:
        """Handle keyboard interrupt quietly; Ctrl+C is the normal way out."""
        sys.exit(130)  # Standard exit code for SIGINT

    def _handle_cli_error(self, error: CLIError) -> None:
        """Handle known CLI errors with formatting."""
        error_text = Text()
        error_text.append(f"✗ {error.error_type.value}: ", style="bold red")
        error_text.append(str(error))

        if error.suggestion:
            error_text.append("\n\n")
            error_text.append("Suggestion: ", style="bold yellow")
            error_text.append(error.suggestion, style="yellow")

        panel = Panel(
            error_text,
            title="[bold red]Error[/bold red]",
            border_style="red",
            expand=False,
        )
        self.console.print(panel)

        if self.debug:
            self.console.print("\n[dim]Debug traceback:[/dim]")
            self.console.print_exception(show_locals=True)

        sys.exit(error.exit_code)

    def _handle_unexpected_error(self, error: BaseException) -> None:
        """Handle unexpected errors with full traceback."""
        error_text = Text()
        error_text.append("✗ Unexpected error: ", style="bold red")
        error_text.append(str(error))

        panel = Panel(
            error_text,
            title="[bold red]Unexpected Error[/bold red]",
            border_style="red",
            expand=False,
        )
        self.console.print(panel)

        self.console.print("\n[dim]Full traceback:[/dim]")
        self.console.print_exception(show_locals=self.debug)

        sys.exit(1)

    def wrap_command(self, func: Callable) -> Callable:
        """Decorator to wrap CLI commands with error handling."""

        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except (Exception, KeyboardInterrupt) as e:
                self.handle_error(e)

        return wrapper


# Global instance for convenience
default_handler = CLIErrorHandler()


def handle_cli_error(func: Callable) -> Callable:
    """Decorator for standardized CLI error handling."""
    return default_handler.wrap_command(func)
