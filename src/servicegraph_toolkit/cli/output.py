"""
Centralized CLI output management system.

Provides consistent output handling across all CLI commands with respect for
global --quiet and --verbose flags.
"""

import sys
from enum import Enum

from rich.console import Console


class OutputLevel(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"  # Only errors
    NORMAL = "normal"  # Standard output
    VERBOSE = "verbose"  # Detailed output including debug information


class CLIOutputManager:
    """Centralized output manager for CLI commands."""

    def __init__(self, level: OutputLevel = OutputLevel.NORMAL):
        self.level = level

        self.console = Console(stderr=False, quiet=(level == OutputLevel.QUIET))
        self.error_console = Console(stderr=True)

    def info(self, message: str, **kwargs) -> None:
        """Print informational message."""
        self.console.print(message, **kwargs)

    def success(self, message: str, **kwargs) -> None:
        """Print success message."""
        self.console.print(f"✓ {message}", style="green", **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Print error message (always shown regardless of quiet mode)."""
        self.error_console.print(f"✗ {message}", style="red bold", **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Print debug message (only in verbose mode)."""
        if self.level != OutputLevel.VERBOSE:
            return
        self.console.print(f"🔍 {message}", style="dim", **kwargs)

    def print_raw(self, message: str, end: str = "\n") -> None:
        """Write a document to stdout untouched, even in quiet mode."""
        sys.stdout.write(message)
        if end:
            sys.stdout.write(end)
        sys.stdout.flush()


def create_output_manager(quiet: bool = False, verbose: bool = False) -> CLIOutputManager:
    """Factory function to create output manager from CLI flags."""
    if quiet:
        level = OutputLevel.QUIET
    elif verbose:
        level = OutputLevel.VERBOSE
    else:
        level = OutputLevel.NORMAL

    return CLIOutputManager(level=level)
