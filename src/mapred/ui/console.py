"""Console output formatting utilities for mapred."""

from __future__ import annotations

import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_job_loaded(self, path: str, inputs: object, phase_kinds: list[str]) -> None:
        """Print a summary of a loaded job (stderr, so rendered JSON stays clean)."""
        if isinstance(inputs, str):
            inputs_display = f"bucket/literal {inputs!r}"
        else:
            inputs_display = f"{len(inputs)} key(s)"
        print(f"JOB: {path}", file=sys.stderr)
        print(f"Inputs: {inputs_display}", file=sys.stderr)
        print(f"Phases: {' -> '.join(phase_kinds) if phase_kinds else '(none)'}", file=sys.stderr)

    def print_document(self, text: str) -> None:
        """Print a rendered document."""
        print(text)

    def print_check_ok(self, source: str, phase_count: int) -> None:
        print(f"OK: {source} ({phase_count} phase(s))")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
