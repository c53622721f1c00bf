"""CLI error codes and error handling.

Every failure of an sw-cli invocation ends as a non-zero exit code; this
module holds the error types raised by the workflows and the single place
where they are turned into stderr output.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """CLI exit codes."""
    SUCCESS = 0
    ERROR = 1


@dataclass
class CLIError(Exception):
    """CLI error with exit code and message."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class UsageError(CLIError):
    """Unknown command or bad invocation."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.ERROR, hint)


class ConfigError(CLIError):
    """Persisted configuration could not be read or written."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.ERROR, hint)


class PromptAborted(CLIError):
    """The user cancelled a question or gave no usable answer."""
    def __init__(self, message: str = "Prompt aborted.", hint: Optional[str] = None):
        super().__init__(message, ExitCode.ERROR, hint)


class BuildError(CLIError):
    """The build delegate could not produce its artifact."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.ERROR, hint)


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Report an exception on stderr and return the exit code to use.

    Args:
        error: The exception to handle.
        verbose: If True, print stack trace for unexpected errors.

    Returns:
        Exit code to use.
    """
    if isinstance(error, CLIError):
        print(f"Error: {error.message}", file=sys.stderr)
        if error.hint:
            print(f"Hint: {error.hint}", file=sys.stderr)
        return error.code

    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return ExitCode.ERROR

    # Unexpected error
    print(f"Error: {error}", file=sys.stderr)
    if verbose:
        import traceback
        traceback.print_exc()
    return ExitCode.ERROR
