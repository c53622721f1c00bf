"""CLI output formatting utilities.

Console messages for the CLI on stdout, with optional colour through click's
styling helpers.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Optional, TextIO

import click


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    no_color: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout


class OutputWriter:
    """Handles console output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    def _style(self, text: str, **styles: Any) -> str:
        if self.config.no_color:
            return text
        return click.style(text, **styles)

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.print(self._style(message, fg="green"))
