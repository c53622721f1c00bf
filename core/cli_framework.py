"""CLI application framework.

Commands are registered with a decorator and looked up by exact name. An
invocation is either in command mode (the first non-flag token names a
command) or flag-only mode (``--help``/``--version``); the two never mix.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import (
    Callable,
    Dict,
    Optional,
    Sequence,
)

from .cli_errors import ExitCode, UsageError, handle_error
from .cli_output import OutputWriter

LOG = logging.getLogger(__name__)

CommandFunc = Callable[[argparse.Namespace], int]


class ArgumentParser(argparse.ArgumentParser):
    """Parser that raises ``UsageError`` instead of exiting the process."""

    def error(self, message: str):
        raise UsageError(message)


@dataclass
class CommandDef:
    """Definition of a CLI command."""
    name: str
    func: CommandFunc
    help: str = ""


class CLIApp:
    """Dispatches argv to registered commands or to the help/version flags.

    Example usage:
        app = CLIApp("my-tool", version="1.0.0", help_text=HELP)

        @app.command("build", help="Build things")
        def cmd_build(args):
            return 0

        if __name__ == "__main__":
            raise SystemExit(app.run())
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: Optional[str] = None,
        help_text: Optional[str] = None,
        writer: Optional[OutputWriter] = None,
    ):
        """Initialize the CLI application.

        Args:
            name: Program name.
            description: Program description, used when no help text is given.
            version: Version string printed by ``--version``.
            help_text: Full help text printed by ``--help``.
            writer: Console writer for help, version and error output.
        """
        self.name = name
        self.description = description
        self.version = version
        self.help_text = help_text
        self.writer = writer or OutputWriter()
        self._commands: Dict[str, CommandDef] = {}

    def command(
        self,
        name: str,
        *,
        help: str = "",
    ) -> Callable[[CommandFunc], CommandFunc]:
        """Decorator to register a command under an exact name."""
        def decorator(func: CommandFunc) -> CommandFunc:
            self._commands[name] = CommandDef(name=name, func=func, help=help)
            return func
        return decorator

    def build_parser(self) -> argparse.ArgumentParser:
        """Build a permissive parser; unknown flags are left to the caller."""
        parser = ArgumentParser(
            prog=self.name,
            description=self.description,
            add_help=False,
            allow_abbrev=False,
        )
        parser.add_argument("-h", "--help", action="store_true")
        parser.add_argument("-v", "--version", action="store_true")
        parser.add_argument("command", nargs="?")
        parser.add_argument("args", nargs="*")
        return parser

    def render_help(self) -> str:
        if self.help_text is not None:
            return self.help_text
        lines = [f"usage: {self.name} <command>", ""]
        if self.description:
            lines += [self.description, ""]
        for name, cmd_def in self._commands.items():
            lines.append(f"  {name:<20} {cmd_def.help}")
        return "\n".join(lines)

    def print_help(self) -> None:
        self.writer.print(self.render_help())

    def handle_flags(self, args: argparse.Namespace) -> int:
        """Flag-only mode: help and/or version, otherwise help and failure."""
        handled = False
        if args.help:
            self.print_help()
            handled = True
        if args.version:
            self.writer.print(self.version or "")
            handled = True
        if handled:
            return ExitCode.SUCCESS
        self.print_help()
        return ExitCode.ERROR

    def handle_command(self, command: str, args: argparse.Namespace) -> int:
        """Command mode: run the named command, reporting any error it raises."""
        try:
            cmd_def = self._commands.get(command)
            if cmd_def is None:
                raise UsageError(
                    f"Invalid command given '{command}'",
                    hint=f"Run '{self.name} --help' to list the available commands.",
                )
            LOG.debug("running command %s", command)
            return int(cmd_def.func(args))
        except (Exception, KeyboardInterrupt) as e:
            return handle_error(e, verbose=LOG.isEnabledFor(logging.DEBUG))

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Dispatch argv and return the exit code; never exits the process.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:]).
        """
        parser = self.build_parser()
        try:
            args, _unknown = parser.parse_known_args(list(sys.argv[1:] if argv is None else argv))
        except UsageError as e:
            LOG.debug("unparseable arguments: %s", e.message)
            self.print_help()
            return ExitCode.ERROR
        if args.command:
            code = self.handle_command(args.command, args)
        else:
            code = self.handle_flags(args)
        return ExitCode.SUCCESS if code == ExitCode.SUCCESS else ExitCode.ERROR
