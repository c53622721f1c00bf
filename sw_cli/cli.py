"""sw-cli command-line entry point.

Commands:
    generate:sw        Ask for (or load) a build configuration and write a service worker.
    generate:manifest  Ask for a build configuration and write a file manifest.
"""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

from core.cli_errors import ExitCode
from core.cli_framework import CLIApp
from core.cli_output import OutputConfig, OutputWriter
from core.pipeline import run_pipeline

from . import __version__
from .build import BuildDelegate, LocalBuildDelegate
from .meta import APP_ID, HELP_FILENAME, LOG_LEVEL_ENV, NO_COLOR_ENV, PURPOSE
from .questions import ClickQuestioner, Questioner
from .workflows import (
    GenerateManifestProcessor,
    GenerateProducer,
    GenerateRequest,
    GenerateSWProcessor,
)


def load_help_text() -> str:
    return (Path(__file__).parent / HELP_FILENAME).read_text(encoding="utf-8")


app = CLIApp(
    APP_ID,
    PURPOSE,
    version=__version__,
    help_text=load_help_text(),
    writer=OutputWriter(OutputConfig(no_color=bool(os.environ.get(NO_COLOR_ENV)))),
)

# Swapped out by tests to script answers and capture builds.
questioner_factory: Callable[[Path], Questioner] = ClickQuestioner
delegate_factory: Callable[[Path], BuildDelegate] = LocalBuildDelegate


def _run_generate(processor, cwd: Path) -> int:
    envelope = run_pipeline(GenerateRequest(cwd=cwd), processor, GenerateProducer(app.writer))
    if envelope.ok():
        return ExitCode.SUCCESS
    raise envelope.error or RuntimeError((envelope.diagnostics or {}).get("message", "failed"))


@app.command("generate:sw", help="Generate a service worker that precaches your web app")
def cmd_generate_sw(args: argparse.Namespace) -> int:
    cwd = Path.cwd()
    processor = GenerateSWProcessor(
        questioner=questioner_factory(cwd),
        delegate=delegate_factory(cwd),
    )
    return _run_generate(processor, cwd)


@app.command("generate:manifest", help="Generate a revisioned file manifest for precaching")
def cmd_generate_manifest(args: argparse.Namespace) -> int:
    cwd = Path.cwd()
    processor = GenerateManifestProcessor(
        questioner=questioner_factory(cwd),
        delegate=delegate_factory(cwd),
    )
    return _run_generate(processor, cwd)


def configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    configure_logging()
    return int(app.run(argv))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
