"""Interactive questions asked while assembling a build configuration.

Workflows only see the ``Questioner`` protocol so tests can script answers;
``ClickQuestioner`` is the terminal implementation built on click prompts.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

import click

from core.cli_errors import PromptAborted

from .glob_pattern import is_ignored_name
from .meta import DEFAULT_MANIFEST_NAME, DEFAULT_SW_NAME

LOG = logging.getLogger(__name__)

MANUAL_ENTRY = "Manually enter a path"


class Questioner(Protocol):
    def ask_root_of_web_app(self) -> str:
        ...

    def ask_extensions_to_cache(self, root_directory: str) -> List[str]:
        ...

    def ask_save_config(self) -> bool:
        ...

    def ask_manifest_name(self) -> str:
        ...

    def ask_sw_name(self) -> str:
        ...


def list_candidate_directories(cwd: Union[str, Path]) -> List[str]:
    """Sub-directories of ``cwd`` worth offering as a web-app root."""
    base = Path(cwd)
    names = [
        p.name
        for p in base.iterdir()
        if p.is_dir() and not is_ignored_name(p.name)
    ]
    return sorted(names)


def find_file_extensions(root_directory: Union[str, Path]) -> List[str]:
    """Every file extension found under the root, hidden entries skipped."""
    found = set()
    for dirpath, dirnames, filenames in os.walk(root_directory):
        dirnames[:] = [d for d in dirnames if not is_ignored_name(d)]
        for name in filenames:
            if is_ignored_name(name):
                continue
            ext = os.path.splitext(name)[1].lstrip(".")
            if ext:
                found.add(ext)
    return sorted(found)


def parse_selection(raw: str, choices: Sequence[str]) -> List[str]:
    """Turn ``"1,3"`` or ``"js css"`` into the chosen entries.

    Numbers index ``choices`` from 1; names must be one of ``choices``.
    Raises ``click.BadParameter`` so click re-asks the question.
    """
    tokens = [t for t in raw.replace(",", " ").split() if t]
    if not tokens:
        raise click.BadParameter("Select at least one entry.")
    picked: List[str] = []
    for tok in tokens:
        if tok.isdigit():
            idx = int(tok)
            if not 1 <= idx <= len(choices):
                raise click.BadParameter(f"{idx} is not between 1 and {len(choices)}.")
            value = choices[idx - 1]
        else:
            value = tok.lstrip(".")
            if value not in choices:
                raise click.BadParameter(f"'{tok}' is not one of the listed entries.")
        if value not in picked:
            picked.append(value)
    return picked


def validate_filename(raw: str) -> str:
    name = raw.strip()
    if not name:
        raise click.BadParameter("Please provide a file name.")
    if "/" in name or os.sep in name:
        raise click.BadParameter("The file name must not contain a path separator.")
    return name


class ClickQuestioner:
    """Asks each question on the terminal."""

    def __init__(self, cwd: Optional[Union[str, Path]] = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    # click raises Abort on Ctrl+C and end of input
    def _prompt(self, text: str, **kwargs) -> str:
        try:
            return click.prompt(text, **kwargs)
        except click.Abort as exc:
            raise PromptAborted() from exc

    def _confirm(self, text: str, default: bool) -> bool:
        try:
            return click.confirm(text, default=default)
        except click.Abort as exc:
            raise PromptAborted() from exc

    def _print_choices(self, choices: Sequence[str]) -> None:
        for i, choice in enumerate(choices, start=1):
            click.echo(f"  {i}) {choice}")

    def ask_root_of_web_app(self) -> str:
        directories = list_candidate_directories(self.cwd)
        manual_text = "Please enter the path to the root of your web app"
        if not directories:
            return self._prompt(manual_text, default="", show_default=False)

        choices = directories + [MANUAL_ENTRY]
        click.echo("What is the root of your web app?")
        self._print_choices(choices)
        picked = self._prompt(
            "Select a directory",
            type=click.IntRange(1, len(choices)),
        )
        answer = choices[picked - 1]
        if answer == MANUAL_ENTRY:
            return self._prompt(manual_text, default="", show_default=False)
        return answer

    def ask_extensions_to_cache(self, root_directory: str) -> List[str]:
        root = self.cwd / root_directory
        extensions = find_file_extensions(root)
        if not extensions:
            raise PromptAborted(
                f"Unable to find any files in '{root_directory}'.",
                hint="Check that the root directory contains your built web app.",
            )
        LOG.debug("extensions found under %s: %s", root, extensions)
        click.echo("Which file types would you like to cache?")
        self._print_choices(extensions)
        return self._prompt(
            "Select one or more (numbers or names, comma separated)",
            default=",".join(str(i) for i in range(1, len(extensions) + 1)),
            show_default=False,
            value_proc=lambda raw: parse_selection(raw, extensions),
        )

    def ask_save_config(self) -> bool:
        return self._confirm(
            "Would you like to save these settings to a config file?", default=True
        )

    def ask_manifest_name(self) -> str:
        return self._prompt(
            "What should we name the file manifest?",
            default=DEFAULT_MANIFEST_NAME,
            value_proc=validate_filename,
        )

    def ask_sw_name(self) -> str:
        return self._prompt(
            "What should we name your service worker file?",
            default=DEFAULT_SW_NAME,
            value_proc=validate_filename,
        )
