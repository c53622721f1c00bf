"""Shared test fixtures and utilities.

Scripted stand-ins for the interactive questioner and the build delegate,
plus small helpers for running the CLI inside a temporary directory.
"""

from __future__ import annotations

import importlib.util
import io
import os
import subprocess
import sys
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from core.cli_errors import BuildError
from sw_cli.config import SWConfig

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Path / process helpers
# -----------------------------------------------------------------------------


def repo_path(*parts: str) -> Path:
    return REPO_ROOT.joinpath(*parts)


def run(cmd: Sequence[str], cwd: Optional[str] = None):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(cmd, cwd=cwd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, env=env)  # noqa: S603


def run_module(*args: str, cwd: Optional[str] = None):
    return run([sys.executable, "-m", "sw_cli", *args], cwd=cwd)


def has_pyyaml() -> bool:
    try:
        return importlib.util.find_spec("yaml") is not None
    except Exception:
        return False


@contextmanager
def chdir(path: os.PathLike | str) -> Iterator[Path]:
    """Temporarily switch the working directory."""
    prev = os.getcwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(prev)


def make_tree(root: Path, files: Dict[str, str]) -> None:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_output() -> Iterator[Tuple[io.StringIO, io.StringIO]]:
    """Capture stdout and stderr together."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err


# -----------------------------------------------------------------------------
# Questioner / build delegate fakes
# -----------------------------------------------------------------------------


@dataclass
class ScriptedQuestioner:
    """Answers each question from a preset value and records what was asked.

    An answer that is an exception instance is raised instead of returned.
    """

    root: object = ""
    extensions: object = field(default_factory=lambda: ["html"])
    sw_name: object = "sw.js"
    manifest_name: object = "manifest.js"
    save: object = False
    asked: List[str] = field(default_factory=list)
    extension_roots: List[str] = field(default_factory=list)

    def _answer(self, question: str, value):
        self.asked.append(question)
        if isinstance(value, BaseException):
            raise value
        return value

    def ask_root_of_web_app(self) -> str:
        return self._answer("root", self.root)

    def ask_extensions_to_cache(self, root_directory: str) -> List[str]:
        self.extension_roots.append(root_directory)
        return list(self._answer("extensions", self.extensions))

    def ask_save_config(self) -> bool:
        return self._answer("save", self.save)

    def ask_manifest_name(self) -> str:
        return self._answer("manifest_name", self.manifest_name)

    def ask_sw_name(self) -> str:
        return self._answer("sw_name", self.sw_name)


@dataclass
class FakeBuildDelegate:
    """Records the configurations it is asked to build."""

    fail_with: Optional[BaseException] = None
    sw_calls: List[SWConfig] = field(default_factory=list)
    manifest_calls: List[SWConfig] = field(default_factory=list)

    def generate_service_worker(self, config: SWConfig) -> Path:
        self.sw_calls.append(config)
        if self.fail_with is not None:
            raise self.fail_with
        return Path(config.dest or "")

    def generate_file_manifest(self, config: SWConfig) -> Path:
        self.manifest_calls.append(config)
        if self.fail_with is not None:
            raise self.fail_with
        return Path(config.dest or "")


def failing_delegate(message: str = "Unable to read root directory") -> FakeBuildDelegate:
    return FakeBuildDelegate(fail_with=BuildError(message))
