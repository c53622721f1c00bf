from __future__ import annotations

import os
from typing import Iterable, List

from .meta import IGNORED_DIRECTORIES


def is_ignored_name(name: str) -> bool:
    """Hidden entries and dependency folders never belong to a web app."""
    return name.startswith(".") or name in IGNORED_DIRECTORIES


def normalize_extensions(extensions: Iterable[str]) -> List[str]:
    """Strip leading dots and blanks, drop duplicates, keep first-seen order."""
    seen: List[str] = []
    for ext in extensions:
        ext = str(ext).strip().lstrip(".")
        if ext and ext not in seen:
            seen.append(ext)
    return seen


def generate_glob_pattern(root_directory: str, extensions: Iterable[str]) -> str:
    """Build one glob matching every file under the root with a given extension.

    ``('./build/', ['js', 'css'])`` gives ``./build/**/*.{js,css}``; a single
    extension drops the braces.
    """
    exts = normalize_extensions(extensions)
    if not exts:
        raise ValueError("At least one file extension is required")
    pattern = os.path.join(root_directory, "**", "*")
    if len(exts) == 1:
        return f"{pattern}.{exts[0]}"
    return f"{pattern}.{{{','.join(exts)}}}"
