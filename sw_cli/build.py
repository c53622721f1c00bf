"""Build delegate: turns an assembled configuration into files on disk.

The CLI only depends on the ``BuildDelegate`` protocol. ``LocalBuildDelegate``
is the bundled implementation: it resolves the glob patterns against the
root directory, revisions every match with an MD5 of its content, and writes
either a manifest script or a precaching service worker.
"""
from __future__ import annotations

import fnmatch
import hashlib
import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import Iterable, List, Optional, Protocol, Union

from core.cli_errors import BuildError

from .config import SWConfig
from .glob_pattern import is_ignored_name

LOG = logging.getLogger(__name__)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")

MANIFEST_TEMPLATE = Template("""\
self.__file_manifest = $manifest;
""")

SERVICE_WORKER_TEMPLATE = Template("""\
/* Generated by sw-cli. Changes will be overwritten on the next build. */
'use strict';

const CACHE_NAME = '$cache_name';
const PRECACHE_MANIFEST = $manifest;

self.addEventListener('install', (event) => {
  event.waitUntil(
    caches.open(CACHE_NAME)
      .then((cache) => cache.addAll(PRECACHE_MANIFEST.map((entry) => entry.url)))
      .then(() => self.skipWaiting())
  );
});

self.addEventListener('activate', (event) => {
  event.waitUntil(
    caches.keys()
      .then((names) => Promise.all(
        names.filter((name) => name !== CACHE_NAME).map((name) => caches.delete(name))
      ))
      .then(() => self.clients.claim())
  );
});

self.addEventListener('fetch', (event) => {
  if (event.request.method !== 'GET') {
    return;
  }
  event.respondWith(
    caches.match(event.request).then((cached) => cached || fetch(event.request))
  );
});
""")


class BuildDelegate(Protocol):
    def generate_service_worker(self, config: SWConfig) -> Path:
        ...

    def generate_file_manifest(self, config: SWConfig) -> Path:
        ...


@dataclass
class ManifestEntry:
    url: str
    revision: str

    def to_dict(self) -> dict:
        return {"url": self.url, "revision": self.revision}


def expand_braces(pattern: str) -> List[str]:
    """``a.{js,css}`` -> ``['a.js', 'a.css']``; groups expand left to right."""
    match = _BRACE_RE.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end():]
    out: List[str] = []
    for option in match.group(1).split(","):
        out.extend(expand_braces(head + option + tail))
    return out


def _normalize(path: str) -> str:
    return os.path.normpath(path).replace(os.sep, "/")


def _to_fnmatch(pattern: str) -> str:
    # fnmatch's ``*`` already crosses directory separators
    return _normalize(pattern).replace("**/", "")


def compile_patterns(patterns: Iterable[str]) -> List[str]:
    out: List[str] = []
    for pattern in patterns:
        out.extend(_to_fnmatch(p) for p in expand_braces(pattern))
    return out


def matches_any(path: str, compiled: Iterable[str]) -> bool:
    candidate = _normalize(path)
    return any(fnmatch.fnmatchcase(candidate, pat) for pat in compiled)


def file_revision(path: Union[str, Path]) -> str:
    h = hashlib.md5()  # noqa: S324 - content fingerprint, not security
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


class LocalBuildDelegate:
    """Writes build artifacts relative to ``cwd``."""

    def __init__(self, cwd: Optional[Union[str, Path]] = None) -> None:
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()

    def _resolve(self, path: str) -> Path:
        return self.cwd / path

    def collect_entries(self, config: SWConfig) -> List[ManifestEntry]:
        """Every file under the root matched by the patterns and not ignored."""
        if not config.root_directory:
            raise BuildError("No root directory was given.")
        if not config.glob_patterns:
            raise BuildError("No glob patterns were given.")
        root = self._resolve(config.root_directory)
        if not root.is_dir():
            raise BuildError(f"Unable to read root directory '{config.root_directory}'.")

        includes = compile_patterns(config.glob_patterns)
        ignores = compile_patterns(config.glob_ignores or [])
        entries: List[ManifestEntry] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not is_ignored_name(d))
            for name in sorted(filenames):
                if is_ignored_name(name):
                    continue
                full = Path(dirpath) / name
                rel_to_cwd = os.path.relpath(full, self.cwd)
                if not matches_any(rel_to_cwd, includes) or matches_any(rel_to_cwd, ignores):
                    continue
                url = _normalize(os.path.relpath(full, root))
                entries.append(ManifestEntry(url=url, revision=file_revision(full)))
        LOG.debug("matched %d files under %s", len(entries), root)
        return entries

    def _write(self, dest: Optional[str], content: str) -> Path:
        if not dest:
            raise BuildError("No output path was given.")
        target = self._resolve(dest)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise BuildError(f"Unable to write {dest}: {exc}") from exc
        return Path(dest)

    def generate_file_manifest(self, config: SWConfig) -> Path:
        entries = self.collect_entries(config)
        manifest = json.dumps([e.to_dict() for e in entries], indent=2)
        return self._write(config.dest, MANIFEST_TEMPLATE.substitute(manifest=manifest))

    def generate_service_worker(self, config: SWConfig) -> Path:
        entries = self.collect_entries(config)
        manifest = json.dumps([e.to_dict() for e in entries], indent=2)
        digest = hashlib.md5(manifest.encode("utf-8")).hexdigest()[:8]  # noqa: S324
        content = SERVICE_WORKER_TEMPLATE.substitute(
            cache_name=f"sw-cli-precache-{digest}",
            manifest=manifest,
        )
        return self._write(config.dest, content)
