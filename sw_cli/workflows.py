"""The generate:sw and generate:manifest workflows.

A workflow is a list of steps over one ``SWConfig`` accumulator. Each step
fills in the field it owns when it is still unset and returns the config, so
a saved configuration short-circuits every question it already answers.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from core.cli_output import OutputWriter
from core.pipeline import BaseProducer, ResultEnvelope

from .build import BuildDelegate
from .config import SWConfig
from .config_store import ConfigStore
from .glob_pattern import generate_glob_pattern
from .questions import Questioner

LOG = logging.getLogger(__name__)


@dataclass
class WorkflowContext:
    questioner: Questioner
    store: ConfigStore
    cwd: Path = field(default_factory=Path.cwd)


Step = Callable[[SWConfig, WorkflowContext], SWConfig]


def normalize_root_directory(answer: str, cwd: os.PathLike | str) -> str:
    """Make a root answer relative to ``cwd`` and end it with a separator.

    ``''`` gives ``./`` and ``'build'`` gives ``./build/``.
    """
    target = os.path.abspath(os.path.join(cwd, answer))
    rel = os.path.relpath(target, cwd)
    if rel == os.curdir:
        return os.curdir + os.sep
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        return rel + os.sep
    return os.curdir + os.sep + rel + os.sep


def load_saved_config(config: SWConfig, ctx: WorkflowContext) -> SWConfig:
    saved = ctx.store.load()
    if saved is None:
        return config
    LOG.info("using saved configuration from %s", ctx.store.path)
    return saved


def resolve_root_directory(config: SWConfig, ctx: WorkflowContext) -> SWConfig:
    if not config.root_directory:
        answer = ctx.questioner.ask_root_of_web_app()
        config.root_directory = normalize_root_directory(answer, ctx.cwd)
    return config


def resolve_glob_patterns(config: SWConfig, ctx: WorkflowContext) -> SWConfig:
    if not config.glob_patterns:
        extensions = ctx.questioner.ask_extensions_to_cache(config.root_directory)
        config.glob_patterns = [generate_glob_pattern(config.root_directory, extensions)]
    return config


def resolve_dest(config: SWConfig, ctx: WorkflowContext) -> SWConfig:
    if not config.dest:
        sw_name = ctx.questioner.ask_sw_name()
        dest = os.path.join(config.root_directory, sw_name)
        config.dest = dest
        config.glob_ignores = [dest]
    elif config.dest not in (config.glob_ignores or []):
        # saved files from older runs may lack the ignore entry
        config.glob_ignores = list(config.glob_ignores or []) + [config.dest]
    return config


def offer_to_save(config: SWConfig, ctx: WorkflowContext) -> SWConfig:
    if not config.was_saved and ctx.questioner.ask_save_config():
        ctx.store.save(config)
    return config


GENERATE_SW_STEPS: Sequence[Step] = (
    load_saved_config,
    resolve_root_directory,
    resolve_glob_patterns,
    resolve_dest,
    offer_to_save,
)


def run_steps(steps: Sequence[Step], ctx: WorkflowContext, config: Optional[SWConfig] = None) -> SWConfig:
    config = config or SWConfig()
    for step in steps:
        config = step(config, ctx)
    return config


def assemble_manifest_config(ctx: WorkflowContext) -> SWConfig:
    """Ask every manifest question; saved configuration is not consulted."""
    q = ctx.questioner
    root_directory = normalize_root_directory(q.ask_root_of_web_app(), ctx.cwd)
    extensions = q.ask_extensions_to_cache(root_directory)
    manifest_name = q.ask_manifest_name()
    manifest_path = os.path.join(root_directory, manifest_name)
    return SWConfig(
        root_directory=root_directory,
        glob_patterns=[generate_glob_pattern(root_directory, extensions)],
        glob_ignores=[manifest_path],
        dest=manifest_path,
    )


@dataclass
class GenerateRequest:
    cwd: Path


@dataclass
class GenerateResult:
    config: SWConfig
    output_path: Path
    kind: str


def _failure(exc: BaseException) -> ResultEnvelope[GenerateResult]:
    return ResultEnvelope(status="error", diagnostics={"message": str(exc)}, error=exc)


class GenerateSWProcessor:
    def __init__(self, questioner: Questioner, delegate: BuildDelegate, store: Optional[ConfigStore] = None) -> None:
        self._questioner = questioner
        self._delegate = delegate
        self._store = store

    def process(self, payload: GenerateRequest) -> ResultEnvelope[GenerateResult]:
        ctx = WorkflowContext(
            questioner=self._questioner,
            store=self._store or ConfigStore(payload.cwd),
            cwd=payload.cwd,
        )
        try:
            config = run_steps(GENERATE_SW_STEPS, ctx)
            output_path = self._delegate.generate_service_worker(config)
        except (Exception, KeyboardInterrupt) as exc:
            return _failure(exc)
        return ResultEnvelope(
            status="success",
            payload=GenerateResult(config=config, output_path=output_path, kind="service worker"),
        )


class GenerateManifestProcessor:
    def __init__(self, questioner: Questioner, delegate: BuildDelegate) -> None:
        self._questioner = questioner
        self._delegate = delegate

    def process(self, payload: GenerateRequest) -> ResultEnvelope[GenerateResult]:
        ctx = WorkflowContext(
            questioner=self._questioner,
            store=ConfigStore(payload.cwd),
            cwd=payload.cwd,
        )
        try:
            config = assemble_manifest_config(ctx)
            output_path = self._delegate.generate_file_manifest(config)
        except (Exception, KeyboardInterrupt) as exc:
            return _failure(exc)
        return ResultEnvelope(
            status="success",
            payload=GenerateResult(config=config, output_path=output_path, kind="file manifest"),
        )


class GenerateProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self._writer = writer or OutputWriter()

    def _produce_success(self, payload: GenerateResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        self._writer.print_success(f"Wrote {payload.kind} to {payload.output_path}")
        for pattern in payload.config.glob_patterns or []:
            LOG.debug("precached pattern %s", pattern)
