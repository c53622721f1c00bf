"""Read and write the saved sw-cli configuration in the working directory."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from core.cli_errors import ConfigError

from .config import SWConfig
from .meta import CONFIG_FILENAME

LOG = logging.getLogger(__name__)


class ConfigStore:
    """YAML-backed store for a single ``SWConfig``."""

    def __init__(
        self,
        directory: Optional[Union[str, Path]] = None,
        filename: str = CONFIG_FILENAME,
    ) -> None:
        self.directory = Path(directory) if directory is not None else Path.cwd()
        self.filename = filename

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    def load(self) -> Optional[SWConfig]:
        """Return the saved configuration, or None if there is none.

        A missing or blank file counts as "nothing saved".
        """
        p = self.path
        if not p.exists():
            LOG.debug("no saved config at %s", p)
            return None
        try:
            text = p.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Unable to read {p}: {exc}") from exc
        if not text.strip():
            return None
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(
                f"Unable to parse {p}",
                hint="Fix or delete the file and run the command again.",
            ) from exc
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ConfigError(f"{p} must contain a mapping at the top level")
        LOG.debug("loaded saved config from %s", p)
        config = SWConfig.from_dict(data)
        config.was_saved = True
        return config

    def save(self, config: SWConfig) -> Path:
        """Write the configuration with stable key ordering for humans."""
        target = self.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(
                yaml.safe_dump(config.to_dict(), sort_keys=False, allow_unicode=True),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ConfigError(f"Unable to write {target}: {exc}") from exc
        LOG.info("saved config to %s", target)
        return target
