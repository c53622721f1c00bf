"""The configuration record threaded through one sw-cli run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _as_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class SWConfig:
    """Build configuration, filled in field by field as answers arrive.

    Unset fields are ``None``; ``was_saved`` marks a configuration that came
    from the config file and is never written back to it.
    """

    root_directory: Optional[str] = None
    glob_patterns: Optional[List[str]] = None
    glob_ignores: Optional[List[str]] = None
    dest: Optional[str] = None
    was_saved: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SWConfig":
        """Build from the camelCase mapping stored on disk.

        Keys this CLI does not prompt for are kept in ``extra`` and handed to
        the build delegate untouched.
        """
        known = {"rootDirectory", "globPatterns", "globIgnores", "dest", "wasSaved"}
        return cls(
            root_directory=data.get("rootDirectory") or None,
            glob_patterns=_as_list(data.get("globPatterns")),
            glob_ignores=_as_list(data.get("globIgnores")),
            dest=data.get("dest") or None,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.root_directory is not None:
            out["rootDirectory"] = self.root_directory
        if self.glob_patterns is not None:
            out["globPatterns"] = list(self.glob_patterns)
        if self.glob_ignores is not None:
            out["globIgnores"] = list(self.glob_ignores)
        if self.dest is not None:
            out["dest"] = self.dest
        out.update(self.extra)
        return out
