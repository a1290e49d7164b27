from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from .paths import PathResolver


ENV_FILE = "SPLATLOADER_FILE"
ENV_LOAD_ON_START = "SPLATLOADER_LOAD_ON_START"
ENV_APP_DATA_DIR = "SPLATLOADER_APP_DATA_DIR"
ENV_PERSISTENT_DIR = "SPLATLOADER_PERSISTENT_DIR"


def parse_bool(value: Any, *, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        raise ValueError(f"Missing {field}")
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid {field}")


def default_app_data_dir() -> str:
    return str(Path.cwd())


def default_persistent_dir() -> str:
    return str(Path.home() / ".splatloader")


@dataclass(frozen=True)
class LoaderSettings:
    """Everything a loader needs before its first load.

    `app_data_dir` and `persistent_dir` are the two host directories used by
    the path resolver. Neither is created or checked here.
    """

    file_path: str = ""
    load_on_start: bool = True
    app_data_dir: str = field(default_factory=default_app_data_dir)
    persistent_dir: str = field(default_factory=default_persistent_dir)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoaderSettings":
        env = os.environ if environ is None else environ
        settings = cls()

        overrides: dict[str, Any] = {}
        if env.get(ENV_FILE):
            overrides["file_path"] = env[ENV_FILE]
        if env.get(ENV_LOAD_ON_START, "").strip():
            overrides["load_on_start"] = parse_bool(env[ENV_LOAD_ON_START], field=ENV_LOAD_ON_START)
        if env.get(ENV_APP_DATA_DIR):
            overrides["app_data_dir"] = str(Path(env[ENV_APP_DATA_DIR]).expanduser())
        if env.get(ENV_PERSISTENT_DIR):
            overrides["persistent_dir"] = str(Path(env[ENV_PERSISTENT_DIR]).expanduser())

        return replace(settings, **overrides)

    def with_overrides(self, **kwargs: Any) -> "LoaderSettings":
        """Return a copy with every non-None keyword applied."""

        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})

    def resolver(self) -> PathResolver:
        return PathResolver(self.app_data_dir, self.persistent_dir)
