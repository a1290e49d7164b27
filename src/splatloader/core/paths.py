from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


PERSISTENT_PREFIX = "persistent:"


@dataclass(frozen=True)
class PrefixStrategy:
    prefix: str
    name: str
    base_dir: str


class PathResolver:
    """Turn a user-supplied path into an absolute filesystem path.

    Rules, in order:
    - absolute paths are returned unchanged
    - `<prefix>:rest` is joined onto the base dir registered for that prefix
      (`persistent:` is always registered)
    - anything else is joined onto the application data directory

    This never touches the filesystem. The returned path may not exist.
    """

    def __init__(self, app_data_dir: str | Path, persistent_dir: str | Path) -> None:
        self.app_data_dir = str(app_data_dir)
        self._strategies: dict[str, PrefixStrategy] = {}
        self.register_prefix(PERSISTENT_PREFIX, persistent_dir, name="persistent")

    @property
    def persistent_dir(self) -> str:
        return self._strategies[PERSISTENT_PREFIX].base_dir

    def register_prefix(self, prefix: str, base_dir: str | Path, *, name: str | None = None) -> None:
        p = str(prefix)
        if not p:
            raise ValueError("prefix cannot be empty")
        label = name if name is not None else p.rstrip(":")
        self._strategies[p] = PrefixStrategy(prefix=p, name=label, base_dir=str(base_dir))

    def strategy_for(self, raw_path: str) -> str:
        if os.path.isabs(raw_path):
            return "absolute"
        match = self._match_prefix(raw_path)
        if match is not None:
            return match.name
        return "app_data"

    def resolve(self, raw_path: str) -> str:
        if os.path.isabs(raw_path):
            return raw_path

        match = self._match_prefix(raw_path)
        if match is not None:
            return os.path.join(match.base_dir, raw_path[len(match.prefix) :])

        return os.path.join(self.app_data_dir, raw_path)

    def _match_prefix(self, raw_path: str) -> PrefixStrategy | None:
        # Longest prefix wins so "persistent:cache:" can shadow "persistent:".
        for prefix in sorted(self._strategies, key=len, reverse=True):
            if raw_path.startswith(prefix):
                return self._strategies[prefix]
        return None


def resolve_path(raw_path: str, *, app_data_dir: str | Path, persistent_dir: str | Path) -> str:
    """One-shot helper around `PathResolver.resolve`."""

    return PathResolver(app_data_dir, persistent_dir).resolve(raw_path)
