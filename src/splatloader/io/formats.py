from __future__ import annotations

import logging
import os
import threading
from typing import Callable, Protocol, runtime_checkable

from ..core.assets import GaussianSplatAsset
from ..core.errors import UnsupportedFormatError

logger = logging.getLogger(__name__)

Reader = Callable[[str], GaussianSplatAsset | None]


@runtime_checkable
class FormatLoader(Protocol):
    """Parses one file into an asset. Returns None or raises on failure."""

    def load_file(self, path: str) -> GaussianSplatAsset | None: ...


def _normalize_suffix(suffix: str) -> str:
    s = str(suffix).strip().lower()
    if not s:
        raise ValueError("suffix cannot be empty")
    return s if s.startswith(".") else "." + s


def _default_ply_reader(path: str) -> GaussianSplatAsset:
    from .ply import load_ply_gaussians

    return load_ply_gaussians(path)


class SplatFileLoader:
    """Format loader that dispatches on the file suffix.

    `.ply` is handled out of the box. Other formats (e.g. `.spz`) need a
    reader registered with `register_reader`.
    """

    def __init__(self, readers: dict[str, Reader] | None = None) -> None:
        self._lock = threading.RLock()
        self._readers: dict[str, Reader] = {".ply": _default_ply_reader}
        for suffix, reader in (readers or {}).items():
            self.register_reader(suffix, reader)

    def register_reader(self, suffix: str, reader: Reader) -> None:
        with self._lock:
            self._readers[_normalize_suffix(suffix)] = reader

    def supported_suffixes(self) -> list[str]:
        with self._lock:
            return sorted(self._readers)

    def reader_for(self, path: str) -> Reader:
        suffix = os.path.splitext(path)[1].lower()
        with self._lock:
            reader = self._readers.get(suffix)
        if reader is None:
            raise UnsupportedFormatError(
                f"No reader registered for '{suffix or '<no suffix>'}' "
                f"(supported: {', '.join(self.supported_suffixes())})"
            )
        return reader

    def load_file(self, path: str) -> GaussianSplatAsset | None:
        reader = self.reader_for(path)
        logger.debug("Reading %s with %s", path, getattr(reader, "__name__", repr(reader)))
        return reader(path)
