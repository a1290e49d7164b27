from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .assets import GaussianSplatAsset


class LoadErrorKind(str, Enum):
    """Why a load attempt was aborted.

    None of these are fatal to the process. Each aborts only the current
    attempt and leaves the previously published asset in place.
    """

    COLLABORATOR_MISSING = "collaborator_missing"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    LOAD_FAILED = "load_failed"


class UnsupportedFormatError(ValueError):
    """Raised by the format loader when no reader handles a file suffix."""


@dataclass(frozen=True)
class LoadResult:
    ok: bool
    path: str
    resolved_path: str | None = None
    error: LoadErrorKind | None = None
    message: str = ""
    asset: GaussianSplatAsset | None = None

    @classmethod
    def success(cls, path: str, resolved_path: str, asset: GaussianSplatAsset) -> "LoadResult":
        return cls(ok=True, path=path, resolved_path=resolved_path, asset=asset, message="asset published")

    @classmethod
    def failure(
        cls,
        kind: LoadErrorKind,
        path: str,
        message: str,
        *,
        resolved_path: str | None = None,
    ) -> "LoadResult":
        return cls(ok=False, path=path, resolved_path=resolved_path, error=kind, message=message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": bool(self.ok),
            "path": self.path,
            "resolvedPath": self.resolved_path,
            "error": self.error.value if self.error is not None else None,
            "message": self.message,
            "count": self.asset.count if self.asset is not None else None,
        }
