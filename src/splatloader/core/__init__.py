from __future__ import annotations

from .assets import GaussianSplatAsset, LoadRequest
from .errors import LoadErrorKind, LoadResult, UnsupportedFormatError
from .paths import PERSISTENT_PREFIX, PathResolver, resolve_path
from .renderer import SplatRenderer
from .settings import LoaderSettings, parse_bool

__all__ = [
    "GaussianSplatAsset",
    "LoadRequest",
    "LoadErrorKind",
    "LoadResult",
    "UnsupportedFormatError",
    "PERSISTENT_PREFIX",
    "PathResolver",
    "resolve_path",
    "SplatRenderer",
    "LoaderSettings",
    "parse_bool",
]
