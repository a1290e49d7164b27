from __future__ import annotations

from .core import (
    GaussianSplatAsset,
    LoadErrorKind,
    LoaderSettings,
    LoadRequest,
    LoadResult,
    PathResolver,
    SplatRenderer,
    UnsupportedFormatError,
    resolve_path,
)
from .io import FormatLoader, SplatFileLoader, load_ply_gaussians
from .loader import RuntimeSplatLoader, SplatHost

__all__ = [
    "GaussianSplatAsset",
    "LoadErrorKind",
    "LoaderSettings",
    "LoadRequest",
    "LoadResult",
    "PathResolver",
    "SplatRenderer",
    "UnsupportedFormatError",
    "resolve_path",
    "FormatLoader",
    "SplatFileLoader",
    "load_ply_gaussians",
    "RuntimeSplatLoader",
    "SplatHost",
]
