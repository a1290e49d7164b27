from __future__ import annotations

from .formats import FormatLoader, Reader, SplatFileLoader
from .ply import SH_C0, load_ply_gaussians, sh0_to_rgb8

__all__ = [
    "FormatLoader",
    "Reader",
    "SplatFileLoader",
    "SH_C0",
    "load_ply_gaussians",
    "sh0_to_rgb8",
]
