from __future__ import annotations

from pathlib import Path

import numpy as np

from ..core.assets import GaussianSplatAsset


# Zeroth-order spherical harmonic basis constant.
SH_C0 = 0.28209479177387814


def _stack(v: np.ndarray, keys: tuple[str, ...]) -> np.ndarray:
    out = np.stack([v[k] for k in keys], axis=1).astype(np.float32, copy=False)
    return np.ascontiguousarray(out, dtype=np.float32)


def sh0_to_rgb8(sh0: np.ndarray) -> np.ndarray:
    rgb01 = np.clip(0.5 + SH_C0 * sh0, 0.0, 1.0)
    return np.ascontiguousarray(rgb01 * 255.0, dtype=np.uint8)


def _plain_colors(v: np.ndarray, names: set[str]) -> np.ndarray | None:
    color_keys: tuple[str, str, str] | None = None
    if {"red", "green", "blue"}.issubset(names):
        color_keys = ("red", "green", "blue")
    elif {"r", "g", "b"}.issubset(names):
        color_keys = ("r", "g", "b")
    if color_keys is None:
        return None

    c = np.stack([v[k] for k in color_keys], axis=1)

    # Normalize a few common encodings.
    if np.issubdtype(c.dtype, np.floating):
        c = np.clip(c, 0.0, 1.0) * 255.0
    else:
        cmax = float(np.max(c)) if c.size else 0.0
        if 0.0 < cmax <= 1.0:
            c = c.astype(np.float32) * 255.0

    return np.ascontiguousarray(c, dtype=np.uint8)


def load_ply_gaussians(path: str | Path) -> GaussianSplatAsset:
    """Load a 3D Gaussian Splat PLY.

    Parses the common 3DGS vertex schema: x/y/z plus optional f_dc_0/1/2,
    opacity, scale_0/1/2 and rot_0/1/2/3. Plain point clouds (x/y/z with
    optional red/green/blue) load too; they just carry no splat attributes.

    Display colors come from the SH DC term when present, otherwise from the
    vertex colors.
    """

    # Import lazily so the package stays importable without the PLY extra.
    try:
        from plyfile import PlyData  # type: ignore
    except ModuleNotFoundError as e:
        raise ModuleNotFoundError(
            "PLY loading requires the optional dependency 'plyfile'. "
            "Install it with: pip install 'splatloader[ply]' (or just pip install plyfile)."
        ) from e

    p = Path(path)
    ply = PlyData.read(str(p))

    if "vertex" not in ply:
        raise ValueError("PLY file has no 'vertex' element")

    v = ply["vertex"].data
    names = set(v.dtype.names or ())

    for k in ("x", "y", "z"):
        if k not in names:
            raise ValueError(f"PLY vertex element missing required property '{k}'")

    positions = _stack(v, ("x", "y", "z"))

    sh0: np.ndarray | None = None
    if {"f_dc_0", "f_dc_1", "f_dc_2"}.issubset(names):
        sh0 = _stack(v, ("f_dc_0", "f_dc_1", "f_dc_2"))

    opacity: np.ndarray | None = None
    if "opacity" in names:
        opacity = np.ascontiguousarray(v["opacity"], dtype=np.float32)

    scales: np.ndarray | None = None
    if {"scale_0", "scale_1", "scale_2"}.issubset(names):
        scales = _stack(v, ("scale_0", "scale_1", "scale_2"))

    rotations: np.ndarray | None = None
    if {"rot_0", "rot_1", "rot_2", "rot_3"}.issubset(names):
        rotations = _stack(v, ("rot_0", "rot_1", "rot_2", "rot_3"))

    colors_rgb8 = sh0_to_rgb8(sh0) if sh0 is not None else _plain_colors(v, names)

    return GaussianSplatAsset(
        positions=positions,
        sh0=sh0,
        opacity=opacity,
        scales=scales,
        rotations=rotations,
        colors_rgb8=colors_rgb8,
        source_path=str(p),
        format="ply",
    )
