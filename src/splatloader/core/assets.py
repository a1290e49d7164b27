from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class LoadRequest:
    """A single load attempt for a user-supplied path."""

    raw_path: str

    @property
    def is_empty(self) -> bool:
        return not self.raw_path


def _frozen(arr: np.ndarray | None, dtype: type, width: int | None) -> np.ndarray | None:
    if arr is None:
        return None
    out = np.array(arr, dtype=dtype, copy=True, order="C")
    if width is not None and (out.ndim != 2 or out.shape[1] != width):
        raise ValueError(f"expected shape (N, {width}), got {out.shape}")
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class GaussianSplatAsset:
    """In-memory 3D Gaussian Splat scene.

    Arrays are copied and marked read-only on construction, so a published
    asset can be shared with readers without further locking.

    - positions: float32 (N, 3)
    - sh0: float32 (N, 3), SH DC coefficients (f_dc_0/1/2)
    - opacity: float32 (N,), as stored in the file (usually logit space)
    - scales: float32 (N, 3), as stored in the file (usually log space)
    - rotations: float32 (N, 4), quaternion (w, x, y, z)
    - colors_rgb8: uint8 (N, 3), display colors
    """

    positions: np.ndarray
    sh0: np.ndarray | None = None
    opacity: np.ndarray | None = None
    scales: np.ndarray | None = None
    rotations: np.ndarray | None = None
    colors_rgb8: np.ndarray | None = None
    source_path: str = ""
    format: str = ""

    def __post_init__(self) -> None:
        if self.positions is None:
            raise ValueError("positions is required")
        positions = _frozen(self.positions, np.float32, 3)
        n = positions.shape[0]  # type: ignore[union-attr]

        sh0 = _frozen(self.sh0, np.float32, 3)
        scales = _frozen(self.scales, np.float32, 3)
        rotations = _frozen(self.rotations, np.float32, 4)
        colors = _frozen(self.colors_rgb8, np.uint8, 3)

        opacity = self.opacity
        if opacity is not None:
            opacity = np.array(opacity, dtype=np.float32, copy=True).reshape(-1)
            opacity.setflags(write=False)

        for label, arr in (("sh0", sh0), ("opacity", opacity), ("scales", scales), ("rotations", rotations), ("colors_rgb8", colors)):
            if arr is not None and arr.shape[0] != n:
                raise ValueError(f"{label} has {arr.shape[0]} rows, expected {n}")

        # Frozen dataclass: write through object.__setattr__.
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "sh0", sh0)
        object.__setattr__(self, "opacity", opacity)
        object.__setattr__(self, "scales", scales)
        object.__setattr__(self, "rotations", rotations)
        object.__setattr__(self, "colors_rgb8", colors)

    @property
    def count(self) -> int:
        return int(self.positions.shape[0])

    def bounds(self) -> dict[str, list[float]]:
        if self.positions.size == 0:
            return {"min": [0.0, 0.0, 0.0], "max": [0.0, 0.0, 0.0]}
        return {"min": self.positions.min(axis=0).tolist(), "max": self.positions.max(axis=0).tolist()}

    def packed_gaussians(self) -> np.ndarray:
        """Return an (N, 14) float32 array: xyz, sh0, opacity, scale, rot.

        Missing attributes are filled with zeros, opacity 1 and the identity
        quaternion (1, 0, 0, 0).
        """

        n = self.count
        out = np.zeros((n, 14), dtype="<f4")
        out[:, 0:3] = self.positions
        if self.sh0 is not None:
            out[:, 3:6] = self.sh0
        out[:, 6] = self.opacity if self.opacity is not None else 1.0
        if self.scales is not None:
            out[:, 7:10] = self.scales
        if self.rotations is not None:
            out[:, 10:14] = self.rotations
        else:
            out[:, 10] = 1.0
        return out
