from __future__ import annotations

import threading

from .assets import GaussianSplatAsset


class SplatRenderer:
    """Consumer side of a load: holds at most one published asset.

    `current_asset` is either None or a fully constructed asset. The slot is
    written with a single assignment under the lock, so readers observe the
    old asset or the new one and nothing in between.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._asset: GaussianSplatAsset | None = None
        self._revision = 0

    @property
    def current_asset(self) -> GaussianSplatAsset | None:
        with self._lock:
            return self._asset

    @current_asset.setter
    def current_asset(self, asset: GaussianSplatAsset | None) -> None:
        self.assign(asset)

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    def assign(self, asset: GaussianSplatAsset | None) -> int:
        """Replace the slot and return the new revision."""

        with self._lock:
            self._asset = asset
            self._revision += 1
            return self._revision

    def snapshot(self) -> tuple[GaussianSplatAsset | None, int]:
        with self._lock:
            return self._asset, self._revision
