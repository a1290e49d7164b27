from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field

from .core.assets import GaussianSplatAsset, LoadRequest
from .core.errors import LoadErrorKind, LoadResult
from .core.paths import PathResolver
from .core.renderer import SplatRenderer
from .core.settings import LoaderSettings
from .io.formats import FormatLoader

logger = logging.getLogger(__name__)


@dataclass
class SplatHost:
    """Owning context for co-located components.

    A loader created by `create_loader` gets the host's renderer injected and
    falls back to the host's format loader when none is passed explicitly.
    """

    renderer: SplatRenderer = field(default_factory=SplatRenderer)
    format_loader: FormatLoader | None = None

    def create_loader(
        self,
        settings: LoaderSettings | None = None,
        *,
        format_loader: FormatLoader | None = None,
    ) -> "RuntimeSplatLoader":
        s = settings if settings is not None else LoaderSettings()
        return RuntimeSplatLoader(
            self.renderer,
            file_path=s.file_path,
            format_loader=format_loader,
            load_on_start=s.load_on_start,
            resolver=s.resolver(),
            host=self,
        )


class RuntimeSplatLoader:
    """Load a splat file and publish the resulting asset to a renderer.

    Lifecycle:
    - `initialize()` binds the format loader from the host if none was given
    - `start()` initializes and, when `load_on_start` is set, loads once

    `load_and_assign()` never raises. Every outcome is logged once and also
    returned as a `LoadResult`. A failed attempt leaves the renderer's current
    asset untouched.
    """

    def __init__(
        self,
        renderer: SplatRenderer,
        *,
        file_path: str = "",
        format_loader: FormatLoader | None = None,
        load_on_start: bool = True,
        resolver: PathResolver | None = None,
        host: SplatHost | None = None,
    ) -> None:
        self.renderer = renderer
        self.file_path = file_path
        self.load_on_start = bool(load_on_start)
        self.resolver = resolver if resolver is not None else LoaderSettings().resolver()
        self.host = host
        self._format_loader = format_loader
        self._lock = threading.RLock()
        self._initialized = False

    @property
    def format_loader(self) -> FormatLoader | None:
        return self._format_loader

    def bind_format_loader(self, format_loader: FormatLoader | None) -> None:
        with self._lock:
            self._format_loader = format_loader

    def initialize(self) -> None:
        with self._lock:
            if self._initialized:
                return
            self._initialized = True

            if self._format_loader is None and self.host is not None:
                self._format_loader = self.host.format_loader

            if self._format_loader is None:
                logger.error(
                    "[%s] No format loader bound to this loader. Pass one explicitly or set it on the host.",
                    LoadErrorKind.COLLABORATOR_MISSING.value,
                )

    def start(self) -> LoadResult | None:
        self.initialize()
        if not self.load_on_start:
            return None
        return self.load_and_assign()

    def load_and_assign(self) -> LoadResult:
        with self._lock:
            request = LoadRequest(raw_path=self.file_path or "")
            return self._load_locked(request)

    def set_path_and_reload(self, new_path: str) -> LoadResult:
        with self._lock:
            self.file_path = new_path
            return self.load_and_assign()

    def _fail(
        self,
        kind: LoadErrorKind,
        request: LoadRequest,
        message: str,
        *,
        resolved_path: str | None = None,
    ) -> LoadResult:
        logger.error("[%s] %s (path=%r, resolved=%r)", kind.value, message, request.raw_path, resolved_path)
        return LoadResult.failure(kind, request.raw_path, message, resolved_path=resolved_path)

    def _load_locked(self, request: LoadRequest) -> LoadResult:
        format_loader = self._format_loader
        if format_loader is None:
            return self._fail(LoadErrorKind.COLLABORATOR_MISSING, request, "Format loader is not set")

        if request.is_empty:
            return self._fail(LoadErrorKind.INVALID_INPUT, request, "File path is empty")

        resolved = self.resolver.resolve(request.raw_path)
        if not os.path.isfile(resolved):
            return self._fail(LoadErrorKind.NOT_FOUND, request, "File not found", resolved_path=resolved)

        logger.info(
            "Loading Gaussian splat from %s (%s)", resolved, self.resolver.strategy_for(request.raw_path)
        )

        try:
            asset = format_loader.load_file(resolved)
        except Exception as ex:
            logger.debug("Format loader raised for %s", resolved, exc_info=True)
            return self._fail(
                LoadErrorKind.LOAD_FAILED,
                request,
                f"Format loader raised {type(ex).__name__}: {ex}",
                resolved_path=resolved,
            )

        if asset is None:
            return self._fail(
                LoadErrorKind.LOAD_FAILED, request, "Format loader returned no asset", resolved_path=resolved
            )
        if not isinstance(asset, GaussianSplatAsset):
            return self._fail(
                LoadErrorKind.LOAD_FAILED,
                request,
                f"Format loader returned {type(asset).__name__}, expected GaussianSplatAsset",
                resolved_path=resolved,
            )

        revision = self.renderer.assign(asset)
        logger.info("Published %d gaussians from %s (revision %d)", asset.count, resolved, revision)
        return LoadResult.success(request.raw_path, resolved, asset)
