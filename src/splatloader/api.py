from __future__ import annotations

from typing import Any

import numpy as np
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core.assets import GaussianSplatAsset
from .core.errors import LoadErrorKind, LoadResult
from .loader import RuntimeSplatLoader


_STATUS_FOR_ERROR: dict[LoadErrorKind, int] = {
    LoadErrorKind.INVALID_INPUT: 422,
    LoadErrorKind.NOT_FOUND: 404,
    LoadErrorKind.COLLABORATOR_MISSING: 500,
    LoadErrorKind.LOAD_FAILED: 500,
}


def asset_to_meta(asset: GaussianSplatAsset, *, revision: int) -> dict[str, Any]:
    schema = {
        "position": {"type": "float32", "components": 3},
        "sh0": {"type": "float32", "components": 3},
        "opacity": {"type": "float32", "components": 1},
        "scale": {"type": "float32", "components": 3},
        "rotation": {"type": "float32", "components": 4},
    }
    return {
        "revision": int(revision),
        "count": asset.count,
        "format": asset.format,
        "sourcePath": asset.source_path,
        "bounds": asset.bounds(),
        "endianness": "little",
        "bytesPerGaussian": 14 * 4,
        "hasColors": asset.colors_rgb8 is not None,
        "schema": schema,
        "payloads": {
            "gaussians": {
                "url": "/api/asset/payload",
                "contentType": "application/octet-stream",
            }
        },
    }


def _result_response(result: LoadResult) -> JSONResponse:
    status = 200 if result.ok or result.error is None else _STATUS_FOR_ERROR[result.error]
    return JSONResponse(status_code=status, content=result.to_dict())


def create_api_app(loader: RuntimeSplatLoader) -> FastAPI:
    """HTTP surface over one loader and its renderer slot.

    The frontend polls `/api/events` and refetches meta + payload whenever the
    revision changes.
    """

    app = FastAPI(title="splatloader", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    renderer = loader.renderer

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        return {"revision": renderer.revision}

    @app.get("/api/asset/meta")
    def get_asset_meta() -> dict[str, Any]:
        asset, revision = renderer.snapshot()
        if asset is None:
            raise HTTPException(status_code=404, detail="No asset loaded")
        return asset_to_meta(asset, revision=revision)

    @app.get("/api/asset/payload")
    def get_asset_payload() -> Response:
        asset = renderer.current_asset
        if asset is None:
            raise HTTPException(status_code=404, detail="No asset loaded")
        data = np.ascontiguousarray(asset.packed_gaussians(), dtype="<f4")
        return Response(content=data.tobytes(order="C"), media_type="application/octet-stream")

    @app.post("/api/asset/reload")
    def reload_asset(body: dict | None = None) -> JSONResponse:
        path = (body or {}).get("path")
        if path is not None and not isinstance(path, str):
            raise HTTPException(status_code=400, detail="path must be a string")

        if path is None:
            result = loader.load_and_assign()
        else:
            result = loader.set_path_and_reload(path)
        return _result_response(result)

    return app
