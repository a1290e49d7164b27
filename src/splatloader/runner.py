from __future__ import annotations

import contextlib
import logging
import socket
import threading
import time
from dataclasses import dataclass

import uvicorn

from .api import create_api_app
from .loader import RuntimeSplatLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplatServer:
    host: str
    port: int
    url: str


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort probe to determine if a splatloader server is reachable."""

    import httpx

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
    except (httpx.HTTPError, ValueError):
        return False
    if not isinstance(data, dict):
        return False
    return bool(data.get("ok"))


def run(
    loader: RuntimeSplatLoader,
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    log_level: str = "info",
    access_log: bool = False,
) -> SplatServer:
    """Serve `loader`'s renderer slot over HTTP from a background thread.

    Notes:
    - `port=0` means "pick a free port".
    - Uvicorn's per-request access log is off by default because the frontend
      polls `/api/events` frequently.
    """

    if port == 0:
        port = _find_free_port(host)

    app = create_api_app(loader)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    # Give it a moment so a subsequent client probe doesn't race with startup.
    time.sleep(0.05)

    url = f"http://{host}:{port}/"
    logger.info("Serving splat asset at %s", url)
    return SplatServer(host=host, port=port, url=url)
