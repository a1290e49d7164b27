from __future__ import annotations

import argparse
import logging
import sys
import time

from .core.settings import LoaderSettings
from .io.formats import SplatFileLoader
from .loader import SplatHost
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="splatloader", description="splatloader: load a Gaussian splat scene")
    p.add_argument("path", nargs="?", default=None, help="absolute, 'persistent:<rel>' or app-data relative path")
    p.add_argument("--app-data-dir", default=None)
    p.add_argument("--persistent-dir", default=None)
    p.add_argument("--no-load-on-start", action="store_true")
    p.add_argument("--serve", action="store_true", help="serve the loaded asset over HTTP")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--log-file", default=None, help="also write logs to this file")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    settings = LoaderSettings.from_env().with_overrides(
        file_path=args.path,
        app_data_dir=args.app_data_dir,
        persistent_dir=args.persistent_dir,
        load_on_start=False if args.no_load_on_start else None,
    )

    host = SplatHost(format_loader=SplatFileLoader())
    loader = host.create_loader(settings)
    result = loader.start()

    if result is not None:
        if result.ok and result.asset is not None:
            print(f"loaded {result.asset.count} gaussians from {result.resolved_path}")
        else:
            print(f"failed ({result.error.value if result.error else 'unknown'}): {result.message}", file=sys.stderr)

    if not args.serve:
        return 0 if result is None or result.ok else 1

    from .runner import is_server_alive, run

    if args.port != 0 and is_server_alive(f"http://{args.host}:{args.port}"):
        print(f"a server is already running at http://{args.host}:{args.port}", file=sys.stderr)
        return 1

    srv = run(loader, host=args.host, port=args.port)
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
