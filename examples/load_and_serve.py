import logging
import time
from pathlib import Path

from splatloader import LoaderSettings, SplatFileLoader, SplatHost
from splatloader.logging_config import setup_logging
from splatloader.runner import run


def main() -> None:
    setup_logging(logging.INFO)

    assets_dir = Path(__file__).resolve().parent / "assets"
    settings = LoaderSettings(file_path="gaussians.ply", app_data_dir=str(assets_dir))

    host = SplatHost(format_loader=SplatFileLoader())
    loader = host.create_loader(settings)
    result = loader.start()
    if result is None or not result.ok:
        print("Nothing loaded. Put a 3DGS .ply at", assets_dir / "gaussians.ply")

    # Use a fixed port so a frontend dev server can find it.
    server = run(loader, port=57793)
    print(f"Serving at {server.url}. POST /api/asset/reload to swap scenes.")

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
