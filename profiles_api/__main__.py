from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from .config import Settings
from .main import create_app


def main(argv: Optional[List[str]] = None) -> None:
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        prog="profiles_api",
        description="Serve the chat profiles API",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger("profiles_api")

    settings.host = args.host
    settings.port = args.port

    ssl_kwargs = {}
    if settings.tls_enabled:
        ssl_kwargs = {"ssl_keyfile": settings.ssl_keyfile, "ssl_certfile": settings.ssl_certfile}
        log.info("HTTPS server running on port %s", settings.port)
    else:
        log.warning("TLS key/cert not configured; serving plain HTTP on port %s", settings.port)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        **ssl_kwargs,
    )


if __name__ == "__main__":
    main()
