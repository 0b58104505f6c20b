"""
Album Catalog: Console Entry Point
====================================

What:  `album-catalog` command: validates the listen port, then serves the
       app with uvicorn on 0.0.0.0:<port> (default 8117).
How:   The port env var is checked before the settings are loaded so an
       invalid value produces a clear fatal message and exit status 1.

Proxy forwarding headers are never trusted; client addresses in logs are
the direct peer.
"""

import logging
import os
import sys
from typing import Optional

import uvicorn
from pydantic import ValidationError as SettingsValidationError

logger = logging.getLogger("album_catalog.cli")

PORT_ENV_VARS = ("listenPort", "LISTEN_PORT")


def is_valid_port(value: Optional[str]) -> bool:
    """Return True when `value` is an integer string within 1-65535."""
    if value is None:
        return False
    try:
        port = int(value)
    except ValueError:
        return False
    return 1 <= port <= 65535


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    for name in PORT_ENV_VARS:
        raw = os.environ.get(name)
        if raw is not None and not is_valid_port(raw):
            logger.critical("ERROR! listenPort is invalid. Currently set to: `%s`", raw)
            return 1

    try:
        from album_catalog.config import Settings

        cli_settings = Settings()
    except SettingsValidationError as exc:
        logger.critical("ERROR! Configuration is invalid:\n%s", exc)
        return 1

    logger.info("Currently listening on %s", cli_settings.listen_address)
    uvicorn.run(
        "album_catalog.main:app",
        host=cli_settings.listen_host,
        port=cli_settings.listen_port,
        proxy_headers=False,
        access_log=False,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
