from __future__ import annotations

import logging
import sys

_INITIALIZED = False


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stderr; stdout belongs to the MCP stdio transport."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(handler)

    # request lines from httpx would otherwise include every frame URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())


__all__ = ["configure_logging"]
