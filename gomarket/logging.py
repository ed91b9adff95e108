"""
Logging setup for the cart.

The root handler is installed once, on first import, unless the host
application already configured logging. Product ids and titles come from
the catalog, so they pass through `loggable()` before reaching a log line.

    from gomarket.logging import get_logger, loggable
    logger = get_logger(__name__)
    logger.info(f"Cart: added {loggable(item.id)}")
"""

import logging
import os
import sys
from functools import cache

CART_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
CART_LOG_FORMAT_PLAIN = "%(levelname)s [%(name)s] %(message)s"

# Longest id/title fragment written to a log line
LOG_VALUE_MAX_LENGTH = int(os.environ.get("CART_LOG_VALUE_MAX_LENGTH", "64"))

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _install_handler() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    # Hosted runtimes add their own timestamps
    plain = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(CART_LOG_FORMAT_PLAIN if plain else CART_LOG_FORMAT))
    root.addHandler(handler)

    # upstash-redis issues one httpx request per command
    logging.getLogger("httpx").setLevel(logging.WARNING)


_install_handler()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def loggable(value: object, max_length: int = LOG_VALUE_MAX_LENGTH) -> str:
    """
    Make a catalog value safe for a single log line.

    Control characters are escaped (CWE-117) and long values are cut
    to `max_length` with a trailing "...".
    """
    if value is None or value == "":
        return "N/A"
    text = str(value).translate(_CONTROL_CHARS)
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
