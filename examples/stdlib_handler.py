"""Example routing the standard library logging module through MozLog JSON.

Run with:
    python examples/stdlib_handler.py
"""

import logging
import sys

from mozlog_json import MozLogHandler, MozLogJson, kv

drain = MozLogJson.new(sys.stderr).logger_name("stdlib-example").build()
handler = MozLogHandler(drain, values=kv(service="billing"), include_attrs=["logger"])

logging.basicConfig(level=logging.DEBUG, handlers=[handler])
logger = logging.getLogger("billing.charges")


def main() -> None:
    """Log records with extras and an exception."""
    logger.info("charge created", extra={"amount": 12.5, "currency": "EUR"})
    try:
        raise TimeoutError("gateway timed out")
    except TimeoutError:
        logger.exception("charge failed", extra={"attempt": 3})


if __name__ == "__main__":
    main()
